"""
PayMaster - Payroll Router

API endpoints for payroll generation, verification and payment.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import (
    PAYROLL_ADMINS,
    PAYROLL_READERS,
    REPORT_READERS,
    ensure_employee_access,
    require_role,
)
from paymaster.models.audit import AuditAction
from paymaster.models.user import User, UserRole
from paymaster.schemas.payroll import (
    MarkPaidRequest,
    PayrollDetailResponse,
    PayrollGenerateRequest,
    PayrollResponse,
    TransitionResponse,
)
from paymaster.services.audit_service import AuditService
from paymaster.services.payroll_service import PayrollService
from paymaster.utils.error_handling import PayrollNotFoundException, TransitionDeclinedException


router = APIRouter()


# ===========================================
# GENERATION & LIFECYCLE
# ===========================================

@router.post(
    "/generate",
    response_model=PayrollResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate payroll",
    description="Generate the payroll of one employee for a month. Fails if it already exists "
                "or the employee has no salary structure.",
)
async def generate_payroll(
    data: PayrollGenerateRequest,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_ADMINS)),
):
    payroll = await PayrollService(db).generate_payroll(
        employee_id=data.employee_id,
        month=data.month,
        year=data.year,
        processed_by=current_user.id,
    )
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.GENERATE_PAYROLL,
        f"Generated payroll for employee {payroll.employee_id} for {payroll.month:02d}/{payroll.year}",
    )
    return payroll


@router.post(
    "/{payroll_id}/verify",
    response_model=TransitionResponse,
    summary="Verify payroll",
)
async def verify_payroll(
    payroll_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.PAYROLL_PROCESSOR, UserRole.MANAGER,
    ])),
):
    if not await PayrollService(db).verify_payroll(payroll_id, current_user.id):
        raise TransitionDeclinedException(
            "Payroll not found or already verified",
            resource_type="Payroll",
            resource_id=payroll_id,
        )

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.VERIFY_PAYROLL,
        f"Verified payroll {payroll_id}",
    )
    return TransitionResponse(success=True, message="Payroll verified")


@router.post(
    "/{payroll_id}/mark-paid",
    response_model=TransitionResponse,
    summary="Mark payroll as paid",
)
async def mark_payroll_paid(
    payroll_id: uuid.UUID,
    data: MarkPaidRequest,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_ADMINS)),
):
    if not await PayrollService(db).mark_as_paid(payroll_id, data.payment_mode, current_user.id):
        raise TransitionDeclinedException(
            "Payroll not found, not verified or already paid",
            resource_type="Payroll",
            resource_id=payroll_id,
        )

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.PAID_PAYROLL,
        f"Marked payroll {payroll_id} as paid via {data.payment_mode.value}",
    )
    return TransitionResponse(success=True, message="Payroll marked as paid")


# ===========================================
# QUERIES
# ===========================================

@router.get(
    "/all-details",
    response_model=List[PayrollDetailResponse],
    summary="All payrolls with names",
)
async def all_payroll_details(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(REPORT_READERS)),
):
    details = await PayrollService(db).get_all_details()
    return [
        PayrollDetailResponse(
            **PayrollResponse.model_validate(item["payroll"]).model_dump(),
            employee_name=item["employee_name"],
            processed_by_name=item["processed_by_name"],
            verified_by_name=item["verified_by_name"],
        )
        for item in details
    ]


@router.get(
    "/history/{employee_id}",
    response_model=List[PayrollResponse],
    summary="Payroll history of an employee",
)
async def payroll_history(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_READERS)),
):
    await ensure_employee_access(db, current_user, employee_id)
    return await PayrollService(db).get_history(employee_id)


@router.get(
    "/{employee_id}/{month}/{year}",
    response_model=PayrollResponse,
    summary="Payroll of an employee for a month",
)
async def payroll_by_period(
    employee_id: uuid.UUID,
    month: int = Path(..., ge=1, le=12),
    year: int = Path(..., ge=1900, le=9999),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_READERS)),
):
    await ensure_employee_access(db, current_user, employee_id)

    payroll = await PayrollService(db).get_by_period(employee_id, month, year)
    if payroll is None:
        raise PayrollNotFoundException(
            message=f"No payroll for employee '{employee_id}' for {month:02d}/{year}",
        )
    return payroll
