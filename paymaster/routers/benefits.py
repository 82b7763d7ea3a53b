"""
PayMaster - Benefits Router
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import PAYROLL_ADMINS, require_role
from paymaster.models.audit import AuditAction
from paymaster.models.user import User, UserRole
from paymaster.schemas.payroll import BenefitCreate, BenefitResponse, BenefitUpdate
from paymaster.services.audit_service import AuditService
from paymaster.services.benefit_service import BenefitService
from paymaster.utils.error_handling import NotFoundException


router = APIRouter()


@router.post(
    "",
    response_model=BenefitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a benefit",
)
async def add_benefit(
    data: BenefitCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_ADMINS)),
):
    benefit = await BenefitService(db).add(data.model_dump())
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.ADD_BENEFIT,
        f"Added {benefit.benefit_type} benefit of {benefit.amount} for employee {benefit.employee_id}",
    )
    return benefit


@router.get(
    "/employee/{employee_id}",
    response_model=List[BenefitResponse],
    summary="Benefits of an employee",
)
async def list_benefits(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.PAYROLL_PROCESSOR, UserRole.MANAGER,
    ])),
):
    return await BenefitService(db).list_for_employee(employee_id)


@router.put("/{benefit_id}", response_model=BenefitResponse, summary="Update a benefit")
async def update_benefit(
    benefit_id: uuid.UUID,
    data: BenefitUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_ADMINS)),
):
    benefit = await BenefitService(db).update(benefit_id, data.model_dump(exclude_unset=True))
    if benefit is None:
        raise NotFoundException("Benefit", benefit_id)

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.UPDATE_BENEFIT,
        f"Updated benefit {benefit.id}",
    )
    return benefit


@router.delete("/{benefit_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a benefit")
async def delete_benefit(
    benefit_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_ADMINS)),
):
    if not await BenefitService(db).delete(benefit_id):
        raise NotFoundException("Benefit", benefit_id)

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.DELETE_BENEFIT,
        f"Deleted benefit {benefit_id}",
    )
