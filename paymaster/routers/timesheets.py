"""
PayMaster - Timesheets Router
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import ensure_employee_access, require_role
from paymaster.models.audit import AuditAction
from paymaster.models.user import User, UserRole
from paymaster.schemas.payroll import TransitionResponse
from paymaster.schemas.timesheet import TimesheetCreate, TimesheetResponse
from paymaster.services.audit_service import AuditService
from paymaster.services.timesheet_service import TimesheetService
from paymaster.utils.error_handling import TransitionDeclinedException


router = APIRouter()

TIMESHEET_USERS = [UserRole.EMPLOYEE, UserRole.MANAGER, UserRole.ADMIN]
TIMESHEET_APPROVERS = [UserRole.MANAGER, UserRole.ADMIN]


@router.post(
    "",
    response_model=TimesheetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a timesheet",
)
async def submit_timesheet(
    data: TimesheetCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(TIMESHEET_USERS)),
):
    await ensure_employee_access(db, current_user, data.employee_id)

    timesheet = await TimesheetService(db).submit(data.model_dump())
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.SUBMIT_TIMESHEET,
        f"Submitted {timesheet.hours_worked}h for {timesheet.work_date.isoformat()} "
        f"(employee {timesheet.employee_id})",
    )
    return timesheet


@router.get(
    "/employee/{employee_id}",
    response_model=List[TimesheetResponse],
    summary="Timesheets of an employee",
)
async def employee_timesheets(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(TIMESHEET_USERS)),
):
    await ensure_employee_access(db, current_user, employee_id)
    return await TimesheetService(db).list_for_employee(employee_id)


@router.get(
    "/pending/{manager_id}",
    response_model=List[TimesheetResponse],
    summary="Timesheets awaiting a manager's approval",
)
async def pending_timesheets(
    manager_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(TIMESHEET_APPROVERS)),
):
    return await TimesheetService(db).pending_for_manager(manager_id)


@router.post(
    "/{timesheet_id}/approve",
    response_model=TransitionResponse,
    summary="Approve a timesheet",
)
async def approve_timesheet(
    timesheet_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(TIMESHEET_APPROVERS)),
):
    if not await TimesheetService(db).approve(timesheet_id, current_user.id):
        raise TransitionDeclinedException(
            "Timesheet not found or already approved",
            resource_type="Timesheet",
            resource_id=timesheet_id,
        )

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.APPROVE_TIMESHEET,
        f"Approved timesheet {timesheet_id}",
    )
    return TransitionResponse(success=True, message="Timesheet approved")
