"""
PayMaster - Leave Requests Router
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import ALL_ROLES, LEAVE_REVIEWERS, ensure_employee_access, require_role
from paymaster.models.audit import AuditAction
from paymaster.models.leave import LeaveStatus
from paymaster.models.user import User
from paymaster.schemas.leave import LeaveRequestCreate, LeaveRequestResponse, LeaveReviewRequest
from paymaster.schemas.payroll import TransitionResponse
from paymaster.services.audit_service import AuditService
from paymaster.services.leave_service import LeaveService
from paymaster.utils.error_handling import TransitionDeclinedException


router = APIRouter()


@router.post(
    "",
    response_model=LeaveRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a leave request",
)
async def submit_leave(
    data: LeaveRequestCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(ALL_ROLES)),
):
    await ensure_employee_access(db, current_user, data.employee_id)

    leave = await LeaveService(db).submit(data.model_dump())
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.SUBMIT_LEAVE,
        f"Submitted {leave.leave_type} leave {leave.start_date.isoformat()} to "
        f"{leave.end_date.isoformat()} (employee {leave.employee_id})",
    )
    return leave


@router.get(
    "/search",
    response_model=List[LeaveRequestResponse],
    summary="Search leave requests",
)
async def search_leave(
    employee_id: Optional[uuid.UUID] = Query(None),
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    leave_type: Optional[str] = Query(None),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(LEAVE_REVIEWERS)),
):
    return await LeaveService(db).search(
        employee_id=employee_id,
        status=status_filter,
        leave_type=leave_type,
        from_date=from_date,
        to_date=to_date,
    )


@router.get(
    "/employee/{employee_id}",
    response_model=List[LeaveRequestResponse],
    summary="Leave requests of an employee",
)
async def employee_leave(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(ALL_ROLES)),
):
    await ensure_employee_access(db, current_user, employee_id)
    return await LeaveService(db).list_for_employee(employee_id)


@router.post(
    "/{leave_id}/review",
    response_model=TransitionResponse,
    summary="Approve or reject a leave request",
)
async def review_leave(
    leave_id: uuid.UUID,
    data: LeaveReviewRequest,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(LEAVE_REVIEWERS)),
):
    if not await LeaveService(db).review(leave_id, current_user.id, data.action):
        raise TransitionDeclinedException(
            "Leave request not found, already reviewed, or invalid action",
            resource_type="LeaveRequest",
            resource_id=leave_id,
        )

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.REVIEW_LEAVE,
        f"Leave request {leave_id}: {data.action.lower()}",
    )
    return TransitionResponse(success=True, message=f"Leave request {data.action.lower()} applied")
