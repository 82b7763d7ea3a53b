"""
PayMaster - Admin Router

Audit log access and manager team views.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import require_role
from paymaster.models.user import User, UserRole
from paymaster.schemas.audit import AuditLogResponse
from paymaster.schemas.leave import LeaveRequestResponse
from paymaster.schemas.payroll import PayrollResponse
from paymaster.services.audit_service import AuditService
from paymaster.services.leave_service import LeaveService
from paymaster.services.report_service import ReportService


router = APIRouter()


@router.get(
    "/audit-logs/user/{user_id}",
    response_model=List[AuditLogResponse],
    summary="Audit log of a user",
)
async def user_audit_logs(
    user_id: uuid.UUID,
    limit: int = Query(200, ge=1, le=1000),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([UserRole.ADMIN])),
):
    return await AuditService(db).list_for_user(user_id, limit=limit)


@router.get(
    "/team/{manager_id}/payrolls",
    response_model=List[PayrollResponse],
    summary="Payrolls of a manager's team",
)
async def team_payrolls(
    manager_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.MANAGER, UserRole.PAYROLL_PROCESSOR,
    ])),
):
    return await ReportService(db).team_payrolls(manager_id)


@router.get(
    "/team/{manager_id}/leave-requests",
    response_model=List[LeaveRequestResponse],
    summary="Pending leave requests of a manager's team",
)
async def team_pending_leave(
    manager_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.MANAGER, UserRole.HR_MANAGER,
    ])),
):
    return await LeaveService(db).team_pending(manager_id)
