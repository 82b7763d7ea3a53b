"""
PayMaster - Salary Structures Router
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import ensure_employee_access, require_role
from paymaster.models.audit import AuditAction
from paymaster.models.user import User, UserRole
from paymaster.schemas.payroll import SalaryStructureCreate, SalaryStructureResponse
from paymaster.services.audit_service import AuditService
from paymaster.services.salary_service import SalaryStructureService


router = APIRouter()


@router.post(
    "",
    response_model=SalaryStructureResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign a salary structure",
)
async def assign_salary(
    data: SalaryStructureCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.MANAGER, UserRole.PAYROLL_PROCESSOR,
    ])),
):
    """Add a new salary structure. Earlier structures are kept as history."""
    structure = await SalaryStructureService(db).assign(data.model_dump())
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.ASSIGN_SALARY,
        f"Assigned salary structure to employee {structure.employee_id} "
        f"effective {structure.effective_from.isoformat()}",
    )
    return structure


@router.get(
    "/current/{employee_id}",
    response_model=SalaryStructureResponse,
    summary="Current salary structure",
)
async def current_salary(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.MANAGER, UserRole.EMPLOYEE, UserRole.PAYROLL_PROCESSOR,
    ])),
):
    await ensure_employee_access(db, current_user, employee_id)

    structure = await SalaryStructureService(db).latest_for(employee_id)
    if structure is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No salary structure found for this employee",
        )
    return structure


@router.get(
    "/history/{employee_id}",
    response_model=List[SalaryStructureResponse],
    summary="Salary structure history",
)
async def salary_history(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.MANAGER, UserRole.PAYROLL_PROCESSOR,
    ])),
):
    return await SalaryStructureService(db).history_for(employee_id)
