"""
PayMaster - Employees Router
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import ALL_ROLES, require_role
from paymaster.models.audit import AuditAction
from paymaster.models.user import User, UserRole
from paymaster.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    PersonalInfoUpdate,
)
from paymaster.services.audit_service import AuditService
from paymaster.services.employee_service import EmployeeService
from paymaster.utils.error_handling import EmployeeNotFoundException


router = APIRouter()


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an employee",
)
async def add_employee(
    data: EmployeeCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([UserRole.ADMIN, UserRole.MANAGER, UserRole.HR_MANAGER])),
):
    employee = await EmployeeService(db).add(data.model_dump())
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.ADD_EMPLOYEE,
        f"Added employee {employee.full_name} ({employee.id})",
    )
    return employee


@router.get("", response_model=List[EmployeeResponse], summary="List employees")
async def list_employees(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.MANAGER, UserRole.PAYROLL_PROCESSOR, UserRole.HR_MANAGER,
    ])),
):
    return await EmployeeService(db).list_all(skip=skip, limit=limit)


@router.get("/search", response_model=List[EmployeeResponse], summary="Search employees")
async def search_employees(
    name: Optional[str] = Query(None, description="First or last name contains"),
    department: Optional[str] = Query(None),
    designation: Optional[str] = Query(None),
    manager_id: Optional[uuid.UUID] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([
        UserRole.ADMIN, UserRole.PAYROLL_PROCESSOR, UserRole.MANAGER,
    ])),
):
    return await EmployeeService(db).search(
        name=name,
        department=department,
        designation=designation,
        manager_id=manager_id,
    )


@router.put("/me/personal", response_model=EmployeeResponse, summary="Update own contact details")
async def update_personal_info(
    data: PersonalInfoUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([UserRole.EMPLOYEE])),
):
    employee = await EmployeeService(db).update_personal_info(
        current_user.id,
        email=data.email,
        phone=data.phone,
        address=data.address,
    )
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No employee record linked to this user",
        )

    await AuditService(db).log_action(
        current_user.id,
        AuditAction.UPDATE_PERSONAL_INFO,
        f"Updated personal info for employee {employee.id}",
    )
    return employee


@router.get("/{employee_id}", response_model=EmployeeResponse, summary="Get an employee")
async def get_employee(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(ALL_ROLES)),
):
    employee = await EmployeeService(db).get(employee_id)
    if employee is None:
        raise EmployeeNotFoundException(employee_id)
    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse, summary="Update an employee")
async def update_employee(
    employee_id: uuid.UUID,
    data: EmployeeUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role([UserRole.ADMIN, UserRole.MANAGER])),
):
    employee = await EmployeeService(db).update(employee_id, data.model_dump(exclude_unset=True))
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.UPDATE_EMPLOYEE,
        f"Updated employee {employee.id}",
    )
    return employee
