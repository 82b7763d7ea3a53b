"""
PayMaster - Employee Service

Employee records, search and self-service personal details.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.employee import Employee
from paymaster.models.user import User
from paymaster.utils.error_handling import (
    BusinessRuleException,
    DuplicateEntryException,
    EmployeeNotFoundException,
    NotFoundException,
)


class EmployeeService:
    """Service for employee management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, data: Dict[str, Any]) -> Employee:
        """Create an employee record for an existing user."""
        user = await self.db.get(User, data["user_id"])
        if user is None:
            raise NotFoundException("User", data["user_id"])

        existing = await self.get_by_user_id(data["user_id"])
        if existing:
            raise DuplicateEntryException("Employee", "user_id", str(data["user_id"]))

        if data.get("manager_id") is not None:
            await self._ensure_manager(data["manager_id"])

        employee = Employee(**{k: v for k, v in data.items() if v is not None})
        self.db.add(employee)
        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def get(self, employee_id: uuid.UUID) -> Optional[Employee]:
        return await self.db.get(Employee, employee_id)

    async def get_by_user_id(self, user_id: uuid.UUID) -> Optional[Employee]:
        result = await self.db.execute(
            select(Employee).where(Employee.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self, skip: int = 0, limit: int = 100) -> List[Employee]:
        result = await self.db.execute(
            select(Employee)
            .order_by(Employee.last_name, Employee.first_name)
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def search(
        self,
        name: Optional[str] = None,
        department: Optional[str] = None,
        designation: Optional[str] = None,
        manager_id: Optional[uuid.UUID] = None,
    ) -> List[Employee]:
        """
        Search employees. All filters are optional and combined with AND.

        Name matches first or last name, case-insensitively.
        """
        query = select(Employee)

        if name:
            pattern = f"%{name.lower()}%"
            query = query.where(
                or_(
                    func.lower(Employee.first_name).like(pattern),
                    func.lower(Employee.last_name).like(pattern),
                )
            )
        if department:
            query = query.where(func.lower(Employee.department) == department.lower())
        if designation:
            query = query.where(func.lower(Employee.designation) == designation.lower())
        if manager_id:
            query = query.where(Employee.manager_id == manager_id)

        result = await self.db.execute(query.order_by(Employee.last_name, Employee.first_name))
        return list(result.scalars().all())

    async def update(self, employee_id: uuid.UUID, data: Dict[str, Any]) -> Employee:
        """Update employee details. Only provided fields are changed."""
        employee = await self.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)

        manager_id = data.get("manager_id")
        if manager_id is not None:
            if manager_id == employee.id:
                raise BusinessRuleException(
                    "An employee cannot be their own manager",
                    rule="MANAGER_NOT_SELF",
                )
            await self._ensure_manager(manager_id)

        for field, value in data.items():
            if value is not None:
                setattr(employee, field, value)

        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def update_personal_info(
        self,
        user_id: uuid.UUID,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Optional[Employee]:
        """
        Update the contact details of the employee linked to a user.

        Returns None if the user has no employee record.
        """
        employee = await self.get_by_user_id(user_id)
        if employee is None:
            return None

        if email is not None:
            employee.email = email
        if phone is not None:
            employee.phone = phone
        if address is not None:
            employee.address = address

        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def team_ids(self, manager_id: uuid.UUID) -> List[uuid.UUID]:
        """IDs of the employees reporting directly to a manager."""
        result = await self.db.execute(
            select(Employee.id).where(Employee.manager_id == manager_id)
        )
        return list(result.scalars().all())

    async def _ensure_manager(self, manager_id: uuid.UUID) -> None:
        if await self.get(manager_id) is None:
            raise NotFoundException("Manager", manager_id)
