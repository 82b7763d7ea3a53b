"""
PayMaster - Benefit Service
"""

import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.employee import Employee
from paymaster.models.payroll import Benefit
from paymaster.utils.error_handling import EmployeeNotFoundException


class BenefitService:
    """Service for employee benefits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, data: Dict[str, Any]) -> Benefit:
        """Add a benefit for an employee."""
        employee = await self.db.get(Employee, data["employee_id"])
        if employee is None:
            raise EmployeeNotFoundException(data["employee_id"])

        benefit = Benefit(**{k: v for k, v in data.items() if v is not None})
        self.db.add(benefit)
        await self.db.commit()
        await self.db.refresh(benefit)
        return benefit

    async def get(self, benefit_id: uuid.UUID) -> Optional[Benefit]:
        return await self.db.get(Benefit, benefit_id)

    async def list_for_employee(self, employee_id: uuid.UUID) -> List[Benefit]:
        result = await self.db.execute(
            select(Benefit)
            .where(Benefit.employee_id == employee_id)
            .order_by(Benefit.assigned_date.desc())
        )
        return list(result.scalars().all())

    async def update(self, benefit_id: uuid.UUID, data: Dict[str, Any]) -> Optional[Benefit]:
        """Update a benefit. Returns None if it does not exist."""
        benefit = await self.get(benefit_id)
        if benefit is None:
            return None

        for field, value in data.items():
            if value is not None:
                setattr(benefit, field, value)

        await self.db.commit()
        await self.db.refresh(benefit)
        return benefit

    async def delete(self, benefit_id: uuid.UUID) -> bool:
        """Delete a benefit. Returns False if it does not exist."""
        benefit = await self.get(benefit_id)
        if benefit is None:
            return False

        await self.db.delete(benefit)
        await self.db.commit()
        return True

    async def total_for(self, employee_id: uuid.UUID) -> Decimal:
        """Sum of all benefit amounts for an employee (0 when none)."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Benefit.amount), 0))
            .where(Benefit.employee_id == employee_id)
        )
        return Decimal(str(result.scalar() or 0))
