"""
PayMaster - Salary Structure Service

Salary structures are append-only: assigning a salary adds a row and the
row with the latest effective date is the current one.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.employee import Employee
from paymaster.models.payroll import SalaryStructure
from paymaster.utils.error_handling import EmployeeNotFoundException


class SalaryStructureService:
    """Service for salary structure assignment and lookup."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def assign(self, data: Dict[str, Any]) -> SalaryStructure:
        """Assign a new salary structure to an employee."""
        employee = await self.db.get(Employee, data["employee_id"])
        if employee is None:
            raise EmployeeNotFoundException(data["employee_id"])

        structure = SalaryStructure(**data)
        self.db.add(structure)
        await self.db.commit()
        await self.db.refresh(structure)
        return structure

    async def latest_for(self, employee_id: uuid.UUID) -> Optional[SalaryStructure]:
        """Current salary structure (latest effective_from) or None."""
        result = await self.db.execute(
            select(SalaryStructure)
            .where(SalaryStructure.employee_id == employee_id)
            .order_by(SalaryStructure.effective_from.desc(), SalaryStructure.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def history_for(self, employee_id: uuid.UUID) -> List[SalaryStructure]:
        """All salary structures for an employee, newest first."""
        result = await self.db.execute(
            select(SalaryStructure)
            .where(SalaryStructure.employee_id == employee_id)
            .order_by(SalaryStructure.effective_from.desc(), SalaryStructure.created_at.desc())
        )
        return list(result.scalars().all())
