"""
PayMaster - Timesheet Service

Employees submit daily hours; their manager approves them once.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.employee import Employee
from paymaster.models.timesheet import Timesheet
from paymaster.utils.error_handling import EmployeeNotFoundException


class TimesheetService:
    """Service for timesheet submission and approval."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, data: Dict[str, Any]) -> Timesheet:
        employee = await self.db.get(Employee, data["employee_id"])
        if employee is None:
            raise EmployeeNotFoundException(data["employee_id"])

        timesheet = Timesheet(**data, is_approved=False)
        self.db.add(timesheet)
        await self.db.commit()
        await self.db.refresh(timesheet)
        return timesheet

    async def get(self, timesheet_id: uuid.UUID) -> Optional[Timesheet]:
        return await self.db.get(Timesheet, timesheet_id)

    async def list_for_employee(self, employee_id: uuid.UUID) -> List[Timesheet]:
        result = await self.db.execute(
            select(Timesheet)
            .where(Timesheet.employee_id == employee_id)
            .order_by(Timesheet.work_date.desc())
        )
        return list(result.scalars().all())

    async def pending_for_manager(self, manager_id: uuid.UUID) -> List[Timesheet]:
        """Unapproved timesheets of the manager's direct reports."""
        result = await self.db.execute(
            select(Timesheet)
            .join(Employee, Timesheet.employee_id == Employee.id)
            .where(
                Employee.manager_id == manager_id,
                Timesheet.is_approved == False,  # noqa: E712
            )
            .order_by(Timesheet.work_date)
        )
        return list(result.scalars().all())

    async def approve(self, timesheet_id: uuid.UUID, approver_id: uuid.UUID) -> bool:
        """
        Approve a timesheet.

        Returns False if the timesheet does not exist or is already approved.
        """
        result = await self.db.execute(
            update(Timesheet)
            .where(
                Timesheet.id == timesheet_id,
                Timesheet.is_approved == False,  # noqa: E712
            )
            .values(
                is_approved=True,
                approved_by=approver_id,
                approved_date=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session="evaluate")
        )
        await self.db.commit()
        return result.rowcount == 1

    async def report(
        self,
        employee_id: Optional[uuid.UUID] = None,
        manager_id: Optional[uuid.UUID] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Timesheets with employee names, filtered and ordered by date."""
        query = select(Timesheet, Employee.first_name, Employee.last_name).join(
            Employee, Timesheet.employee_id == Employee.id
        )

        if employee_id:
            query = query.where(Timesheet.employee_id == employee_id)
        if manager_id:
            query = query.where(Employee.manager_id == manager_id)
        if from_date:
            query = query.where(Timesheet.work_date >= from_date)
        if to_date:
            query = query.where(Timesheet.work_date <= to_date)

        result = await self.db.execute(query.order_by(Timesheet.work_date, Employee.last_name))
        return [
            {
                "timesheet_id": timesheet.id,
                "employee_id": timesheet.employee_id,
                "employee_name": f"{first_name} {last_name}",
                "work_date": timesheet.work_date,
                "hours_worked": timesheet.hours_worked,
                "task_description": timesheet.task_description,
                "is_approved": timesheet.is_approved,
            }
            for timesheet, first_name, last_name in result.all()
        ]
