"""
PayMaster - Leave Service

Leave requests start Pending and are reviewed once:
- "approve" -> Approved
- "deny" / "reject" -> Rejected
Any other action, or a request that is no longer Pending, is declined.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.employee import Employee
from paymaster.models.leave import LeaveRequest, LeaveStatus
from paymaster.utils.error_handling import EmployeeNotFoundException, InvalidDateRangeException


REVIEW_ACTIONS = {
    "approve": LeaveStatus.APPROVED,
    "deny": LeaveStatus.REJECTED,
    "reject": LeaveStatus.REJECTED,
}


class LeaveService:
    """Service for leave requests."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, data: Dict[str, Any]) -> LeaveRequest:
        """Submit a leave request in Pending status."""
        if data["end_date"] < data["start_date"]:
            raise InvalidDateRangeException(str(data["start_date"]), str(data["end_date"]))

        employee = await self.db.get(Employee, data["employee_id"])
        if employee is None:
            raise EmployeeNotFoundException(data["employee_id"])

        leave = LeaveRequest(
            **data,
            status=LeaveStatus.PENDING,
            applied_date=datetime.now(timezone.utc),
        )
        self.db.add(leave)
        await self.db.commit()
        await self.db.refresh(leave)
        return leave

    async def get(self, leave_id: uuid.UUID) -> Optional[LeaveRequest]:
        return await self.db.get(LeaveRequest, leave_id)

    async def review(self, leave_id: uuid.UUID, approver_id: uuid.UUID, action: str) -> bool:
        """
        Approve or reject a pending leave request.

        Returns False for an unknown action, a missing request or a request
        that was already reviewed.
        """
        new_status = REVIEW_ACTIONS.get((action or "").strip().lower())
        if new_status is None:
            return False

        result = await self.db.execute(
            update(LeaveRequest)
            .where(
                LeaveRequest.id == leave_id,
                LeaveRequest.status == LeaveStatus.PENDING,
            )
            .values(
                status=new_status,
                approved_by=approver_id,
                approved_date=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session="evaluate")
        )
        await self.db.commit()
        return result.rowcount == 1

    async def list_for_employee(self, employee_id: uuid.UUID) -> List[LeaveRequest]:
        result = await self.db.execute(
            select(LeaveRequest)
            .where(LeaveRequest.employee_id == employee_id)
            .order_by(LeaveRequest.start_date.desc())
        )
        return list(result.scalars().all())

    async def search(
        self,
        employee_id: Optional[uuid.UUID] = None,
        status: Optional[LeaveStatus] = None,
        leave_type: Optional[str] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[LeaveRequest]:
        """
        Search leave requests.

        from_date / to_date select requests overlapping the range.
        """
        query = select(LeaveRequest)

        if employee_id:
            query = query.where(LeaveRequest.employee_id == employee_id)
        if status:
            query = query.where(LeaveRequest.status == status)
        if leave_type:
            query = query.where(LeaveRequest.leave_type == leave_type)
        if from_date:
            query = query.where(LeaveRequest.end_date >= from_date)
        if to_date:
            query = query.where(LeaveRequest.start_date <= to_date)

        result = await self.db.execute(query.order_by(LeaveRequest.start_date.desc()))
        return list(result.scalars().all())

    async def team_pending(self, manager_id: uuid.UUID) -> List[LeaveRequest]:
        """Pending leave requests of the manager's direct reports."""
        result = await self.db.execute(
            select(LeaveRequest)
            .join(Employee, LeaveRequest.employee_id == Employee.id)
            .where(
                Employee.manager_id == manager_id,
                LeaveRequest.status == LeaveStatus.PENDING,
            )
            .order_by(LeaveRequest.start_date)
        )
        return list(result.scalars().all())
