"""
PayMaster - Leave Request Schemas
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from paymaster.models.leave import LeaveStatus


class LeaveRequestCreate(BaseModel):
    """Submit leave request."""
    employee_id: UUID
    leave_type: str = Field(..., min_length=1, max_length=50)
    start_date: date
    end_date: date
    reason: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class LeaveReviewRequest(BaseModel):
    """Review action: approve, deny or reject."""
    action: str = Field(..., min_length=1, max_length=20)


class LeaveRequestResponse(BaseModel):
    """Leave request response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    leave_type: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    status: LeaveStatus
    applied_date: datetime
    approved_by: Optional[UUID] = None
    approved_date: Optional[datetime] = None
