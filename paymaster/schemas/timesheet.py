"""
PayMaster - Timesheet Schemas
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TimesheetCreate(BaseModel):
    """Submit timesheet request."""
    employee_id: UUID
    work_date: date
    hours_worked: Decimal = Field(..., gt=0, le=24, decimal_places=2)
    task_description: Optional[str] = None


class TimesheetResponse(BaseModel):
    """Timesheet response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    work_date: date
    hours_worked: Decimal
    task_description: Optional[str] = None
    is_approved: bool
    approved_by: Optional[UUID] = None
    approved_date: Optional[datetime] = None
