"""
PayMaster - Audit Log Model

Append-only record of who did what. Rows are written by the request layer
after a successful action and are never updated.
"""

import uuid
import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from paymaster.database import Base


class AuditAction(str, enum.Enum):
    """Audit action labels."""
    REGISTER_USER = "Register User"
    LOGIN = "Login"
    ADD_EMPLOYEE = "Add Employee"
    UPDATE_EMPLOYEE = "Update Employee"
    UPDATE_PERSONAL_INFO = "Update Personal Info"
    ASSIGN_SALARY = "Assign Salary"
    ADD_BENEFIT = "Add Benefit"
    UPDATE_BENEFIT = "Update Benefit"
    DELETE_BENEFIT = "Delete Benefit"
    SET_PAYROLL_POLICY = "Set Payroll Policy"
    GENERATE_PAYROLL = "Generate Payroll"
    VERIFY_PAYROLL = "Verify Payroll"
    PAID_PAYROLL = "Paid Payroll"
    SUBMIT_TIMESHEET = "Submit Timesheet"
    APPROVE_TIMESHEET = "Approve Timesheet"
    SUBMIT_LEAVE = "Submit Leave"
    REVIEW_LEAVE = "Review Leave"


class AuditLog(Base):
    """
    Immutable audit entry.

    This table should have no UPDATE or DELETE permissions.
    """

    __tablename__ = "audit_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
