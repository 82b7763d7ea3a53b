"""
PayMaster - Database Models
"""

from paymaster.models.base import BaseModel, TimestampMixin
from paymaster.models.user import User, UserRole, RefreshToken
from paymaster.models.employee import Employee
from paymaster.models.payroll import (
    SalaryStructure,
    Benefit,
    PayrollPolicy,
    Payroll,
    PaymentMode,
)
from paymaster.models.timesheet import Timesheet
from paymaster.models.leave import LeaveRequest, LeaveStatus
from paymaster.models.audit import AuditLog, AuditAction

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "User",
    "UserRole",
    "RefreshToken",
    "Employee",
    "SalaryStructure",
    "Benefit",
    "PayrollPolicy",
    "Payroll",
    "PaymentMode",
    "Timesheet",
    "LeaveRequest",
    "LeaveStatus",
    "AuditLog",
    "AuditAction",
]
