"""
PayMaster - Services Package

Business logic services.
"""

from paymaster.services.auth_service import AuthService
from paymaster.services.audit_service import AuditService
from paymaster.services.employee_service import EmployeeService
from paymaster.services.salary_service import SalaryStructureService
from paymaster.services.benefit_service import BenefitService
from paymaster.services.payroll_policy_service import PayrollPolicyService
from paymaster.services.payroll_service import PayrollService
from paymaster.services.timesheet_service import TimesheetService
from paymaster.services.leave_service import LeaveService
from paymaster.services.report_service import ReportService

__all__ = [
    "AuthService",
    "AuditService",
    "EmployeeService",
    "SalaryStructureService",
    "BenefitService",
    "PayrollPolicyService",
    "PayrollService",
    "TimesheetService",
    "LeaveService",
    "ReportService",
]
