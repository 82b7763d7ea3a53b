"""
PayMaster - Routers Package

FastAPI route handlers.

Routers:
- auth: Registration, login, refresh, logout
- employees: Employee records and search
- salary_structures: Salary assignment and history
- benefits: Employee benefits
- payroll_policies: Payroll policy (default PF, overtime rate)
- payroll: Payroll generation, verification, payment and queries
- timesheets: Timesheet submission and approval
- leave_requests: Leave submission and review
- admin: Audit logs and team views
- reports: Payroll summary, tax statements, timesheet exports
"""

from paymaster.routers import (
    auth,
    employees,
    salary_structures,
    benefits,
    payroll_policies,
    payroll,
    timesheets,
    leave_requests,
    admin,
    reports,
)

__all__ = [
    "auth",
    "employees",
    "salary_structures",
    "benefits",
    "payroll_policies",
    "payroll",
    "timesheets",
    "leave_requests",
    "admin",
    "reports",
]
