"""
PayMaster - Report Schemas
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class PayrollSummaryRow(BaseModel):
    """One line of the payroll summary."""
    employee_id: UUID
    employee_name: str
    department: Optional[str] = None
    month: int
    year: int
    gross_pay: Decimal
    employee_pf: Decimal
    income_tax: Decimal
    net_pay: Decimal
    is_verified: bool
    is_paid: bool


class TaxStatement(BaseModel):
    """Annual PF and income tax totals for one employee."""
    employee_id: UUID
    employee_name: str
    year: int
    months: int
    total_gross: Decimal
    total_pf: Decimal
    total_tax: Decimal
    total_deductions: Decimal


class TimesheetReportRow(BaseModel):
    """One line of the timesheet report."""
    timesheet_id: UUID
    employee_id: UUID
    employee_name: str
    work_date: date
    hours_worked: Decimal
    task_description: Optional[str] = None
    is_approved: bool
