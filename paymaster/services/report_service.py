"""
PayMaster - Report Service

Payroll and timesheet reports with CSV and PDF export:
- Payroll summary for a period (optionally one department)
- Annual tax statements per employee (PF + income tax)
- Timesheet report
- Team payrolls for a manager
"""

import csv
import io
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

# PDF Generation (reportlab)
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, HRFlowable
)

from paymaster.models.employee import Employee
from paymaster.models.payroll import Payroll
from paymaster.services.tax_calculators.income_tax_service import quantize_money
from paymaster.services.timesheet_service import TimesheetService


PAYROLL_SUMMARY_HEADER = ["EmployeeId", "Name", "Month", "Year", "GrossPay", "PF", "Tax", "NetPay"]
TIMESHEET_HEADER = ["Employee Name", "Date", "Hours Worked", "Task Description", "Approved"]


def _money(value: Any) -> Decimal:
    return quantize_money(Decimal(str(value or 0)))


class ReportService:
    """Service for payroll and timesheet reports."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles for reports."""
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Heading1'],
            fontSize=18,
            alignment=TA_CENTER,
            spaceAfter=20,
            textColor=colors.HexColor("#1a365d")
        ))

        self.styles.add(ParagraphStyle(
            name='ReportSubtitle',
            parent=self.styles['Heading2'],
            fontSize=12,
            alignment=TA_CENTER,
            spaceAfter=10,
            textColor=colors.HexColor("#4a5568")
        ))

        self.styles.add(ParagraphStyle(
            name='Footer',
            parent=self.styles['Normal'],
            fontSize=8,
            alignment=TA_CENTER,
            textColor=colors.HexColor("#718096")
        ))

    # =========================================================================
    # PAYROLL SUMMARY
    # =========================================================================

    async def payroll_summary(
        self,
        month: int,
        year: int,
        department: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Payroll rows for a period, ordered by employee name."""
        query = (
            select(Payroll, Employee.first_name, Employee.last_name, Employee.department)
            .join(Employee, Payroll.employee_id == Employee.id)
            .where(Payroll.month == month, Payroll.year == year)
        )
        if department:
            query = query.where(func.lower(Employee.department) == department.lower())

        result = await self.db.execute(query.order_by(Employee.last_name, Employee.first_name))

        return [
            {
                "employee_id": payroll.employee_id,
                "employee_name": f"{first_name} {last_name}",
                "department": dept,
                "month": payroll.month,
                "year": payroll.year,
                "gross_pay": payroll.gross_pay,
                "employee_pf": payroll.employee_pf,
                "income_tax": payroll.income_tax,
                "net_pay": payroll.net_pay,
                "is_verified": payroll.is_verified,
                "is_paid": payroll.is_paid,
            }
            for payroll, first_name, last_name, dept in result.all()
        ]

    async def payroll_summary_csv(
        self,
        month: int,
        year: int,
        department: Optional[str] = None,
    ) -> Tuple[bytes, str]:
        """Generate Payroll Summary CSV."""
        rows = await self.payroll_summary(month, year, department)

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(PAYROLL_SUMMARY_HEADER)
        for row in rows:
            writer.writerow([
                str(row["employee_id"]),
                row["employee_name"],
                row["month"],
                row["year"],
                _money(row["gross_pay"]),
                _money(row["employee_pf"]),
                _money(row["income_tax"]),
                _money(row["net_pay"]),
            ])

        content = buffer.getvalue().encode('utf-8')
        filename = f"payroll_summary_{year}_{month:02d}.csv"
        return content, filename

    async def payroll_summary_pdf(
        self,
        month: int,
        year: int,
        department: Optional[str] = None,
    ) -> Optional[Tuple[bytes, str]]:
        """Generate Payroll Summary PDF. Returns None when the period has no payrolls."""
        rows = await self.payroll_summary(month, year, department)
        if not rows:
            return None

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            rightMargin=0.5*inch,
            leftMargin=0.5*inch,
            topMargin=0.5*inch,
            bottomMargin=0.5*inch
        )

        elements = []
        elements.append(Paragraph("Payroll Summary", self.styles['ReportTitle']))
        subtitle = f"Period {month:02d}/{year}"
        if department:
            subtitle += f" - {department}"
        elements.append(Paragraph(subtitle, self.styles['ReportSubtitle']))
        elements.append(Spacer(1, 20))

        table_data = [["Employee", "Month", "Year", "Gross Pay", "PF", "Tax", "Net Pay"]]
        totals = {"gross_pay": Decimal("0"), "employee_pf": Decimal("0"),
                  "income_tax": Decimal("0"), "net_pay": Decimal("0")}
        for row in rows:
            table_data.append([
                row["employee_name"],
                row["month"],
                row["year"],
                self._format_currency(row["gross_pay"]),
                self._format_currency(row["employee_pf"]),
                self._format_currency(row["income_tax"]),
                self._format_currency(row["net_pay"]),
            ])
            for key in totals:
                totals[key] += _money(row[key])

        table_data.append([
            "TOTALS", "", "",
            self._format_currency(totals["gross_pay"]),
            self._format_currency(totals["employee_pf"]),
            self._format_currency(totals["income_tax"]),
            self._format_currency(totals["net_pay"]),
        ])

        table = Table(
            table_data,
            colWidths=[2.6*inch, 0.7*inch, 0.7*inch, 1.4*inch, 1.2*inch, 1.2*inch, 1.4*inch],
        )
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor("#2d3748")),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 10),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
            ('TOPPADDING', (0, 0), (-1, 0), 8),
            ('BACKGROUND', (0, -1), (-1, -1), colors.HexColor("#e2e8f0")),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('ALIGN', (3, 1), (-1, -1), 'RIGHT'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
            ('FONTSIZE', (0, 1), (-1, -1), 9),
        ]))
        elements.append(table)

        elements.append(Spacer(1, 30))
        elements.append(HRFlowable(width="100%", color=colors.gray))
        elements.append(Paragraph(
            f"Generated by PayMaster on {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            self.styles['Footer']
        ))

        doc.build(elements)
        buffer.seek(0)

        filename = f"payroll_summary_{year}_{month:02d}.pdf"
        return buffer.read(), filename

    # =========================================================================
    # TAX STATEMENTS
    # =========================================================================

    async def tax_statements(self, year: int) -> List[Dict[str, Any]]:
        """
        Annual PF and income tax totals per employee.

        total_deductions = total_pf + total_tax
        """
        result = await self.db.execute(
            select(
                Payroll.employee_id,
                Employee.first_name,
                Employee.last_name,
                func.count(Payroll.id),
                func.sum(Payroll.gross_pay),
                func.sum(Payroll.employee_pf),
                func.sum(Payroll.income_tax),
            )
            .join(Employee, Payroll.employee_id == Employee.id)
            .where(Payroll.year == year)
            .group_by(Payroll.employee_id, Employee.first_name, Employee.last_name)
            .order_by(Employee.last_name, Employee.first_name)
        )

        statements = []
        for employee_id, first_name, last_name, months, gross, pf, tax in result.all():
            total_pf = _money(pf)
            total_tax = _money(tax)
            statements.append({
                "employee_id": employee_id,
                "employee_name": f"{first_name} {last_name}",
                "year": year,
                "months": months,
                "total_gross": _money(gross),
                "total_pf": total_pf,
                "total_tax": total_tax,
                "total_deductions": total_pf + total_tax,
            })
        return statements

    # =========================================================================
    # TIMESHEETS
    # =========================================================================

    async def timesheet_report(
        self,
        employee_id: Optional[uuid.UUID] = None,
        manager_id: Optional[uuid.UUID] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        return await TimesheetService(self.db).report(employee_id, manager_id, from_date, to_date)

    async def timesheet_report_csv(
        self,
        employee_id: Optional[uuid.UUID] = None,
        manager_id: Optional[uuid.UUID] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Tuple[bytes, str]:
        """Generate Timesheet Report CSV."""
        rows = await self.timesheet_report(employee_id, manager_id, from_date, to_date)

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(TIMESHEET_HEADER)
        for row in rows:
            writer.writerow([
                row["employee_name"],
                row["work_date"].isoformat(),
                row["hours_worked"],
                row["task_description"] or "",
                "Yes" if row["is_approved"] else "No",
            ])

        content = buffer.getvalue().encode('utf-8')
        return content, "timesheet_report.csv"

    # =========================================================================
    # TEAM
    # =========================================================================

    async def team_payrolls(self, manager_id: uuid.UUID) -> List[Payroll]:
        """Payrolls of the manager's direct reports, most recent period first."""
        result = await self.db.execute(
            select(Payroll)
            .join(Employee, Payroll.employee_id == Employee.id)
            .where(Employee.manager_id == manager_id)
            .order_by(Payroll.year.desc(), Payroll.month.desc(), Employee.last_name)
        )
        return list(result.scalars().all())

    def _format_currency(self, value: Any) -> str:
        return f"{_money(value):,.2f}"
