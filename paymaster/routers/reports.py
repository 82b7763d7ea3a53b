"""
PayMaster - Reports Router

Payroll summary, tax statements and timesheet exports.
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response, StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import REPORT_READERS, require_role
from paymaster.models.user import User
from paymaster.schemas.report import PayrollSummaryRow, TaxStatement
from paymaster.services.report_service import ReportService


router = APIRouter()


@router.get(
    "/payroll-summary",
    response_model=List[PayrollSummaryRow],
    summary="Payroll summary for a month",
)
async def payroll_summary(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    department: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(REPORT_READERS)),
):
    return await ReportService(db).payroll_summary(month, year, department)


@router.get("/payroll-summary/csv", summary="Payroll summary as CSV")
async def payroll_summary_csv(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    department: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(REPORT_READERS)),
):
    content, filename = await ReportService(db).payroll_summary_csv(month, year, department)
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/payroll-summary/pdf", summary="Payroll summary as PDF")
async def payroll_summary_pdf(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    department: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(REPORT_READERS)),
):
    export = await ReportService(db).payroll_summary_pdf(month, year, department)
    if export is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No payroll data for {month:02d}/{year}",
        )

    content, filename = export
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get(
    "/tax-statements",
    response_model=List[TaxStatement],
    summary="Annual tax statements",
)
async def tax_statements(
    year: int = Query(..., ge=1900, le=9999),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(REPORT_READERS)),
):
    return await ReportService(db).tax_statements(year)


@router.get("/timesheets/csv", summary="Timesheet report as CSV")
async def timesheet_report_csv(
    employee_id: Optional[uuid.UUID] = Query(None),
    manager_id: Optional[uuid.UUID] = Query(None),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(REPORT_READERS)),
):
    content, filename = await ReportService(db).timesheet_report_csv(
        employee_id=employee_id,
        manager_id=manager_id,
        from_date=from_date,
        to_date=to_date,
    )
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
