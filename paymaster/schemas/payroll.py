"""
PayMaster - Payroll Schemas

Pydantic schemas for salary structures, benefits, policies and payrolls.
Money fields are Decimal and serialize as strings.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from paymaster.models.payroll import PaymentMode


# ===========================================
# SALARY STRUCTURE SCHEMAS
# ===========================================

class SalaryStructureCreate(BaseModel):
    """Assign salary structure request."""
    employee_id: UUID
    basic_pay: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)
    hra: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    allowances: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    pf_percentage: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)
    effective_from: date = Field(default_factory=date.today)


class SalaryStructureResponse(BaseModel):
    """Salary structure response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    basic_pay: Decimal
    hra: Optional[Decimal] = None
    allowances: Optional[Decimal] = None
    pf_percentage: Optional[Decimal] = None
    effective_from: date


# ===========================================
# BENEFIT SCHEMAS
# ===========================================

class BenefitCreate(BaseModel):
    """Add benefit request."""
    employee_id: UUID
    benefit_type: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)
    description: Optional[str] = None
    assigned_date: Optional[date] = None


class BenefitUpdate(BaseModel):
    """Update benefit request."""
    benefit_type: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    description: Optional[str] = None
    assigned_date: Optional[date] = None


class BenefitResponse(BaseModel):
    """Benefit response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    benefit_type: str
    amount: Decimal
    description: Optional[str] = None
    assigned_date: date


# ===========================================
# PAYROLL POLICY SCHEMAS
# ===========================================

class PayrollPolicyCreate(BaseModel):
    """Set payroll policy request. The effective time is set by the server."""
    default_pf_percent: Decimal = Field(..., ge=0, le=100, decimal_places=2)
    overtime_rate_per_hour: Decimal = Field(Decimal("0"), ge=0, max_digits=18, decimal_places=2)


class PayrollPolicyResponse(BaseModel):
    """Payroll policy response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    default_pf_percent: Decimal
    overtime_rate_per_hour: Decimal
    effective_from: datetime


# ===========================================
# PAYROLL SCHEMAS
# ===========================================

class PayrollGenerateRequest(BaseModel):
    """Generate payroll request. The processor is the authenticated user."""
    employee_id: UUID
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900, le=9999)


class MarkPaidRequest(BaseModel):
    """Mark payroll as paid request."""
    payment_mode: PaymentMode


class PayrollResponse(BaseModel):
    """Payroll response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    month: int
    year: int
    gross_pay: Decimal
    employee_pf: Decimal
    employer_pf: Decimal
    income_tax: Decimal
    net_pay: Decimal
    processed_by: Optional[UUID] = None
    processed_date: datetime
    is_verified: bool
    verified_by: Optional[UUID] = None
    verified_date: Optional[datetime] = None
    is_paid: bool
    paid_by: Optional[UUID] = None
    paid_date: Optional[datetime] = None
    payment_mode: Optional[PaymentMode] = None


class PayrollDetailResponse(PayrollResponse):
    """Payroll with display names."""
    employee_name: str
    processed_by_name: Optional[str] = None
    verified_by_name: Optional[str] = None


class TransitionResponse(BaseModel):
    """Result of a lifecycle transition."""
    success: bool
    message: str
