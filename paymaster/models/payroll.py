"""
PayMaster - Payroll Models

Salary structures, benefits, payroll policies and monthly payroll records.

- SalaryStructure and PayrollPolicy are append-only; the row with the
  latest effective_from is the current one.
- Benefit amounts are monthly and all of an employee's benefits count
  towards gross pay.
- Payroll is unique per (employee, month, year). Its computed amounts are
  written once at generation; only the verify and mark-paid transitions
  change it afterwards.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean, CheckConstraint, Date, DateTime, ForeignKey, Integer, Numeric,
    String, Text, UniqueConstraint, Enum as SQLEnum
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paymaster.models.base import BaseModel

if TYPE_CHECKING:
    from paymaster.models.employee import Employee
    from paymaster.models.user import User


# ===========================================
# ENUMS
# ===========================================

class PaymentMode(str, Enum):
    """How a verified payroll was paid out."""
    BANK_TRANSFER = "Bank Transfer"
    CASH = "Cash"
    CHEQUE = "Cheque"
    DIGITAL_WALLET = "Digital Wallet"


# ===========================================
# SALARY STRUCTURE
# ===========================================

class SalaryStructure(BaseModel):
    """
    Salary assignment for an employee.

    New assignments are new rows; existing rows are never updated so the
    salary history stays queryable.
    """

    __tablename__ = "salary_structures"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    basic_pay: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=False,
    )
    hra: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=True,
        comment="House rent allowance",
    )
    allowances: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=True,
    )
    pf_percentage: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=5, scale=2),
        nullable=True,
        comment="Provident fund rate; falls back to the latest policy",
    )
    effective_from: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="salary_structures")

    __table_args__ = (
        CheckConstraint("basic_pay >= 0", name="basic_pay_non_negative"),
    )


# ===========================================
# BENEFITS
# ===========================================

class Benefit(BaseModel):
    """Monthly benefit paid on top of the salary structure."""

    __tablename__ = "benefits"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    benefit_type: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assigned_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="benefits")


# ===========================================
# PAYROLL POLICY
# ===========================================

class PayrollPolicy(BaseModel):
    """Organisation-wide payroll defaults. Append-only."""

    __tablename__ = "payroll_policies"

    default_pf_percent: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2),
        nullable=False,
    )
    overtime_rate_per_hour: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=False,
        default=Decimal("0"),
    )
    effective_from: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )


# ===========================================
# PAYROLL
# ===========================================

class Payroll(BaseModel):
    """
    Monthly payroll record for one employee.

    Lifecycle: generated -> verified -> paid. Both flags only ever move
    from False to True and is_paid requires is_verified.
    """

    __tablename__ = "payrolls"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    # Computed amounts
    gross_pay: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    employee_pf: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    employer_pf: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    income_tax: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    net_pay: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)

    # Processing
    processed_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    processed_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Verification
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Payment
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    paid_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    paid_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    payment_mode: Mapped[Optional[PaymentMode]] = mapped_column(
        SQLEnum(PaymentMode),
        nullable=True,
    )

    # Relationships
    employee: Mapped["Employee"] = relationship("Employee", back_populates="payrolls")
    processor: Mapped[Optional["User"]] = relationship("User", foreign_keys=[processed_by])
    verifier: Mapped[Optional["User"]] = relationship("User", foreign_keys=[verified_by])

    __table_args__ = (
        UniqueConstraint("employee_id", "month", "year", name="uq_payroll_employee_period"),
        CheckConstraint("month >= 1 AND month <= 12", name="payroll_month_range"),
        CheckConstraint("NOT is_paid OR is_verified", name="payroll_paid_requires_verified"),
    )
