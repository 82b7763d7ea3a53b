"""
PayMaster - Employee Model

Employee profile linked one-to-one to a user account, with an optional
reporting manager (another employee).
"""

import uuid
from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paymaster.models.base import BaseModel

if TYPE_CHECKING:
    from paymaster.models.user import User
    from paymaster.models.payroll import Payroll, SalaryStructure, Benefit


class Employee(BaseModel):
    """Employee record used by payroll, timesheets and leave."""

    __tablename__ = "employees"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    designation: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    date_of_joining: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)

    manager_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="employee")
    manager: Mapped[Optional["Employee"]] = relationship(
        "Employee",
        remote_side="Employee.id",
        back_populates="subordinates",
    )
    subordinates: Mapped[List["Employee"]] = relationship(
        "Employee",
        back_populates="manager",
    )
    salary_structures: Mapped[List["SalaryStructure"]] = relationship(
        "SalaryStructure",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    benefits: Mapped[List["Benefit"]] = relationship(
        "Benefit",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    payrolls: Mapped[List["Payroll"]] = relationship(
        "Payroll",
        back_populates="employee",
    )

    @property
    def full_name(self) -> str:
        """Get employee's full name."""
        return f"{self.first_name} {self.last_name}"
