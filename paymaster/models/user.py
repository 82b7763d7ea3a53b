"""
PayMaster - User Model

User accounts, roles and server-side refresh tokens.

Roles:
- Admin: Full access
- Manager: Team management, approvals, payroll verification
- HR Manager: Employee records and leave review
- Payroll Processor: Salary structures, benefits, policies, payroll runs
- Employee: Self-service (timesheets, leave, own payroll)
- Supervisor: Leave review
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paymaster.models.base import BaseModel

if TYPE_CHECKING:
    from paymaster.models.employee import Employee


class UserRole(str, Enum):
    """Application roles used for route gating."""
    ADMIN = "admin"
    MANAGER = "manager"
    HR_MANAGER = "hr_manager"
    PAYROLL_PROCESSOR = "payroll_processor"
    EMPLOYEE = "employee"
    SUPERVISOR = "supervisor"


class User(BaseModel):
    """Login account. An employee record may be attached one-to-one."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        default=UserRole.EMPLOYEE,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    employee: Mapped[Optional["Employee"]] = relationship(
        "Employee",
        back_populates="user",
        uselist=False,
    )
    refresh_tokens: Mapped[List["RefreshToken"]] = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"


class RefreshToken(BaseModel):
    """Opaque refresh token stored server-side so it can be rotated and revoked."""

    __tablename__ = "refresh_tokens"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="refresh_tokens")
