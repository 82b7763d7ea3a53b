"""
PayMaster - Employee Schemas
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class EmployeeBase(BaseModel):
    """Base employee schema."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    designation: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    date_of_joining: Optional[date] = None
    manager_id: Optional[UUID] = None


class EmployeeCreate(EmployeeBase):
    """Create employee request."""
    user_id: UUID


class EmployeeUpdate(BaseModel):
    """Update employee request. Omitted fields are left unchanged."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    designation: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    date_of_joining: Optional[date] = None
    manager_id: Optional[UUID] = None


class PersonalInfoUpdate(BaseModel):
    """Self-service contact details update."""
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None


class EmployeeResponse(EmployeeBase):
    """Employee response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    email: str
    date_of_joining: date
    full_name: str
    created_at: Optional[datetime] = None
