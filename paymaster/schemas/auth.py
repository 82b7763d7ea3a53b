"""
PayMaster - Authentication Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from paymaster.models.user import UserRole


class UserRegister(BaseModel):
    """User registration request."""
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    role: UserRole = UserRole.EMPLOYEE


class UserLogin(BaseModel):
    """Login request."""
    username: str
    password: str


class RefreshTokenRequest(BaseModel):
    """Refresh / logout request carrying the opaque refresh token."""
    refresh_token: str


class TokenResponse(BaseModel):
    """Token pair response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    """User response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None


class LoginResponse(TokenResponse):
    """Login response with the authenticated user."""
    user: UserResponse
