"""
PayMaster - Authentication Router

Registration, login, refresh-token rotation and logout.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import get_current_user, get_optional_user
from paymaster.models.audit import AuditAction
from paymaster.models.user import User, UserRole
from paymaster.schemas.auth import (
    LoginResponse,
    RefreshTokenRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from paymaster.services.audit_service import AuditService
from paymaster.services.auth_service import AuthService


router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    data: UserRegister,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Register a user account.

    Anyone may self-register as an employee. Other roles can only be
    assigned by an admin, except for the very first account.
    """
    service = AuthService(db)

    if data.role != UserRole.EMPLOYEE:
        is_admin = current_user is not None and current_user.role == UserRole.ADMIN
        if not is_admin and await service.count_users() > 0:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only an admin can register users with this role",
            )

    user = await service.register_user(
        username=data.username,
        email=data.email,
        password=data.password,
        role=data.role,
    )

    await AuditService(db).log_action(
        current_user.id if current_user else user.id,
        AuditAction.REGISTER_USER,
        f"Registered user {user.username} with role {user.role.value}",
    )
    return user


@router.post("/login", response_model=LoginResponse, summary="Log in")
async def login(
    data: UserLogin,
    db: AsyncSession = Depends(get_async_session),
):
    """Authenticate with username and password and receive a token pair."""
    service = AuthService(db)
    user = await service.authenticate_user(data.username, data.password)
    tokens = await service.issue_tokens(user)

    await AuditService(db).log_action(user.id, AuditAction.LOGIN, f"User {user.username} logged in")

    return LoginResponse(**tokens, user=UserResponse.model_validate(user))


@router.post("/refresh", response_model=TokenResponse, summary="Rotate refresh token")
async def refresh(
    data: RefreshTokenRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Exchange a refresh token for a new access and refresh token."""
    _, tokens = await AuthService(db).refresh(data.refresh_token)
    return TokenResponse(**tokens)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Revoke refresh token")
async def logout(
    data: RefreshTokenRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Revoke a refresh token. Unknown tokens are ignored."""
    await AuthService(db).revoke(data.refresh_token)


@router.get("/me", response_model=UserResponse, summary="Current user")
async def me(current_user: User = Depends(get_current_user)):
    return current_user
