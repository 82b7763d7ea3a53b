"""
PayMaster - FastAPI Dependencies

Shared dependencies for authentication, database sessions, and role-based
access control.
"""

import uuid
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.models.employee import Employee
from paymaster.models.user import User, UserRole
from paymaster.utils.security import verify_access_token


# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Get the current authenticated user from the bearer JWT.

    Raises:
        HTTPException: If token is invalid or user not found
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID in token",
        )

    user = await db.get(User, user_uuid)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_session),
) -> Optional[User]:
    """Current user if a valid bearer token was sent, otherwise None."""
    if not credentials:
        return None

    payload = verify_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return None

    try:
        user = await db.get(User, uuid.UUID(payload["sub"]))
    except ValueError:
        return None

    if user is None or not user.is_active:
        return None
    return user


def require_role(allowed_roles: List[UserRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.post("/generate")
        async def generate(user: User = Depends(require_role([UserRole.ADMIN]))):
            ...
    """
    async def role_checker(
        current_user: User = Depends(get_current_user),
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {[r.value for r in allowed_roles]}",
            )
        return current_user

    return role_checker


# Common role groups
ALL_ROLES = list(UserRole)
PAYROLL_ADMINS = [UserRole.ADMIN, UserRole.PAYROLL_PROCESSOR]
PAYROLL_READERS = [UserRole.ADMIN, UserRole.PAYROLL_PROCESSOR, UserRole.EMPLOYEE, UserRole.MANAGER]
REPORT_READERS = [UserRole.ADMIN, UserRole.PAYROLL_PROCESSOR, UserRole.MANAGER]
LEAVE_REVIEWERS = [UserRole.ADMIN, UserRole.MANAGER, UserRole.HR_MANAGER, UserRole.SUPERVISOR]


async def ensure_employee_access(
    db: AsyncSession,
    current_user: User,
    employee_id: uuid.UUID,
) -> None:
    """
    Restrict users with the employee role to their own records.

    Other roles pass through; their access is decided by require_role.
    """
    if current_user.role != UserRole.EMPLOYEE:
        return

    result = await db.execute(
        select(Employee.id).where(Employee.user_id == current_user.id)
    )
    own_employee_id = result.scalar_one_or_none()
    if own_employee_id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Employees can only access their own records",
        )
