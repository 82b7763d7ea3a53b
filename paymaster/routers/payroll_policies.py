"""
PayMaster - Payroll Policies Router
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.database import get_async_session
from paymaster.dependencies import PAYROLL_ADMINS, PAYROLL_READERS, require_role
from paymaster.models.audit import AuditAction
from paymaster.models.user import User
from paymaster.schemas.payroll import PayrollPolicyCreate, PayrollPolicyResponse
from paymaster.services.audit_service import AuditService
from paymaster.services.payroll_policy_service import PayrollPolicyService


router = APIRouter()


@router.post(
    "",
    response_model=PayrollPolicyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Set payroll policy",
)
async def set_policy(
    data: PayrollPolicyCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_ADMINS)),
):
    """Record a new policy. It takes effect immediately and supersedes earlier ones."""
    policy = await PayrollPolicyService(db).set_policy(
        default_pf_percent=data.default_pf_percent,
        overtime_rate_per_hour=data.overtime_rate_per_hour,
    )
    await AuditService(db).log_action(
        current_user.id,
        AuditAction.SET_PAYROLL_POLICY,
        f"Set payroll policy: PF {policy.default_pf_percent}%, overtime {policy.overtime_rate_per_hour}/h",
    )
    return policy


@router.get("/latest", response_model=PayrollPolicyResponse, summary="Latest payroll policy")
async def latest_policy(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_role(PAYROLL_READERS)),
):
    policy = await PayrollPolicyService(db).latest()
    if policy is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No payroll policy has been set",
        )
    return policy
