"""
PayMaster - Payroll Policy Service

Policies are append-only. Each new policy takes effect from the moment it
is set and the latest one supplies the default PF rate.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.payroll import PayrollPolicy


class PayrollPolicyService:
    """Service for payroll policies."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def set_policy(
        self,
        default_pf_percent: Decimal,
        overtime_rate_per_hour: Decimal = Decimal("0"),
    ) -> PayrollPolicy:
        """Record a new policy effective from now."""
        policy = PayrollPolicy(
            default_pf_percent=default_pf_percent,
            overtime_rate_per_hour=overtime_rate_per_hour,
            effective_from=datetime.now(timezone.utc),
        )
        self.db.add(policy)
        await self.db.commit()
        await self.db.refresh(policy)
        return policy

    async def latest(self) -> Optional[PayrollPolicy]:
        """Most recently effective policy, or None if none was ever set."""
        result = await self.db.execute(
            select(PayrollPolicy)
            .order_by(PayrollPolicy.effective_from.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
