"""
PayMaster - Audit Trail Service

Writes and reads the audit log.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paymaster.models.audit import AuditLog, AuditAction


class AuditService:
    """Service for audit logging."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def log_action(
        self,
        user_id: Optional[uuid.UUID],
        action: Union[AuditAction, str],
        description: Optional[str] = None,
    ) -> AuditLog:
        """
        Log an audit action.

        Args:
            user_id: ID of user who performed the action
            action: Action label, e.g. AuditAction.GENERATE_PAYROLL
            description: Free-text detail

        Returns:
            Created AuditLog record
        """
        audit_log = AuditLog(
            user_id=user_id,
            action=action.value if isinstance(action, AuditAction) else action,
            description=description,
            timestamp=datetime.now(timezone.utc),
        )
        self.db.add(audit_log)
        await self.db.commit()
        return audit_log

    async def list_for_user(self, user_id: uuid.UUID, limit: int = 200) -> List[AuditLog]:
        """Audit entries of a user, newest first."""
        result = await self.db.execute(
            select(AuditLog)
            .where(AuditLog.user_id == user_id)
            .order_by(AuditLog.timestamp.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
