"""
PayMaster - Audit Log Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class AuditLogResponse(BaseModel):
    """Audit log entry response."""
    id: UUID
    user_id: Optional[UUID] = None
    action: str
    description: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
