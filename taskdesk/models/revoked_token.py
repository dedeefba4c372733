"""
Access tokens invalidated by logout
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
import uuid

from taskdesk.core.timeutils import utcnow


class RevokedToken(SQLModel, table=True):
    __tablename__ = "revoked_tokens"

    jti: str = Field(primary_key=True, max_length=64)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    revoked_at: datetime = Field(default_factory=utcnow)
    expires_at: Optional[datetime] = None
