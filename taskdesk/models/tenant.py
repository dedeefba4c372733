"""
Tenant model - Multi-tenancy foundation
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING
import uuid

from taskdesk.core.timeutils import utcnow

if TYPE_CHECKING:
    from taskdesk.models.user import User


class TenantUser(SQLModel, table=True):
    """Membership link between users and tenants"""

    __tablename__ = "tenant_users"

    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)


class Tenant(SQLModel, table=True):
    """Tenant model for multi-tenant architecture"""

    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255, description="Unique human-readable tenant identifier")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    # Relationships
    users: List["User"] = Relationship(back_populates="tenants", link_model=TenantUser)
