"""
User model with a global role and tenant memberships
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING
import uuid
from enum import Enum

from taskdesk.models.tenant import TenantUser
from taskdesk.core.timeutils import utcnow

if TYPE_CHECKING:
    from taskdesk.models.tenant import Tenant


class UserRole(str, Enum):
    """User roles for task access control"""
    MANAGER = "manager"
    TEAM_LEAD = "team_lead"
    AGENT = "agent"


class User(SQLModel, table=True):
    """User model; the role applies in every tenant the user belongs to"""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Profile
    name: str = Field(nullable=False, max_length=255)

    # Authentication
    email: str = Field(unique=True, index=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)

    # RBAC
    role: UserRole = Field(default=UserRole.MANAGER, nullable=False, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    # Relationships
    tenants: List["Tenant"] = Relationship(back_populates="users", link_model=TenantUser)

    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER

    def is_team_lead(self) -> bool:
        return self.role == UserRole.TEAM_LEAD

    def is_agent(self) -> bool:
        return self.role == UserRole.AGENT
