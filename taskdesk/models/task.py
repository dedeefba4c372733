"""
Task model - always owned by exactly one tenant
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from enum import Enum
import uuid

from taskdesk.core.timeutils import utcnow

if TYPE_CHECKING:
    from taskdesk.models.user import User


class TaskStatus(str, Enum):
    """Lifecycle status of a task"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Task(SQLModel, table=True):
    """Task with tenant isolation"""

    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id",
        index=True,
        description="Tenant ID for multi-tenant isolation"
    )

    title: str = Field(nullable=False, max_length=255)
    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.PENDING, index=True)

    assigned_to: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        nullable=True,
    )
    created_by: uuid.UUID = Field(foreign_key="users.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: Optional[datetime] = None

    # Relationships
    assigned_user: Optional["User"] = Relationship(
        sa_relationship_kwargs={
            "foreign_keys": "Task.assigned_to",
            "lazy": "select"
        }
    )
    creator: Optional["User"] = Relationship(
        sa_relationship_kwargs={
            "foreign_keys": "Task.created_by",
            "lazy": "select"
        }
    )
