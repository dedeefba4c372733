"""
Pydantic schemas for tasks
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
import uuid

from taskdesk.models.task import TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[uuid.UUID] = None


class TaskUpdate(BaseModel):
    """Partial update; only fields present in the request are applied"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[uuid.UUID] = None


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    assigned_to: Optional[uuid.UUID] = None
    created_by: uuid.UUID
    created_at: datetime
    updated_at: Optional[datetime] = None
    assigned_user: Optional[UserSummary] = None
    creator: Optional[UserSummary] = None


class TaskPage(BaseModel):
    """One page of a task listing"""
    data: List[TaskRead]
    current_page: int
    last_page: int
    per_page: int
    total: int


class TaskResponse(BaseModel):
    message: Optional[str] = None
    task: TaskRead
