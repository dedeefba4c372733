"""
Tasks API endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
import uuid

from taskdesk.core.database import get_session
from taskdesk.core.dependencies import get_tenant_context
from taskdesk.core.tenancy import TenantContext
from taskdesk.models.task import TaskStatus
from taskdesk.schemas.task import TaskCreate, TaskPage, TaskRead, TaskResponse, TaskUpdate
from taskdesk.services.task_service import TaskService

router = APIRouter()


@router.get("", response_model=TaskPage)
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(default=None, alias="status"),
    search: Optional[str] = Query(default=None, max_length=255),
    per_page: Optional[int] = Query(default=None, ge=1),
    page: int = Query(default=1, ge=1),
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """List tasks visible to the current user"""
    result = TaskService(session).list(
        ctx, status=status_filter, search=search, page=page, per_page=per_page
    )
    result["data"] = [TaskRead.model_validate(task) for task in result["data"]]
    return TaskPage(**result)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Create a task in the current tenant"""
    task = TaskService(session).create(ctx, payload)
    return TaskResponse(message="Task created successfully", task=TaskRead.model_validate(task))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: uuid.UUID,
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Get a task by ID"""
    task = TaskService(session).show(ctx, task_id)
    return TaskResponse(task=TaskRead.model_validate(task))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdate,
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Update a task"""
    task = TaskService(session).update(ctx, task_id, payload)
    return TaskResponse(message="Task updated successfully", task=TaskRead.model_validate(task))


@router.delete("/{task_id}")
def delete_task(
    task_id: uuid.UUID,
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Delete a task"""
    TaskService(session).delete(ctx, task_id)
    return {"message": "Task deleted successfully"}
