"""
Tenant-scoped task repository with role-aware visibility
"""

import math
from typing import Optional
import uuid

from sqlalchemy import func, or_
from sqlmodel import Session, select
import structlog

from taskdesk.core import permissions
from taskdesk.core.config import get_settings
from taskdesk.core.exceptions import NotFound, ValidationFailed
from taskdesk.core.tenancy import TenantContext
from taskdesk.core.timeutils import utcnow
from taskdesk.models.task import Task, TaskStatus
from taskdesk.models.tenant import TenantUser
from taskdesk.schemas.task import TaskCreate, TaskUpdate

logger = structlog.get_logger(__name__)
settings = get_settings()

UPDATABLE_FIELDS = ("title", "description", "status", "assigned_to")


class TaskService:
    """Every query is filtered to the tenant of the context it is given"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, ctx: TenantContext, data: TaskCreate) -> Task:
        if data.assigned_to is not None:
            self._ensure_assignable(ctx, data.assigned_to)

        task = Task(
            tenant_id=ctx.tenant_id,
            title=data.title,
            description=data.description,
            status=data.status or TaskStatus.PENDING,
            assigned_to=data.assigned_to,
            created_by=ctx.user_id,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)

        logger.info(f"Task created: {task.id} tenant={ctx.tenant_id} by={ctx.user_id}")
        return task

    def list(
        self,
        ctx: TenantContext,
        status: Optional[TaskStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> dict:
        """One page of the tasks visible to the user, newest first"""
        per_page = min(max(per_page or settings.DEFAULT_PAGE_SIZE, 1), settings.MAX_PAGE_SIZE)
        page = max(page, 1)

        conditions = [
            Task.tenant_id == ctx.tenant_id,
            permissions.visibility_filter(ctx.user),
        ]
        if status is not None:
            conditions.append(Task.status == status)
        if search:
            conditions.append(or_(
                Task.title.icontains(search, autoescape=True),
                Task.description.icontains(search, autoescape=True),
            ))

        total = self.session.exec(
            select(func.count()).select_from(Task).where(*conditions)
        ).one()
        tasks = self.session.exec(
            select(Task)
            .where(*conditions)
            .order_by(Task.created_at.desc(), Task.id)
            .offset((page - 1) * per_page)
            .limit(per_page)
        ).all()

        return {
            "data": tasks,
            "current_page": page,
            "last_page": max(math.ceil(total / per_page), 1),
            "per_page": per_page,
            "total": total,
        }

    def get(self, ctx: TenantContext, task_id: uuid.UUID) -> Task:
        task = self.session.exec(
            select(Task)
            .where(Task.id == task_id)
            .where(Task.tenant_id == ctx.tenant_id)
        ).first()
        if task is None:
            raise NotFound("Task not found")
        return task

    def show(self, ctx: TenantContext, task_id: uuid.UUID) -> Task:
        task = self.get(ctx, task_id)
        permissions.ensure_can_view(ctx.user, task)
        return task

    def update(self, ctx: TenantContext, task_id: uuid.UUID, data: TaskUpdate) -> Task:
        changes = data.model_dump(exclude_unset=True, include=set(UPDATABLE_FIELDS))
        errors = {
            field: [f"The {field} field may not be null."]
            for field in ("title", "status")
            if field in changes and changes[field] is None
        }
        if errors:
            raise ValidationFailed(errors)

        task = self.get(ctx, task_id)
        permissions.ensure_can_edit(ctx.user, task)

        if changes.get("assigned_to") is not None:
            self._ensure_assignable(ctx, changes["assigned_to"])

        for key, value in changes.items():
            setattr(task, key, value)
        task.updated_at = utcnow()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)

        logger.info(f"Task updated: {task.id} fields={sorted(changes)} by={ctx.user_id}")
        return task

    def delete(self, ctx: TenantContext, task_id: uuid.UUID) -> None:
        task = self.get(ctx, task_id)
        permissions.ensure_can_delete(ctx.user, task)

        self.session.delete(task)
        self.session.commit()
        logger.info(f"Task deleted: {task_id} by={ctx.user_id}")

    def _ensure_assignable(self, ctx: TenantContext, user_id: uuid.UUID) -> None:
        """Assignees must be members of the current tenant"""
        membership = self.session.get(TenantUser, (ctx.tenant_id, user_id))
        if membership is None:
            raise ValidationFailed({"assigned_to": ["The selected assigned to is invalid."]})
