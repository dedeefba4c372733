"""
Dashboard widgets and role-specific task statistics
"""

from typing import Dict, List
import uuid

from sqlalchemy import func, or_
from sqlmodel import Session, select

from taskdesk.core.tenancy import TenantContext
from taskdesk.models.dashboard_widget import DashboardWidget
from taskdesk.models.task import Task, TaskStatus
from taskdesk.models.user import UserRole


class DashboardService:
    def __init__(self, session: Session):
        self.session = session

    def widgets(self, role: UserRole) -> List[DashboardWidget]:
        """Active widgets of a role in display order"""
        return list(self.session.exec(
            select(DashboardWidget)
            .where(DashboardWidget.role == role)
            .where(DashboardWidget.is_active == True)  # noqa: E712
            .order_by(DashboardWidget.order)
        ).all())

    def stats(self, ctx: TenantContext) -> Dict[str, int]:
        user = ctx.user
        stats = {
            "total_tasks": self._count(ctx),
            "pending_tasks": self._count(ctx, Task.status == TaskStatus.PENDING),
            "completed_tasks": self._count(ctx, Task.status == TaskStatus.COMPLETED),
        }

        if user.is_manager():
            stats["in_progress_tasks"] = self._count(ctx, Task.status == TaskStatus.IN_PROGRESS)
            stats["cancelled_tasks"] = self._count(ctx, Task.status == TaskStatus.CANCELLED)
        elif user.is_team_lead():
            stats["team_tasks"] = self._count(ctx, or_(
                Task.assigned_to == user.id,
                Task.assigned_to.in_(self._team_member_ids(ctx)),
            ))
        elif user.is_agent():
            stats["my_tasks"] = self._count(ctx, Task.assigned_to == user.id)
            stats["my_pending_tasks"] = self._count(
                ctx,
                Task.assigned_to == user.id,
                Task.status == TaskStatus.PENDING,
            )

        return stats

    def _team_member_ids(self, ctx: TenantContext) -> List[uuid.UUID]:
        """Users reporting to the team lead in the context.

        There is no team model yet, so a team lead's team is only themselves
        and this contributes nothing beyond their own assignments.
        """
        return []

    def _count(self, ctx: TenantContext, *conditions) -> int:
        return self.session.exec(
            select(func.count())
            .select_from(Task)
            .where(Task.tenant_id == ctx.tenant_id, *conditions)
        ).one()
