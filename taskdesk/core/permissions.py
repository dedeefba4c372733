"""
Task authorization policy

Roles are capability sets. Every role sees and edits the tasks assigned to it
and may delete the tasks it created; the permissions below widen that.
"""

from enum import Enum
from typing import Set

from sqlalchemy import or_, true
from sqlalchemy.sql.elements import ColumnElement
import structlog

from taskdesk.core.exceptions import Forbidden
from taskdesk.models.task import Task
from taskdesk.models.user import User, UserRole

logger = structlog.get_logger(__name__)


class Permission(str, Enum):
    """Permission definitions"""
    TASK_LIST_ALL = "task:list_all"
    TASK_LIST_CREATED = "task:list_created"
    TASK_VIEW_ANY = "task:view_any"
    TASK_EDIT_ANY = "task:edit_any"
    TASK_DELETE_ANY = "task:delete_any"


# Role permission mapping
ROLE_PERMISSIONS = {
    UserRole.MANAGER: {
        Permission.TASK_LIST_ALL,
        Permission.TASK_VIEW_ANY,
        Permission.TASK_EDIT_ANY,
        Permission.TASK_DELETE_ANY,
    },
    UserRole.TEAM_LEAD: {
        # Listing is limited to own tasks, single-task view and update are not
        Permission.TASK_LIST_CREATED,
        Permission.TASK_VIEW_ANY,
        Permission.TASK_EDIT_ANY,
    },
    UserRole.AGENT: set(),
}


def get_permissions_for_role(role: UserRole) -> Set[Permission]:
    """Get permissions for a given role"""
    return ROLE_PERMISSIONS.get(UserRole(role), set())


def has_permission(user: User, permission: Permission) -> bool:
    return permission in get_permissions_for_role(user.role)


def visibility_filter(user: User) -> ColumnElement[bool]:
    """WHERE clause selecting the tasks a user may see in listings"""
    if has_permission(user, Permission.TASK_LIST_ALL):
        return true()

    clauses = [Task.assigned_to == user.id]
    if has_permission(user, Permission.TASK_LIST_CREATED):
        clauses.append(Task.created_by == user.id)
    return or_(*clauses)


def can_view(user: User, task: Task) -> bool:
    return has_permission(user, Permission.TASK_VIEW_ANY) or task.assigned_to == user.id


def can_edit(user: User, task: Task) -> bool:
    return has_permission(user, Permission.TASK_EDIT_ANY) or task.assigned_to == user.id


def can_delete(user: User, task: Task) -> bool:
    # Being assigned a task does not allow deleting it
    return has_permission(user, Permission.TASK_DELETE_ANY) or task.created_by == user.id


def _deny(user: User, task: Task, action: str) -> None:
    logger.info(
        "task_access_denied",
        action=action,
        user_id=str(user.id),
        role=UserRole(user.role).value,
        task_id=str(task.id),
    )
    raise Forbidden(f"You do not have permission to {action} this task")


def ensure_can_view(user: User, task: Task) -> None:
    if not can_view(user, task):
        _deny(user, task, "view")


def ensure_can_edit(user: User, task: Task) -> None:
    if not can_edit(user, task):
        _deny(user, task, "update")


def ensure_can_delete(user: User, task: Task) -> None:
    if not can_delete(user, task):
        _deny(user, task, "delete")
