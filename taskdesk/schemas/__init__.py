"""
Schemas module
"""

from taskdesk.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, TenantRead, UserRead
from taskdesk.schemas.task import TaskCreate, TaskPage, TaskRead, TaskResponse, TaskUpdate
from taskdesk.schemas.subscription import (
    FeatureRead, PlanChangeRequest, PlanRead, PlansResponse, SubscriptionRead,
    SubscriptionResponse, TenantFeaturesResponse,
)
from taskdesk.schemas.dashboard import StatsResponse, WidgetRead, WidgetsResponse

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MeResponse",
    "RegisterRequest",
    "TenantRead",
    "UserRead",
    "TaskCreate",
    "TaskPage",
    "TaskRead",
    "TaskResponse",
    "TaskUpdate",
    "FeatureRead",
    "PlanChangeRequest",
    "PlanRead",
    "PlansResponse",
    "SubscriptionRead",
    "SubscriptionResponse",
    "TenantFeaturesResponse",
    "StatsResponse",
    "WidgetRead",
    "WidgetsResponse",
]
