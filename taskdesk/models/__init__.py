from taskdesk.models.tenant import Tenant, TenantUser
from taskdesk.models.user import User, UserRole
from taskdesk.models.task import Task, TaskStatus
from taskdesk.models.subscription import (
    Subscription, SubscriptionFeature, SubscriptionPlan, SubscriptionStatus, PLAN_LEVELS
)
from taskdesk.models.dashboard_widget import DashboardWidget
from taskdesk.models.revoked_token import RevokedToken
