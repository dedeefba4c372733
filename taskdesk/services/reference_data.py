"""
Static plan feature catalog and dashboard widget catalog
"""

from sqlmodel import Session, select
import structlog

from taskdesk.models.dashboard_widget import DashboardWidget
from taskdesk.models.subscription import SubscriptionFeature, SubscriptionPlan
from taskdesk.models.user import UserRole

logger = structlog.get_logger(__name__)


PLAN_PRICES = {
    SubscriptionPlan.BASIC: 0,
    SubscriptionPlan.PRO: 29,
    SubscriptionPlan.ENTERPRISE: 99,
}

FEATURE_CATALOG = [
    # Basic
    {"plan": SubscriptionPlan.BASIC, "feature_key": "max_agents", "feature_name": "Maximum Agents",
     "description": "Maximum number of agents allowed", "is_enabled": True, "limit_value": 5},
    {"plan": SubscriptionPlan.BASIC, "feature_key": "basic_tasks", "feature_name": "Basic Task Management",
     "description": "Create and manage basic tasks", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.BASIC, "feature_key": "no_automation", "feature_name": "No Automation",
     "description": "Automation features not available", "is_enabled": False, "limit_value": None},

    # Pro
    {"plan": SubscriptionPlan.PRO, "feature_key": "max_agents", "feature_name": "Maximum Agents",
     "description": "Maximum number of agents allowed", "is_enabled": True, "limit_value": 20},
    {"plan": SubscriptionPlan.PRO, "feature_key": "advanced_tasks", "feature_name": "Advanced Task Management",
     "description": "Advanced task features and customization", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.PRO, "feature_key": "basic_automation", "feature_name": "Basic Automation",
     "description": "Basic automation tools", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.PRO, "feature_key": "reports", "feature_name": "Reports",
     "description": "Access to reporting features", "is_enabled": True, "limit_value": None},

    # Enterprise (max_agents without a limit means unlimited)
    {"plan": SubscriptionPlan.ENTERPRISE, "feature_key": "max_agents", "feature_name": "Maximum Agents",
     "description": "Maximum number of agents allowed", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.ENTERPRISE, "feature_key": "all_features", "feature_name": "All Features",
     "description": "Access to all features", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.ENTERPRISE, "feature_key": "advanced_automation", "feature_name": "Advanced Automation",
     "description": "Advanced automation tools", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.ENTERPRISE, "feature_key": "advanced_reports", "feature_name": "Advanced Reports",
     "description": "Advanced reporting and analytics", "is_enabled": True, "limit_value": None},
    {"plan": SubscriptionPlan.ENTERPRISE, "feature_key": "api_access", "feature_name": "API Access",
     "description": "Access to API endpoints", "is_enabled": True, "limit_value": None},
]

WIDGET_CATALOG = [
    # Manager
    {"role": UserRole.MANAGER, "widget_key": "user_management", "widget_name": "User Management",
     "description": "Manage users and their roles", "order": 1},
    {"role": UserRole.MANAGER, "widget_key": "reports", "widget_name": "Reports",
     "description": "View detailed reports and analytics", "order": 2},
    {"role": UserRole.MANAGER, "widget_key": "analytics", "widget_name": "Analytics",
     "description": "Performance metrics and analytics", "order": 3},
    {"role": UserRole.MANAGER, "widget_key": "activity_logs", "widget_name": "Activity Logs",
     "description": "View system activity logs", "order": 4},
    {"role": UserRole.MANAGER, "widget_key": "subscription_overview", "widget_name": "Subscription Overview",
     "description": "Current subscription and billing", "order": 5},

    # Team lead
    {"role": UserRole.TEAM_LEAD, "widget_key": "team_tasks", "widget_name": "Team Tasks",
     "description": "Tasks assigned to your team", "order": 1},
    {"role": UserRole.TEAM_LEAD, "widget_key": "performance_metrics", "widget_name": "Performance Metrics",
     "description": "Team performance statistics", "order": 2},
    {"role": UserRole.TEAM_LEAD, "widget_key": "team_activity", "widget_name": "Team Activity",
     "description": "Recent team activity", "order": 3},

    # Agent
    {"role": UserRole.AGENT, "widget_key": "my_tasks", "widget_name": "My Tasks",
     "description": "Tasks assigned to you", "order": 1},
    {"role": UserRole.AGENT, "widget_key": "notifications", "widget_name": "Notifications",
     "description": "Your notifications", "order": 2},
    {"role": UserRole.AGENT, "widget_key": "personal_stats", "widget_name": "Personal Stats",
     "description": "Your performance statistics", "order": 3},
]


def seed_reference_data(session: Session) -> None:
    """Insert or refresh the feature and widget catalogs, keyed by their natural keys"""
    for entry in FEATURE_CATALOG:
        feature = session.exec(
            select(SubscriptionFeature)
            .where(SubscriptionFeature.plan == entry["plan"])
            .where(SubscriptionFeature.feature_key == entry["feature_key"])
        ).first()
        if feature is None:
            feature = SubscriptionFeature(**entry)
        else:
            for key, value in entry.items():
                setattr(feature, key, value)
        session.add(feature)

    for entry in WIDGET_CATALOG:
        widget = session.exec(
            select(DashboardWidget).where(DashboardWidget.widget_key == entry["widget_key"])
        ).first()
        if widget is None:
            widget = DashboardWidget(is_active=True, **entry)
        else:
            for key, value in entry.items():
                setattr(widget, key, value)
        session.add(widget)

    session.commit()
    logger.info(f"Reference data seeded: {len(FEATURE_CATALOG)} features, {len(WIDGET_CATALOG)} widgets")
