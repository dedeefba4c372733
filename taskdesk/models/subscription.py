"""
Subscription and plan feature catalog models
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from taskdesk.core.timeutils import as_utc, utcnow


class SubscriptionPlan(str, Enum):
    """Subscription tiers, totally ordered by level"""
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"

    @property
    def level(self) -> int:
        return PLAN_LEVELS[self]


PLAN_LEVELS = {
    SubscriptionPlan.BASIC: 1,
    SubscriptionPlan.PRO: 2,
    SubscriptionPlan.ENTERPRISE: 3,
}


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class Subscription(SQLModel, table=True):
    """A tenant's subscription to a plan"""

    __tablename__ = "subscriptions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id",
        index=True,
        description="Tenant ID for multi-tenant isolation"
    )

    plan: SubscriptionPlan = Field(default=SubscriptionPlan.BASIC)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.ACTIVE, index=True)

    started_at: datetime = Field(default_factory=utcnow)
    expires_at: Optional[datetime] = Field(default=None, nullable=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Active status and not past its expiry"""
        now = now or utcnow()
        return self.status == SubscriptionStatus.ACTIVE and (
            self.expires_at is None or as_utc(self.expires_at) > as_utc(now)
        )

    @property
    def plan_name(self) -> str:
        return self.plan.value.capitalize()

    # Plan transitions
    def can_upgrade_to(self, plan: SubscriptionPlan) -> tuple[bool, str]:
        if plan.level <= self.plan.level:
            return False, "Invalid upgrade. Please select a higher tier plan."
        return True, "Can upgrade"

    def can_downgrade_to(self, plan: SubscriptionPlan) -> tuple[bool, str]:
        if plan.level >= self.plan.level:
            return False, "Invalid downgrade. Please select a lower tier plan."
        return True, "Can downgrade"

    def change_plan(self, plan: SubscriptionPlan) -> None:
        """Switch plan in place; the billing period restarts, expiry is kept"""
        now = utcnow()
        self.plan = plan
        self.started_at = now
        self.updated_at = now

    def cancel(self) -> None:
        self.status = SubscriptionStatus.CANCELLED
        self.updated_at = utcnow()


class SubscriptionFeature(SQLModel, table=True):
    """Feature catalog entry for a plan (informational, limits are not enforced)"""

    __tablename__ = "subscription_features"
    __table_args__ = (UniqueConstraint("plan", "feature_key", name="uq_subscription_feature_plan_key"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    plan: SubscriptionPlan = Field(index=True)
    feature_key: str = Field(max_length=100)
    feature_name: str = Field(max_length=255)
    description: Optional[str] = None
    is_enabled: bool = Field(default=True)
    limit_value: Optional[int] = Field(default=None, nullable=True)

    def has_limit(self) -> bool:
        return self.limit_value is not None
