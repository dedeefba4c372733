"""
Subscription gate: active plan lookup, plan changes and the feature catalog
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlmodel import Session, select
import structlog

from taskdesk.core.exceptions import InvalidTransition, NotFound
from taskdesk.core.tenancy import TenantContext
from taskdesk.core.timeutils import utcnow
from taskdesk.models.subscription import (
    Subscription,
    SubscriptionFeature,
    SubscriptionPlan,
    SubscriptionStatus,
)
from taskdesk.services.reference_data import PLAN_PRICES

logger = structlog.get_logger(__name__)


class SubscriptionService:
    """Plan state of the tenant in a request context"""

    def __init__(self, session: Session):
        self.session = session

    def get_active(self, ctx: TenantContext) -> Optional[Subscription]:
        now = utcnow()
        return self.session.exec(
            select(Subscription)
            .where(Subscription.tenant_id == ctx.tenant_id)
            .where(Subscription.status == SubscriptionStatus.ACTIVE)
            .where(or_(Subscription.expires_at.is_(None), Subscription.expires_at > now))
            .order_by(Subscription.started_at.desc())
        ).first()

    def current(self, ctx: TenantContext) -> Subscription:
        subscription = self.get_active(ctx)
        if subscription is None:
            raise NotFound("No active subscription found")
        return subscription

    def start_subscription(
        self,
        ctx: TenantContext,
        plan: SubscriptionPlan,
        expires_at: Optional[datetime] = None,
    ) -> Subscription:
        """Add a new active subscription, retiring any other one first.

        Flushes but does not commit, so it can join a larger unit of work.
        """
        previous = self.session.exec(
            select(Subscription)
            .where(Subscription.tenant_id == ctx.tenant_id)
            .where(Subscription.status == SubscriptionStatus.ACTIVE)
        ).all()
        for subscription in previous:
            if subscription.is_active():
                subscription.cancel()
            else:
                subscription.status = SubscriptionStatus.EXPIRED
                subscription.updated_at = utcnow()
            self.session.add(subscription)

        subscription = Subscription(
            tenant_id=ctx.tenant_id,
            plan=plan,
            status=SubscriptionStatus.ACTIVE,
            started_at=utcnow(),
            expires_at=expires_at,
        )
        self.session.add(subscription)
        self.session.flush()

        logger.info(f"Subscription started: tenant={ctx.tenant_id} plan={plan.value} retired={len(previous)}")
        return subscription

    def upgrade(self, ctx: TenantContext, plan: SubscriptionPlan) -> Subscription:
        subscription = self.current(ctx)
        allowed, reason = subscription.can_upgrade_to(plan)
        if not allowed:
            raise InvalidTransition(reason)
        return self._change_plan(ctx, subscription, plan)

    def downgrade(self, ctx: TenantContext, plan: SubscriptionPlan) -> Subscription:
        subscription = self.current(ctx)
        allowed, reason = subscription.can_downgrade_to(plan)
        if not allowed:
            raise InvalidTransition(reason)
        return self._change_plan(ctx, subscription, plan)

    def _change_plan(
        self,
        ctx: TenantContext,
        subscription: Subscription,
        plan: SubscriptionPlan,
    ) -> Subscription:
        previous_plan = subscription.plan
        subscription.change_plan(plan)
        self.session.add(subscription)
        self.session.commit()
        self.session.refresh(subscription)

        logger.info(
            f"Subscription plan changed: tenant={ctx.tenant_id} "
            f"{previous_plan.value} -> {plan.value} by user={ctx.user_id}"
        )
        return subscription

    def features_for(self, plan: SubscriptionPlan) -> List[SubscriptionFeature]:
        """Enabled features of a plan"""
        return list(self.session.exec(
            select(SubscriptionFeature)
            .where(SubscriptionFeature.plan == plan)
            .where(SubscriptionFeature.is_enabled == True)  # noqa: E712
            .order_by(SubscriptionFeature.id)
        ).all())

    def tenant_features(self, ctx: TenantContext) -> Tuple[SubscriptionPlan, List[SubscriptionFeature]]:
        subscription = self.current(ctx)
        return subscription.plan, self.features_for(subscription.plan)

    def plans(self) -> List[dict]:
        return [
            {
                "key": plan,
                "name": plan.value.capitalize(),
                "price": PLAN_PRICES[plan],
                "features": self.features_for(plan),
            }
            for plan in SubscriptionPlan
        ]
