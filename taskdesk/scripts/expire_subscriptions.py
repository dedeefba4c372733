"""
Job marking subscriptions past their expiry as expired

Lookups already ignore expired subscriptions; this keeps the stored status
in line with that. Run periodically (e.g. via cron).
"""

import sys
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select
import structlog

from taskdesk.core.database import engine
from taskdesk.core.timeutils import utcnow
from taskdesk.models.subscription import Subscription, SubscriptionStatus

logger = structlog.get_logger(__name__)


def expire_lapsed_subscriptions(session: Session, now: Optional[datetime] = None) -> dict:
    """Flip active subscriptions whose expires_at has passed to expired"""
    now = now or utcnow()
    try:
        lapsed = session.exec(
            select(Subscription).where(
                Subscription.status == SubscriptionStatus.ACTIVE,
                Subscription.expires_at != None,  # noqa: E711
                Subscription.expires_at <= now,
            )
        ).all()

        for subscription in lapsed:
            subscription.status = SubscriptionStatus.EXPIRED
            subscription.updated_at = now
            session.add(subscription)
            logger.info(f"Expired subscription {subscription.id} (tenant: {subscription.tenant_id})")

        session.commit()
        return {"expired": len(lapsed)}

    except Exception as e:
        session.rollback()
        logger.error(f"Error expiring subscriptions: {e}")
        raise


def main():
    logger.info("Starting subscription expiry job")
    try:
        with Session(engine) as session:
            results = expire_lapsed_subscriptions(session)
        logger.info(f"Subscription expiry complete: {results}")
    except Exception as e:
        logger.error(f"Fatal error in subscription expiry job: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
