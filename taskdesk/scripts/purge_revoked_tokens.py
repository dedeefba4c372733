"""
Job deleting revocation records of tokens that have expired anyway

An expired JWT is rejected on decode, so its revocation row is no longer
needed. Run periodically (e.g. via cron).
"""

import sys
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select
import structlog

from taskdesk.core.database import engine
from taskdesk.core.timeutils import utcnow
from taskdesk.models.revoked_token import RevokedToken

logger = structlog.get_logger(__name__)


def purge_revoked_tokens(session: Session, now: Optional[datetime] = None) -> dict:
    """Delete revoked tokens whose expires_at has passed"""
    now = now or utcnow()
    try:
        stale = session.exec(
            select(RevokedToken).where(
                RevokedToken.expires_at != None,  # noqa: E711
                RevokedToken.expires_at <= now,
            )
        ).all()

        for token in stale:
            session.delete(token)

        session.commit()
        logger.info(f"Purged {len(stale)} expired revoked tokens")
        return {"purged": len(stale)}

    except Exception as e:
        session.rollback()
        logger.error(f"Error purging revoked tokens: {e}")
        raise


def main():
    logger.info("Starting revoked token purge job")
    try:
        with Session(engine) as session:
            results = purge_revoked_tokens(session)
        logger.info(f"Revoked token purge complete: {results}")
    except Exception as e:
        logger.error(f"Fatal error in revoked token purge job: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
