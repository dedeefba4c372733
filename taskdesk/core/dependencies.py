"""
Authentication dependencies for FastAPI
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Dict, Optional
import uuid
import structlog

from sqlmodel import Session

from taskdesk.core.auth import decode_access_token
from taskdesk.core.database import get_session
from taskdesk.core.exceptions import Forbidden, Unauthenticated
from taskdesk.core.tenancy import TenantContext, get_current_tenant
from taskdesk.models.revoked_token import RevokedToken
from taskdesk.models.tenant import Tenant, TenantUser
from taskdesk.models.user import User

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: Session = Depends(get_session),
) -> Dict:
    """Validated, non-revoked JWT claims of the bearer token"""
    if credentials is None:
        raise Unauthenticated()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise Unauthenticated()

    if session.get(RevokedToken, payload["jti"]) is not None:
        logger.info(f"Revoked token presented: {payload['jti']}")
        raise Unauthenticated()

    return payload


def get_current_user(
    payload: Dict = Depends(get_token_payload),
    session: Session = Depends(get_session),
) -> User:
    """Get the authenticated user from the JWT subject"""
    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        raise Unauthenticated()

    user = session.get(User, user_id)
    if user is None:
        raise Unauthenticated()

    logger.debug(f"User authenticated: {user.id}")
    return user


def get_tenant_context(
    tenant: Tenant = Depends(get_current_tenant),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> TenantContext:
    """Tenant context for an authenticated member of the resolved tenant"""
    if session.get(TenantUser, (tenant.id, user.id)) is None:
        logger.warning(f"User {user.id} is not a member of tenant {tenant.id}")
        raise Forbidden("You are not a member of this tenant.")

    return TenantContext(tenant=tenant, user=user)
