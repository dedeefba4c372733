"""
Tenant resolution and the per-request tenant context
"""

from dataclasses import dataclass
from typing import Optional
import uuid

from fastapi import Depends, Request
from sqlmodel import Session, select
import structlog

from taskdesk.core.config import get_settings
from taskdesk.core.database import get_session
from taskdesk.core.exceptions import BadRequest, NotFound
from taskdesk.models.tenant import Tenant
from taskdesk.models.user import User

logger = structlog.get_logger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class TenantContext:
    """Which tenant's data is visible for this request, and to whom.

    Built once per request and handed to every tenant-scoped service call.
    Nothing keeps it beyond the request, so concurrent requests never share it.
    """

    tenant: Tenant
    user: User

    @property
    def tenant_id(self) -> uuid.UUID:
        return self.tenant.id

    @property
    def user_id(self) -> uuid.UUID:
        return self.user.id


def extract_tenant_identifier(request: Request) -> Optional[str]:
    """Tenant id or slug from the tenant headers, falling back to the query string"""
    identifier = (
        request.headers.get(settings.TENANT_HEADER)
        or request.headers.get(settings.TENANT_HEADER_ALT)
        or request.query_params.get(settings.TENANT_QUERY_PARAM)
    )
    if identifier is not None:
        identifier = identifier.strip()
    return identifier or None


def find_tenant(session: Session, identifier: str) -> Optional[Tenant]:
    """Match on id first, then on slug"""
    try:
        tenant_uuid = uuid.UUID(identifier)
    except ValueError:
        tenant_uuid = None

    if tenant_uuid is not None:
        tenant = session.get(Tenant, tenant_uuid)
        if tenant:
            return tenant

    return session.exec(select(Tenant).where(Tenant.slug == identifier)).first()


def resolve_tenant(session: Session, identifier: Optional[str]) -> Tenant:
    """Resolve an identifier to exactly one tenant or fail"""
    if not identifier:
        raise BadRequest(
            "Tenant could not be identified by request data. "
            f"Provide the {settings.TENANT_HEADER} header or the "
            f"'{settings.TENANT_QUERY_PARAM}' query parameter."
        )

    tenant = find_tenant(session, identifier)
    if not tenant:
        logger.info(f"Tenant not found: {identifier}")
        raise NotFound("Tenant not found")
    return tenant


def get_current_tenant(
    request: Request,
    session: Session = Depends(get_session),
) -> Tenant:
    """Dependency resolving the tenant named by the request"""
    tenant = resolve_tenant(session, extract_tenant_identifier(request))
    logger.debug(f"Tenant context: {tenant.id} ({tenant.slug})")
    return tenant
