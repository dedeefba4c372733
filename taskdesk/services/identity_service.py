"""
Identity store: tenant registration, login and logout
"""

from datetime import datetime, timezone
from typing import Dict, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from taskdesk.core.auth import create_access_token, hash_password, verify_password
from taskdesk.core.config import get_settings
from taskdesk.core.database import atomic
from taskdesk.core.exceptions import NotFound, Unauthenticated, ValidationFailed
from taskdesk.core.tenancy import TenantContext, find_tenant
from taskdesk.core.timeutils import utcnow
from taskdesk.models.revoked_token import RevokedToken
from taskdesk.models.subscription import SubscriptionPlan
from taskdesk.models.tenant import Tenant, TenantUser
from taskdesk.models.user import User, UserRole
from taskdesk.schemas.auth import LoginRequest, RegisterRequest
from taskdesk.services.subscription_service import SubscriptionService

logger = structlog.get_logger(__name__)
settings = get_settings()


class IdentityService:
    def __init__(self, session: Session):
        self.session = session

    def register(self, data: RegisterRequest) -> Tuple[User, Tenant, str]:
        """Create a tenant with its first member and a starter subscription.

        Tenant, user, membership and subscription are committed together or
        not at all.
        """
        self._validate_registration(data)

        try:
            with atomic(self.session):
                tenant = Tenant(name=data.tenant_name, slug=data.tenant_slug)
                user = User(
                    name=data.name,
                    email=data.email,
                    password_hash=hash_password(data.password),
                    role=data.role or UserRole.MANAGER,
                )
                self.session.add(tenant)
                self.session.add(user)
                self.session.flush()
                self.session.add(TenantUser(tenant_id=tenant.id, user_id=user.id))
                self.session.flush()

                # The new tenant becomes the context for the rest of registration
                ctx = TenantContext(tenant=tenant, user=user)
                SubscriptionService(self.session).start_subscription(
                    ctx, SubscriptionPlan(settings.DEFAULT_PLAN)
                )
        except IntegrityError:
            # Lost a race against a concurrent registration with the same slug or email
            logger.warning(f"Registration conflict for slug={data.tenant_slug} email={data.email}")
            self._validate_registration(data)
            raise

        self.session.refresh(tenant)
        self.session.refresh(user)
        logger.info(f"Tenant registered: {tenant.id} ({tenant.slug}) owner={user.id}")

        token = create_access_token(user_id=user.id, tenant_id=tenant.id, role=user.role.value)
        return user, tenant, token

    def authenticate(self, data: LoginRequest) -> Tuple[User, Tenant, str]:
        tenant = find_tenant(self.session, data.tenant_id)
        if tenant is None:
            raise NotFound("Tenant not found")

        # Only members of the tenant can log into it
        user = self.session.exec(
            select(User)
            .join(TenantUser, TenantUser.user_id == User.id)
            .where(TenantUser.tenant_id == tenant.id)
            .where(User.email == data.email)
        ).first()

        if user is None or not verify_password(data.password, user.password_hash):
            logger.info(f"Login failed for {data.email} in tenant {tenant.id}")
            raise Unauthenticated("Invalid credentials")

        user.last_login_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(f"User logged in: {user.id} tenant={tenant.id}")
        token = create_access_token(user_id=user.id, tenant_id=tenant.id, role=user.role.value)
        return user, tenant, token

    def logout(self, user: User, token_payload: Dict) -> None:
        """Revoke the presented access token"""
        revoked = RevokedToken(
            jti=token_payload["jti"],
            user_id=user.id,
            expires_at=datetime.fromtimestamp(token_payload["exp"], timezone.utc),
        )
        self.session.add(revoked)
        self.session.commit()
        logger.info(f"User logged out: {user.id}")

    def _validate_registration(self, data: RegisterRequest) -> None:
        errors: Dict[str, List[str]] = {}

        if self.session.exec(select(Tenant).where(Tenant.slug == data.tenant_slug)).first():
            errors["tenant_slug"] = ["The tenant slug has already been taken."]
        if self.session.exec(select(User).where(User.email == data.email)).first():
            errors["email"] = ["The email has already been taken."]
        if data.password != data.password_confirmation:
            errors["password"] = ["The password confirmation does not match."]

        if errors:
            raise ValidationFailed(errors)
