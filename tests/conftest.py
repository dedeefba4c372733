"""
Test configuration for pytest
"""

import pytest
import os
from functools import lru_cache
from types import SimpleNamespace
from typing import Generator

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session

import taskdesk.models  # noqa: F401
from taskdesk.core.auth import create_access_token, hash_password
from taskdesk.core.database import get_session
from taskdesk.core.timeutils import utcnow
from taskdesk.main import app
from taskdesk.models.subscription import Subscription, SubscriptionPlan, SubscriptionStatus
from taskdesk.models.task import Task, TaskStatus
from taskdesk.models.tenant import Tenant, TenantUser
from taskdesk.models.user import User, UserRole
from taskdesk.services.reference_data import seed_reference_data

TEST_PASSWORD = "password123"

# One in-memory SQLite database shared by the test session and the app
test_engine = create_engine(
    "sqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@lru_cache()
def _password_hash(password: str) -> str:
    return hash_password(password)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session with the reference catalogs for each test"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        seed_reference_data(session)
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """API client whose requests run against the test session"""

    def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_tenant(db: Session):
    def _create(slug, name=None, plan=SubscriptionPlan.BASIC, expires_at=None):
        tenant = Tenant(name=name or slug.title(), slug=slug)
        db.add(tenant)
        db.flush()
        if plan is not None:
            db.add(Subscription(
                tenant_id=tenant.id,
                plan=plan,
                status=SubscriptionStatus.ACTIVE,
                expires_at=expires_at,
            ))
        db.commit()
        db.refresh(tenant)
        return tenant

    return _create


@pytest.fixture
def create_user(db: Session):
    def _create(email, role=UserRole.AGENT, tenants=(), name=None, password=TEST_PASSWORD):
        user = User(
            name=name or email.split("@")[0].title(),
            email=email,
            password_hash=_password_hash(password),
            role=role,
        )
        db.add(user)
        db.flush()
        for tenant in tenants:
            db.add(TenantUser(tenant_id=tenant.id, user_id=user.id))
        db.commit()
        db.refresh(user)
        return user

    return _create


@pytest.fixture
def create_task(db: Session):
    def _create(tenant, creator, title="Task", assigned_to=None,
                status=TaskStatus.PENDING, description=None, created_at=None):
        task = Task(
            tenant_id=tenant.id,
            title=title,
            description=description,
            status=status,
            assigned_to=assigned_to.id if assigned_to is not None else None,
            created_by=creator.id,
            created_at=created_at or utcnow(),
        )
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    return _create


@pytest.fixture
def auth_headers():
    """Bearer token plus tenant header for a user acting in a tenant"""

    def _headers(user, tenant, tenant_identifier=None):
        token = create_access_token(user_id=user.id, tenant_id=tenant.id, role=user.role.value)
        return {
            "Authorization": f"Bearer {token}",
            "X-Tenant-ID": tenant_identifier or str(tenant.id),
        }

    return _headers


@pytest.fixture
def acme(create_tenant, create_user):
    """Tenant on the basic plan with one member of every role and a second agent"""
    tenant = create_tenant("acme", "Acme Corporation")
    return SimpleNamespace(
        tenant=tenant,
        manager=create_user("manager@acme.com", UserRole.MANAGER, [tenant], name="John Manager"),
        team_lead=create_user("teamlead@acme.com", UserRole.TEAM_LEAD, [tenant], name="Jane Team Lead"),
        agent=create_user("agent@acme.com", UserRole.AGENT, [tenant], name="Bob Agent"),
        agent2=create_user("alice@acme.com", UserRole.AGENT, [tenant], name="Alice Agent"),
    )


@pytest.fixture
def globex(create_tenant, create_user):
    """Second, unrelated tenant"""
    tenant = create_tenant("globex", "Globex Inc", plan=SubscriptionPlan.PRO)
    return SimpleNamespace(
        tenant=tenant,
        manager=create_user("sarah@globex.com", UserRole.MANAGER, [tenant], name="Sarah Manager"),
        agent=create_user("mike@globex.com", UserRole.AGENT, [tenant], name="Mike Agent"),
    )
