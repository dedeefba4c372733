"""
Seed two demo tenants with users, subscriptions and tasks

    python -m taskdesk.scripts.seed_demo

Every demo user has the password "password".
"""

import sys
from datetime import timedelta

from sqlmodel import Session, select
import structlog

from taskdesk.core.auth import hash_password
from taskdesk.core.database import atomic, engine, init_db
from taskdesk.core.tenancy import TenantContext
from taskdesk.core.timeutils import utcnow
from taskdesk.models.subscription import SubscriptionPlan
from taskdesk.models.task import Task, TaskStatus
from taskdesk.models.tenant import Tenant, TenantUser
from taskdesk.models.user import User, UserRole
from taskdesk.services.reference_data import seed_reference_data
from taskdesk.services.subscription_service import SubscriptionService

logger = structlog.get_logger(__name__)

DEMO_PASSWORD = "password"

DEMO_TENANTS = [
    {
        "name": "Acme Corporation",
        "slug": "acme",
        "plan": SubscriptionPlan.PRO,
        "users": [
            ("manager", "John Manager", "manager@acme.com", UserRole.MANAGER),
            ("team_lead", "Jane Team Lead", "teamlead@acme.com", UserRole.TEAM_LEAD),
            ("agent", "Bob Agent", "agent@acme.com", UserRole.AGENT),
            ("agent2", "Alice Agent", "alice@acme.com", UserRole.AGENT),
        ],
        "tasks": [
            ("Setup new project", "Initialize new project repository and documentation",
             TaskStatus.PENDING, "agent", "manager"),
            ("Review code changes", "Review and approve pending pull requests",
             TaskStatus.IN_PROGRESS, "team_lead", "manager"),
            ("Update documentation", "Update API documentation with latest changes",
             TaskStatus.COMPLETED, "agent2", "team_lead"),
        ],
    },
    {
        "name": "Tech Startup Inc",
        "slug": "techstartup",
        "plan": SubscriptionPlan.BASIC,
        "users": [
            ("manager", "Sarah Manager", "sarah@techstartup.com", UserRole.MANAGER),
            ("agent", "Mike Agent", "mike@techstartup.com", UserRole.AGENT),
        ],
        "tasks": [
            ("Design landing page", "Create mockups for new landing page",
             TaskStatus.PENDING, "agent", "manager"),
        ],
    },
]


def seed_demo_data(session: Session) -> bool:
    """Create the demo tenants; returns False if they already exist"""
    if session.exec(select(Tenant).where(Tenant.slug == "acme")).first():
        logger.info("Demo data already exists. Skipping...")
        return False

    password_hash = hash_password(DEMO_PASSWORD)
    with atomic(session):
        for spec in DEMO_TENANTS:
            tenant = Tenant(name=spec["name"], slug=spec["slug"])
            session.add(tenant)

            users = {}
            for key, name, email, role in spec["users"]:
                users[key] = User(name=name, email=email, password_hash=password_hash, role=role)
                session.add(users[key])
            session.flush()

            for user in users.values():
                session.add(TenantUser(tenant_id=tenant.id, user_id=user.id))

            ctx = TenantContext(tenant=tenant, user=users["manager"])
            SubscriptionService(session).start_subscription(
                ctx, spec["plan"], expires_at=utcnow() + timedelta(days=365)
            )

            for title, description, status, assignee, creator in spec["tasks"]:
                session.add(Task(
                    tenant_id=tenant.id,
                    title=title,
                    description=description,
                    status=status,
                    assigned_to=users[assignee].id,
                    created_by=users[creator].id,
                ))

            logger.info(f"Seeded demo tenant {spec['slug']} with {len(users)} users")

    return True


def main():
    try:
        init_db()
        with Session(engine) as session:
            seed_reference_data(session)
            if seed_demo_data(session):
                logger.info("Demo data seeded successfully!")
                logger.info(f"Tenant 1 (acme): manager@acme.com / {DEMO_PASSWORD}")
                logger.info(f"Tenant 2 (techstartup): sarah@techstartup.com / {DEMO_PASSWORD}")
    except Exception as e:
        logger.error(f"Fatal error while seeding demo data: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
