"""
Tests for subscription plans, plan changes and the feature catalog
"""

import pytest
from datetime import datetime, timedelta, timezone
from sqlmodel import select

from taskdesk.core.exceptions import InvalidTransition, NotFound
from taskdesk.core.tenancy import TenantContext
from taskdesk.core.timeutils import as_utc, utcnow
from taskdesk.models.subscription import Subscription, SubscriptionPlan, SubscriptionStatus
from taskdesk.scripts.expire_subscriptions import expire_lapsed_subscriptions
from taskdesk.services.subscription_service import SubscriptionService

BASIC = SubscriptionPlan.BASIC
PRO = SubscriptionPlan.PRO
ENTERPRISE = SubscriptionPlan.ENTERPRISE


# Model state machine

@pytest.mark.parametrize("current,target,allowed", [
    (BASIC, PRO, True),
    (BASIC, ENTERPRISE, True),
    (PRO, ENTERPRISE, True),
    (BASIC, BASIC, False),
    (PRO, BASIC, False),
    (ENTERPRISE, PRO, False),
    (ENTERPRISE, ENTERPRISE, False),
])
def test_can_upgrade_to(current, target, allowed):
    ok, reason = Subscription(plan=current).can_upgrade_to(target)

    assert ok is allowed
    if not allowed:
        assert reason == "Invalid upgrade. Please select a higher tier plan."


@pytest.mark.parametrize("current,target,allowed", [
    (ENTERPRISE, PRO, True),
    (ENTERPRISE, BASIC, True),
    (PRO, BASIC, True),
    (BASIC, BASIC, False),
    (BASIC, PRO, False),
    (PRO, ENTERPRISE, False),
])
def test_can_downgrade_to(current, target, allowed):
    ok, reason = Subscription(plan=current).can_downgrade_to(target)

    assert ok is allowed
    if not allowed:
        assert reason == "Invalid downgrade. Please select a lower tier plan."


def test_plan_levels_are_ordered():
    assert BASIC.level < PRO.level < ENTERPRISE.level


def test_is_active_respects_expiry():
    now = datetime(2026, 6, 1, tzinfo=timezone.utc)

    assert Subscription(status=SubscriptionStatus.ACTIVE, expires_at=None).is_active(now)
    assert Subscription(status=SubscriptionStatus.ACTIVE, expires_at=now + timedelta(days=1)).is_active(now)
    assert not Subscription(status=SubscriptionStatus.ACTIVE, expires_at=now).is_active(now)
    assert not Subscription(status=SubscriptionStatus.CANCELLED, expires_at=None).is_active(now)


# Service

def test_upgrade_keeps_expiry_and_restarts_period(db, create_tenant, create_user):
    expires_at = utcnow() + timedelta(days=30)
    tenant = create_tenant("initech", expires_at=expires_at)
    ctx = TenantContext(tenant=tenant, user=create_user("bill@initech.com", tenants=[tenant]))
    service = SubscriptionService(db)
    before = service.current(ctx)
    started_at = before.started_at

    upgraded = service.upgrade(ctx, PRO)

    assert upgraded.id == before.id
    assert upgraded.plan == PRO
    assert as_utc(upgraded.expires_at) == expires_at
    assert as_utc(upgraded.started_at) >= as_utc(started_at)
    assert upgraded.updated_at is not None


def test_invalid_transition_leaves_plan_unchanged(db, acme):
    ctx = TenantContext(tenant=acme.tenant, user=acme.manager)
    service = SubscriptionService(db)

    with pytest.raises(InvalidTransition):
        service.downgrade(ctx, PRO)

    assert service.current(ctx).plan == BASIC


def test_current_ignores_expired_subscription(db, create_tenant, create_user):
    tenant = create_tenant("lapsed", expires_at=utcnow() - timedelta(days=1))
    ctx = TenantContext(tenant=tenant, user=create_user("owner@lapsed.com", tenants=[tenant]))

    with pytest.raises(NotFound):
        SubscriptionService(db).current(ctx)


def test_start_subscription_retires_previous_active(db, acme):
    ctx = TenantContext(tenant=acme.tenant, user=acme.manager)
    service = SubscriptionService(db)
    previous = service.current(ctx)

    started = service.start_subscription(ctx, ENTERPRISE)
    db.commit()

    active = db.exec(
        select(Subscription)
        .where(Subscription.tenant_id == acme.tenant.id)
        .where(Subscription.status == SubscriptionStatus.ACTIVE)
    ).all()
    assert [subscription.id for subscription in active] == [started.id]
    db.refresh(previous)
    assert previous.status == SubscriptionStatus.CANCELLED
    assert service.current(ctx).plan == ENTERPRISE


def test_features_for_basic_only_lists_enabled(db):
    keys = [feature.feature_key for feature in SubscriptionService(db).features_for(BASIC)]

    assert keys == ["max_agents", "basic_tasks"]


def test_basic_agent_limit(db):
    features = {feature.feature_key: feature for feature in SubscriptionService(db).features_for(BASIC)}

    assert features["max_agents"].has_limit()
    assert features["max_agents"].limit_value == 5


def test_enterprise_agent_limit_is_unlimited(db):
    features = {feature.feature_key: feature for feature in SubscriptionService(db).features_for(ENTERPRISE)}

    assert not features["max_agents"].has_limit()


def test_expire_lapsed_subscriptions(db, create_tenant):
    now = utcnow()
    lapsed = create_tenant("lapsed", expires_at=now - timedelta(hours=1))
    current = create_tenant("current", expires_at=now + timedelta(days=1))
    create_tenant("forever")

    result = expire_lapsed_subscriptions(db, now=now)

    assert result == {"expired": 1}
    statuses = {
        subscription.tenant_id: subscription.status
        for subscription in db.exec(select(Subscription)).all()
    }
    assert statuses[lapsed.id] == SubscriptionStatus.EXPIRED
    assert statuses[current.id] == SubscriptionStatus.ACTIVE


def test_expire_lapsed_subscriptions_defaults_to_now(db, create_tenant):
    create_tenant("lapsed", expires_at=utcnow() - timedelta(minutes=5))

    assert expire_lapsed_subscriptions(db) == {"expired": 1}
    assert expire_lapsed_subscriptions(db) == {"expired": 0}


# API

def test_current_subscription(client, acme, auth_headers):
    response = client.get("/api/subscription/current", headers=auth_headers(acme.agent, acme.tenant))

    assert response.status_code == 200
    subscription = response.json()["subscription"]
    assert subscription["plan"] == "basic"
    assert subscription["plan_name"] == "Basic"
    assert subscription["status"] == "active"
    assert subscription["tenant_id"] == str(acme.tenant.id)


def test_current_subscription_missing(client, create_tenant, create_user, auth_headers):
    tenant = create_tenant("unsubscribed", plan=None)
    user = create_user("owner@unsubscribed.com", tenants=[tenant])

    response = client.get("/api/subscription/current", headers=auth_headers(user, tenant))

    assert response.status_code == 404
    assert response.json()["message"] == "No active subscription found"


def test_upgrade_endpoint(client, acme, auth_headers):
    headers = auth_headers(acme.manager, acme.tenant)

    response = client.post("/api/subscription/upgrade", json={"plan": "pro"}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Subscription upgraded successfully"
    assert body["subscription"]["plan"] == "pro"
    assert body["subscription"]["plan_name"] == "Pro"

    current = client.get("/api/subscription/current", headers=headers).json()
    assert current["subscription"]["plan"] == "pro"


def test_upgrade_to_same_plan_is_rejected(client, acme, auth_headers):
    response = client.post(
        "/api/subscription/upgrade",
        json={"plan": "basic"},
        headers=auth_headers(acme.manager, acme.tenant),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid upgrade. Please select a higher tier plan."


def test_downgrade_endpoint(client, globex, auth_headers):
    response = client.post(
        "/api/subscription/downgrade",
        json={"plan": "basic"},
        headers=auth_headers(globex.manager, globex.tenant),
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Subscription downgraded successfully"
    assert response.json()["subscription"]["plan"] == "basic"


def test_downgrade_to_higher_plan_is_rejected(client, globex, auth_headers):
    response = client.post(
        "/api/subscription/downgrade",
        json={"plan": "enterprise"},
        headers=auth_headers(globex.manager, globex.tenant),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid downgrade. Please select a lower tier plan."


def test_unknown_plan_is_a_validation_error(client, acme, auth_headers):
    response = client.post(
        "/api/subscription/upgrade",
        json={"plan": "platinum"},
        headers=auth_headers(acme.manager, acme.tenant),
    )

    assert response.status_code == 422
    assert "plan" in response.json()["errors"]


def test_tenant_features_endpoint(client, globex, auth_headers):
    response = client.get("/api/subscription/features", headers=auth_headers(globex.agent, globex.tenant))

    assert response.status_code == 200
    body = response.json()
    assert body["plan"] == "pro"
    assert [feature["feature_key"] for feature in body["features"]] == [
        "max_agents", "advanced_tasks", "basic_automation", "reports",
    ]


def test_plans_endpoint(client, acme, auth_headers):
    response = client.get("/api/subscription/plans", headers=auth_headers(acme.agent, acme.tenant))

    assert response.status_code == 200
    plans = response.json()["plans"]
    assert [(plan["key"], plan["name"], plan["price"]) for plan in plans] == [
        ("basic", "Basic", 0),
        ("pro", "Pro", 29),
        ("enterprise", "Enterprise", 99),
    ]
    basic_features = [feature["feature_key"] for feature in plans[0]["features"]]
    assert "no_automation" not in basic_features
