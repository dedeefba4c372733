"""
Subscription API endpoints
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from taskdesk.core.database import get_session
from taskdesk.core.dependencies import get_tenant_context
from taskdesk.core.tenancy import TenantContext
from taskdesk.schemas.subscription import (
    FeatureRead,
    PlanChangeRequest,
    PlanRead,
    PlansResponse,
    SubscriptionRead,
    SubscriptionResponse,
    TenantFeaturesResponse,
)
from taskdesk.services.subscription_service import SubscriptionService

router = APIRouter()


@router.get("/current", response_model=SubscriptionResponse)
def current_subscription(
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Active subscription of the current tenant"""
    subscription = SubscriptionService(session).current(ctx)
    return SubscriptionResponse(subscription=SubscriptionRead.model_validate(subscription))


@router.get("/plans", response_model=PlansResponse)
def list_plans(
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Plan catalog with the enabled features of each plan"""
    plans = SubscriptionService(session).plans()
    return PlansResponse(plans=[
        PlanRead(
            key=plan["key"],
            name=plan["name"],
            price=plan["price"],
            features=[FeatureRead.model_validate(feature) for feature in plan["features"]],
        )
        for plan in plans
    ])


@router.get("/features", response_model=TenantFeaturesResponse)
def tenant_features(
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Enabled features of the current tenant's plan"""
    plan, features = SubscriptionService(session).tenant_features(ctx)
    return TenantFeaturesResponse(
        plan=plan,
        features=[FeatureRead.model_validate(feature) for feature in features],
    )


@router.post("/upgrade", response_model=SubscriptionResponse)
def upgrade_subscription(
    payload: PlanChangeRequest,
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Move the tenant to a higher plan"""
    subscription = SubscriptionService(session).upgrade(ctx, payload.plan)
    return SubscriptionResponse(
        message="Subscription upgraded successfully",
        subscription=SubscriptionRead.model_validate(subscription),
    )


@router.post("/downgrade", response_model=SubscriptionResponse)
def downgrade_subscription(
    payload: PlanChangeRequest,
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Move the tenant to a lower plan"""
    subscription = SubscriptionService(session).downgrade(ctx, payload.plan)
    return SubscriptionResponse(
        message="Subscription downgraded successfully",
        subscription=SubscriptionRead.model_validate(subscription),
    )
