"""
Pydantic schemas for subscriptions and plan features
"""

from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime
import uuid

from taskdesk.models.subscription import SubscriptionPlan, SubscriptionStatus


class PlanChangeRequest(BaseModel):
    plan: SubscriptionPlan


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    plan: SubscriptionPlan
    plan_name: str
    status: SubscriptionStatus
    started_at: datetime
    expires_at: Optional[datetime] = None


class FeatureRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plan: SubscriptionPlan
    feature_key: str
    feature_name: str
    description: Optional[str] = None
    is_enabled: bool
    limit_value: Optional[int] = None


class PlanRead(BaseModel):
    key: SubscriptionPlan
    name: str
    price: int
    features: List[FeatureRead]


class SubscriptionResponse(BaseModel):
    message: Optional[str] = None
    subscription: SubscriptionRead


class TenantFeaturesResponse(BaseModel):
    plan: SubscriptionPlan
    features: List[FeatureRead]


class PlansResponse(BaseModel):
    plans: List[PlanRead]
