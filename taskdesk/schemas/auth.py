"""
Pydantic schemas for registration, login and identity responses
"""

from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from typing import List, Optional
from datetime import datetime
import uuid

from taskdesk.models.user import UserRole


class RegisterRequest(BaseModel):
    """Tenant + first user registration schema"""
    tenant_name: str = Field(..., min_length=1, max_length=255)
    tenant_slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    password_confirmation: str
    role: Optional[UserRole] = None

    @field_validator("tenant_slug")
    @classmethod
    def validate_tenant_slug(cls, v):
        """A slug may not parse as a tenant id"""
        try:
            uuid.UUID(v)
        except ValueError:
            return v
        raise ValueError("The tenant slug must not be a UUID")


class LoginRequest(BaseModel):
    """Login schema; tenant_id accepts the tenant id or its slug"""
    email: EmailStr
    password: str = Field(..., min_length=1)
    tenant_id: str = Field(..., min_length=1)


class TenantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    created_at: datetime


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime
    tenants: List[TenantRead] = []


class AuthResponse(BaseModel):
    message: str
    user: UserRead
    tenant: TenantRead
    token: str


class MeResponse(BaseModel):
    user: UserRead
    tenant: TenantRead
