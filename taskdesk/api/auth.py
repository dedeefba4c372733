"""
Authentication API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Dict
import structlog

from taskdesk.core.database import get_session
from taskdesk.core.dependencies import get_tenant_context, get_token_payload
from taskdesk.core.tenancy import TenantContext
from taskdesk.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, TenantRead, UserRead
from taskdesk.services.identity_service import IdentityService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Register a new tenant together with its first user"""
    user, tenant, token = IdentityService(session).register(payload)
    return AuthResponse(
        message="Registration successful",
        user=UserRead.model_validate(user),
        tenant=TenantRead.model_validate(tenant),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session)
):
    """Login into a tenant given by id or slug"""
    user, tenant, token = IdentityService(session).authenticate(payload)
    return AuthResponse(
        message="Login successful",
        user=UserRead.model_validate(user),
        tenant=TenantRead.model_validate(tenant),
        token=token,
    )


@router.post("/logout")
def logout(
    ctx: TenantContext = Depends(get_tenant_context),
    token_payload: Dict = Depends(get_token_payload),
    session: Session = Depends(get_session)
):
    """Revoke the current access token"""
    IdentityService(session).logout(ctx.user, token_payload)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
def me(ctx: TenantContext = Depends(get_tenant_context)):
    """Current user with memberships, and the active tenant"""
    return MeResponse(
        user=UserRead.model_validate(ctx.user),
        tenant=TenantRead.model_validate(ctx.tenant),
    )
