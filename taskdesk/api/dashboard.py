"""
Dashboard API endpoints
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from taskdesk.core.database import get_session
from taskdesk.core.dependencies import get_tenant_context
from taskdesk.core.tenancy import TenantContext
from taskdesk.schemas.dashboard import StatsResponse, WidgetRead, WidgetsResponse
from taskdesk.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/widgets", response_model=WidgetsResponse)
def widgets(
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Widgets for the current user's role"""
    rows = DashboardService(session).widgets(ctx.user.role)
    return WidgetsResponse(widgets=[WidgetRead.model_validate(row) for row in rows])


@router.get("/stats", response_model=StatsResponse)
def stats(
    ctx: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_session)
):
    """Task counters for the current tenant and role"""
    return StatsResponse(stats=DashboardService(session).stats(ctx))
