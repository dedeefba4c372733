"""
Dashboard widget reference data
"""

from sqlmodel import Field, SQLModel
from typing import Optional

from taskdesk.models.user import UserRole


class DashboardWidget(SQLModel, table=True):
    """UI widget shown on the dashboard of a role"""

    __tablename__ = "dashboard_widgets"

    id: Optional[int] = Field(default=None, primary_key=True)
    role: UserRole = Field(index=True)
    widget_key: str = Field(unique=True, max_length=100)
    widget_name: str = Field(max_length=255)
    description: Optional[str] = None
    is_active: bool = Field(default=True, index=True)
    order: int = Field(default=0)
