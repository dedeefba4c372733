"""
Pydantic schemas for the dashboard
"""

from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional

from taskdesk.models.user import UserRole


class WidgetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: UserRole
    widget_key: str
    widget_name: str
    description: Optional[str] = None
    is_active: bool
    order: int


class WidgetsResponse(BaseModel):
    widgets: List[WidgetRead]


class StatsResponse(BaseModel):
    stats: Dict[str, int]
