"""
Pydantic schemas for export request validation.
"""
from typing import Optional

from pydantic import BaseModel

from connect_reports.core.config import settings


class ExportRequest(BaseModel):
    """Request body shared by every export format."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    timezone: str = settings.DEFAULT_TIMEZONE
    period: str = "custom"  # daily | weekly | monthly | custom
