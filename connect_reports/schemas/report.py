"""
Pydantic schemas for transaction report responses.
"""
from datetime import date
from decimal import Decimal
from math import ceil
from typing import Annotated, Optional

from pydantic import BaseModel, PlainSerializer

from connect_reports.models.raw_event import EventType
from connect_reports.models.report import FailureStage
from connect_reports.schemas.account import AccountInfoResponse

# Amounts stay Decimal in Python and are written as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class DailySummaryResponse(BaseModel):
    """One calendar day of activity for one connected account."""

    date: date
    account_id: str
    charges_count: int
    charges_amount: Money
    refunds_count: int
    refunds_amount: Money
    chargebacks_count: int
    chargebacks_amount: Money
    declines_count: int
    approval_pct: Money
    totals_count: int
    totals_amount: Money

    model_config = {"from_attributes": True}


class FetchFailureResponse(BaseModel):
    """A partial data loss that occurred while building the report."""

    account_id: str
    stage: FailureStage
    event_type: Optional[EventType]
    message: str

    model_config = {"from_attributes": True}


class PaginationMeta(BaseModel):
    """Page metadata over the fully materialized row list."""

    current_page: int
    items_per_page: int
    total_items: int
    total_pages: int
    has_prev_page: bool
    has_next_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_items: int) -> "PaginationMeta":
        """Compute metadata for *page* of size *limit* over *total_items*."""
        total_pages = ceil(total_items / limit) if limit else 0
        return cls(
            current_page=page,
            items_per_page=limit,
            total_items=total_items,
            total_pages=total_pages,
            has_prev_page=page > 1,
            has_next_page=page < total_pages,
        )


class MultiAccountReportResponse(BaseModel):
    """Paginated rows for every requested account plus diagnostics."""

    success: bool = True
    start_date: date
    end_date: date
    timezone: str
    data: list[DailySummaryResponse]
    accounts: list[AccountInfoResponse]
    failures: list[FetchFailureResponse]
    is_complete: bool
    pagination: PaginationMeta


class TimezoneListResponse(BaseModel):
    """Timezones offered for report bucketing."""

    success: bool = True
    timezones: list[str]
    total: int
    note: str = "Showing USA timezones only"
