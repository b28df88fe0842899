"""
Transaction report endpoints:
  GET  /reports/timezones               – List timezones available for bucketing
  GET  /reports/accounts                – List connected accounts for the credential
  GET  /reports/multi/{account_ids}     – Paginated daily summaries for several accounts
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query

from connect_reports.core.config import settings
from connect_reports.core.dependencies import get_account_service, get_transaction_service
from connect_reports.schemas.account import AccountInfoResponse, AccountListResponse
from connect_reports.schemas.report import (
    DailySummaryResponse,
    FetchFailureResponse,
    MultiAccountReportResponse,
    PaginationMeta,
    TimezoneListResponse,
)
from connect_reports.services.account_service import AccountService
from connect_reports.services.report_period import list_report_timezones, resolve_date_range
from connect_reports.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get(
    "/timezones",
    response_model=TimezoneListResponse,
    summary="List timezones available for reports",
)
def list_timezones():
    """Return US timezones plus UTC and GMT, sorted by name."""
    timezones = list_report_timezones()
    return TimezoneListResponse(timezones=timezones, total=len(timezones))


@router.get(
    "/accounts",
    response_model=AccountListResponse,
    summary="List connected accounts",
)
def list_accounts(service: AccountService = Depends(get_account_service)):
    """Return every connected account visible to the supplied secret key."""
    accounts = service.list_accounts()
    return AccountListResponse(
        accounts=[AccountInfoResponse.model_validate(a, from_attributes=True) for a in accounts],
        total=len(accounts),
    )


@router.get(
    "/multi/{account_ids}",
    response_model=MultiAccountReportResponse,
    summary="Get daily transaction summaries for one or more accounts",
)
def get_multi_account_report(
    account_ids: str,
    start_date: Optional[str] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="End date (YYYY-MM-DD)"),
    timezone: str = Query(settings.DEFAULT_TIMEZONE, description="IANA timezone name"),
    period: str = Query("custom", description="daily, weekly, monthly or custom"),
    page: int = Query(1, ge=1),
    limit: int = Query(
        settings.REPORT_DEFAULT_PAGE_SIZE, ge=1, le=settings.REPORT_MAX_PAGE_SIZE
    ),
    service: TransactionService = Depends(get_transaction_service),
):
    """
    Build the full report for the comma-separated **account_ids**, then
    return one page of rows sorted by date descending.
    """
    start, end = resolve_date_range(period, start_date, end_date, timezone)
    report = service.aggregate(account_ids.split(","), start, end, timezone)

    offset = (page - 1) * limit
    logger.info(
        "Returning report page=%s limit=%s of %s rows", page, limit, len(report.rows)
    )
    return MultiAccountReportResponse(
        start_date=start,
        end_date=end,
        timezone=timezone,
        data=[
            DailySummaryResponse.model_validate(row, from_attributes=True)
            for row in report.rows[offset:offset + limit]
        ],
        accounts=[
            AccountInfoResponse.model_validate(account, from_attributes=True)
            for account in report.accounts
        ],
        failures=[
            FetchFailureResponse.model_validate(failure, from_attributes=True)
            for failure in report.failures
        ],
        is_complete=report.is_complete,
        pagination=PaginationMeta.build(page, limit, len(report.rows)),
    )
