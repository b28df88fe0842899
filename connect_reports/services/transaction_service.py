"""
Transaction aggregation service.
Builds per-account daily summaries from the payments API and merges them
into a multi-account report.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo
import logging

import stripe

from connect_reports.core.config import settings
from connect_reports.core.exceptions import ReportValidationError
from connect_reports.models.account_info import AccountInfo
from connect_reports.models.credential import StripeCredential
from connect_reports.models.daily_summary import DailySummary
from connect_reports.models.raw_event import EventType
from connect_reports.models.report import FailureStage, FetchFailure, MultiAccountReport
from connect_reports.repositories.stripe_account_repository import StripeAccountRepository
from connect_reports.repositories.stripe_event_repository import StripeEventRepository
from connect_reports.services import daily_summary_calculator
from connect_reports.services.report_period import DateLike, parse_timezone, validate_date_range

logger = logging.getLogger(__name__)

# Fixed fetch/fold order; per-day totals do not depend on it
_EVENT_ORDER = (
    EventType.CHARGE,
    EventType.REFUND,
    EventType.DISPUTE,
    EventType.FAILED_CHARGE,
)


@dataclass
class AccountSummaries:
    """Rows built for one account plus any truncated event listings."""

    account_id: str
    rows: list[DailySummary] = field(default_factory=list)
    failures: list[FetchFailure] = field(default_factory=list)
    account: Optional[AccountInfo] = None


def event_window(start_date: date, end_date: date, tz: ZoneInfo) -> tuple[int, int]:
    """
    Return the inclusive unix window from start-of-day of *start_date*
    to end-of-day of *end_date*, both resolved in *tz*.
    """
    window_start = datetime.combine(start_date, time.min, tzinfo=tz)
    next_day = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=tz)
    return int(window_start.timestamp()), int(next_day.timestamp()) - 1


def normalize_account_ids(account_ids: Iterable[str]) -> list[str]:
    """Strip blanks and duplicates while keeping the requested order."""
    seen: dict[str, None] = {}
    for account_id in account_ids or []:
        cleaned = (account_id or "").strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    if not seen:
        raise ReportValidationError("At least one account ID is required")
    return list(seen)


class TransactionService:
    """Business logic for building transaction reports."""

    def __init__(
        self,
        credential: StripeCredential,
        max_workers: Optional[int] = None,
    ) -> None:
        """Initialize repositories bound to the request credential."""
        logger.trace("Initializing TransactionService")
        self._event_repo = StripeEventRepository(credential)
        self._account_repo = StripeAccountRepository(credential)
        self._max_workers = max(1, max_workers or settings.REPORT_MAX_WORKERS)

    # ------------------------------------------------------------------
    # Per-account
    # ------------------------------------------------------------------

    def build_account_summaries(
        self,
        account_id: str,
        start_date: date,
        end_date: date,
        timezone: ZoneInfo,
    ) -> AccountSummaries:
        """Fetch all four event types for one account and fold them by day."""
        window_start, window_end = event_window(start_date, end_date, timezone)
        logger.info(
            "Building summaries account=%s %s..%s tz=%s",
            account_id,
            start_date,
            end_date,
            timezone.key,
        )

        result = AccountSummaries(account_id=account_id)
        events = {}
        for event_type in _EVENT_ORDER:
            listing = self._event_repo.list_events(
                event_type, account_id, window_start, window_end
            )
            events[event_type] = listing.events
            if listing.truncated:
                result.failures.append(
                    FetchFailure(
                        account_id=account_id,
                        stage=FailureStage.EVENTS,
                        event_type=event_type,
                        message=listing.error,
                    )
                )

        result.rows = daily_summary_calculator.summarize(
            charges=events[EventType.CHARGE],
            refunds=events[EventType.REFUND],
            chargebacks=events[EventType.DISPUTE],
            declines=events[EventType.FAILED_CHARGE],
            start_date=start_date,
            end_date=end_date,
            timezone=timezone,
            account_id=account_id,
        )
        return result

    # ------------------------------------------------------------------
    # Multi-account
    # ------------------------------------------------------------------

    def aggregate(
        self,
        account_ids: Iterable[str],
        start_date: DateLike,
        end_date: DateLike,
        timezone: Optional[str],
    ) -> MultiAccountReport:
        """
        Build and merge daily summaries for every requested account.

        Parameters are validated before any API call. Accounts whose
        metadata cannot be retrieved are omitted and reported in
        ``failures``; so are event listings that stopped early.
        """
        ids = normalize_account_ids(account_ids)
        start, end = validate_date_range(start_date, end_date)
        tz = parse_timezone(timezone)
        logger.info(
            "Aggregating %s account(s) %s..%s tz=%s workers=%s",
            len(ids),
            start,
            end,
            tz.key,
            self._max_workers,
        )

        if self._max_workers == 1 or len(ids) == 1:
            results = [
                self._process_account(account_id, start, end, tz) for account_id in ids
            ]
        else:
            workers = min(self._max_workers, len(ids))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields in submission order, so results follow the request
                results = list(
                    pool.map(
                        lambda account_id: self._process_account(account_id, start, end, tz),
                        ids,
                    )
                )

        rows: list[DailySummary] = []
        accounts: list[AccountInfo] = []
        failures: list[FetchFailure] = []
        for result in results:
            rows.extend(result.rows)
            failures.extend(result.failures)
            if result.account is not None:
                accounts.append(result.account)

        # Stable sort: equal dates keep the requested account order
        rows.sort(key=lambda row: row.date, reverse=True)

        logger.info(
            "Aggregated %s rows for %s/%s accounts with %s failure(s)",
            len(rows),
            len(accounts),
            len(ids),
            len(failures),
        )
        return MultiAccountReport(
            rows=tuple(rows),
            accounts=tuple(accounts),
            failures=tuple(failures),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _process_account(
        self,
        account_id: str,
        start_date: date,
        end_date: date,
        timezone: ZoneInfo,
    ) -> AccountSummaries:
        try:
            account = self._account_repo.get_by_id(account_id)
        except stripe.StripeError as exc:
            logger.warning("Skipping account=%s: %s", account_id, exc)
            return AccountSummaries(
                account_id=account_id,
                failures=[
                    FetchFailure(
                        account_id=account_id,
                        stage=FailureStage.ACCOUNT,
                        message=str(exc),
                    )
                ],
            )

        result = self.build_account_summaries(account_id, start_date, end_date, timezone)
        result.account = account
        return result
