"""
Report date range helpers: date parsing, timezone validation and preset periods.
"""
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones
import logging

from connect_reports.core.config import settings
from connect_reports.core.exceptions import ReportValidationError

logger = logging.getLogger(__name__)

DateLike = Union[date, str, None]


class ReportPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


# Days subtracted from "today" for each preset period
_PERIOD_LOOKBACK_DAYS = {
    ReportPeriod.DAILY: 1,
    ReportPeriod.WEEKLY: 7,
    ReportPeriod.MONTHLY: 30,
}


def parse_report_date(value: DateLike, field_name: str) -> date:
    """Parse a YYYY-MM-DD string (or pass a date through)."""
    if value is None or value == "":
        raise ReportValidationError(f"{field_name} is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ReportValidationError(
            f"Invalid {field_name} '{value}'. Use YYYY-MM-DD"
        ) from None


def parse_timezone(name: Optional[str]) -> ZoneInfo:
    """Return the ZoneInfo for an IANA zone name or raise a validation error."""
    if not name:
        raise ReportValidationError("timezone is required")
    # Directory names in the tz database ("America", "Etc") raise IsADirectoryError
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ReportValidationError(f"Unknown timezone '{name}'") from None


def validate_date_range(start_date: DateLike, end_date: DateLike) -> tuple[date, date]:
    """
    Parse both dates and ensure they form a usable report range.

    start_date must not be after end_date, end_date must leave room for
    the following midnight, and the span may not exceed
    REPORT_MAX_RANGE_DAYS.
    """
    start = parse_report_date(start_date, "start_date")
    end = parse_report_date(end_date, "end_date")
    if start > end:
        raise ReportValidationError("start_date cannot be after end_date")
    # The event window ends at midnight of the day after end_date
    if end >= date.max:
        raise ReportValidationError(f"end_date must be before {date.max.isoformat()}")
    max_days = settings.REPORT_MAX_RANGE_DAYS
    if max_days and (end - start).days + 1 > max_days:
        raise ReportValidationError(f"Date range cannot exceed {max_days} days")
    return start, end


def resolve_date_range(
    period: Union[ReportPeriod, str],
    start_date: DateLike,
    end_date: DateLike,
    timezone: str,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """
    Resolve a preset period (or an explicit custom range) into calendar dates.

    "today" is taken in *timezone* unless given explicitly.
    """
    try:
        period = ReportPeriod(period)
    except ValueError:
        raise ReportValidationError(
            "Invalid period. Use: daily, weekly, monthly, or custom"
        ) from None

    if period is ReportPeriod.CUSTOM:
        if not start_date or not end_date:
            raise ReportValidationError(
                "start_date and end_date are required for custom period"
            )
        return validate_date_range(start_date, end_date)

    if today is None:
        today = datetime.now(tz=parse_timezone(timezone)).date()
    start = today - timedelta(days=_PERIOD_LOOKBACK_DAYS[period])
    logger.debug("Resolved %s period to %s..%s", period.value, start, today)
    return start, today


def list_report_timezones() -> list[str]:
    """Return the US-oriented zone names offered for report bucketing."""
    zones = {
        name
        for name in available_timezones()
        if name.startswith(("America/", "US/"))
    }
    zones.update({"UTC", "GMT"})
    return sorted(zones)
