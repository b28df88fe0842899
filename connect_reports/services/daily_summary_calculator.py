"""
Daily summary calculation.
Buckets payments events by calendar day in a given timezone and computes
per-day counts, amounts and approval percentage.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union
from zoneinfo import ZoneInfo
import logging

from connect_reports.models.daily_summary import DailySummary
from connect_reports.models.raw_event import RawEvent

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


@dataclass
class _DayBucket:
    """Mutable accumulator for one day; frozen into a DailySummary at the end."""

    day: date
    charges_count: int = 0
    charges_amount: Decimal = field(default_factory=Decimal)
    refunds_count: int = 0
    refunds_amount: Decimal = field(default_factory=Decimal)
    chargebacks_count: int = 0
    chargebacks_amount: Decimal = field(default_factory=Decimal)
    declines_count: int = 0

    def finalize(self, account_id: str) -> DailySummary:
        """Round amounts once and compute the approval percentage."""
        attempts = self.charges_count + self.declines_count
        if attempts == 0:
            approval_pct = HUNDRED
        else:
            approval_pct = Decimal(self.charges_count) / Decimal(attempts) * HUNDRED

        net = self.charges_amount - self.refunds_amount - self.chargebacks_amount
        return DailySummary(
            date=self.day,
            account_id=account_id,
            charges_count=self.charges_count,
            charges_amount=_round(self.charges_amount),
            refunds_count=self.refunds_count,
            refunds_amount=_round(self.refunds_amount),
            chargebacks_count=self.chargebacks_count,
            chargebacks_amount=_round(self.chargebacks_amount),
            declines_count=self.declines_count,
            approval_pct=_round(approval_pct),
            totals_count=(
                self.charges_count
                + self.refunds_count
                + self.chargebacks_count
                + self.declines_count
            ),
            totals_amount=_round(net),
        )


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_major_units(amount: int) -> Decimal:
    """Convert integer minor units (cents) to decimal major units."""
    return Decimal(amount) / HUNDRED


def resolve_timezone(timezone: Union[str, ZoneInfo]) -> ZoneInfo:
    """Return a ZoneInfo for an IANA name; ZoneInfo instances pass through."""
    if isinstance(timezone, ZoneInfo):
        return timezone
    return ZoneInfo(timezone)


def iter_days(start_date: date, end_date: date) -> Iterable[date]:
    """Yield every calendar date from *start_date* to *end_date* inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def local_date(timestamp: int, tz: ZoneInfo) -> date:
    """Return the calendar date of a unix timestamp in *tz*."""
    return datetime.fromtimestamp(timestamp, tz=tz).date()


def summarize(
    charges: Iterable[RawEvent],
    refunds: Iterable[RawEvent],
    chargebacks: Iterable[RawEvent],
    declines: Iterable[RawEvent],
    start_date: date,
    end_date: date,
    timezone: Union[str, ZoneInfo],
    account_id: str = "",
) -> list[DailySummary]:
    """
    Fold four event sequences into one DailySummary per calendar day.

    Every date in [start_date, end_date] gets a row, zero-filled when no
    events landed on it. Events whose local date falls outside the range
    are dropped. Rows are returned in ascending date order.
    """
    tz = resolve_timezone(timezone)
    buckets: dict[date, _DayBucket] = {
        day: _DayBucket(day) for day in iter_days(start_date, end_date)
    }
    logger.debug(
        "Seeded %s daily buckets %s..%s tz=%s", len(buckets), start_date, end_date, tz.key
    )

    dropped = 0

    for event in charges:
        bucket = buckets.get(local_date(event.created, tz))
        if bucket is None:
            dropped += 1
            continue
        bucket.charges_count += 1
        bucket.charges_amount += to_major_units(event.amount)

    for event in refunds:
        bucket = buckets.get(local_date(event.created, tz))
        if bucket is None:
            dropped += 1
            continue
        bucket.refunds_count += 1
        bucket.refunds_amount += to_major_units(event.amount)

    for event in chargebacks:
        bucket = buckets.get(local_date(event.created, tz))
        if bucket is None:
            dropped += 1
            continue
        bucket.chargebacks_count += 1
        bucket.chargebacks_amount += to_major_units(event.amount)

    # Declines count as attempts but carry no amount
    for event in declines:
        bucket = buckets.get(local_date(event.created, tz))
        if bucket is None:
            dropped += 1
            continue
        bucket.declines_count += 1

    if dropped:
        logger.info("Dropped %s events outside %s..%s", dropped, start_date, end_date)

    return [bucket.finalize(account_id) for bucket in buckets.values()]
