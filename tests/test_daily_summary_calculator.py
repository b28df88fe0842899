"""Tests for per-day bucketing, rounding and approval percentage."""
from datetime import date
from decimal import Decimal

from connect_reports.models.raw_event import RawEvent
from connect_reports.services.daily_summary_calculator import local_date, summarize, to_major_units
from zoneinfo import ZoneInfo

from tests.conftest import ts

JAN_1 = date(2024, 1, 1)
JAN_3 = date(2024, 1, 3)


def _event(created: str, amount: int = 0, event_id: str = "evt", status: str = "succeeded") -> RawEvent:
    return RawEvent(id=event_id, created=ts(created), amount=amount, status=status)


def _by_date(rows):
    return {row.date: row for row in rows}


def test_zero_fill_creates_one_row_per_day():
    rows = summarize([], [], [], [], JAN_1, JAN_3, "UTC", account_id="acct_1")

    assert [row.date for row in rows] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
    for row in rows:
        assert row.account_id == "acct_1"
        assert row.charges_count == row.refunds_count == row.chargebacks_count == 0
        assert row.declines_count == row.totals_count == 0
        assert row.charges_amount == Decimal("0.00")
        assert row.totals_amount == Decimal("0.00")
        assert row.approval_pct == Decimal("100.00")


def test_single_day_range():
    rows = summarize([], [], [], [], JAN_1, JAN_1, "UTC")
    assert len(rows) == 1


def test_single_charge_lands_on_its_day():
    charges = [_event("2024-01-02T12:00:00", 10000)]

    rows = _by_date(summarize(charges, [], [], [], JAN_1, JAN_3, "UTC"))

    day = rows[date(2024, 1, 2)]
    assert day.charges_count == 1
    assert day.charges_amount == Decimal("100.00")
    assert day.totals_count == 1
    assert day.totals_amount == Decimal("100.00")
    assert day.approval_pct == Decimal("100.00")
    assert rows[date(2024, 1, 1)].totals_count == 0
    assert rows[date(2024, 1, 3)].totals_count == 0


def test_decline_halves_approval():
    charges = [_event("2024-01-02T12:00:00", 10000)]
    declines = [_event("2024-01-02T13:00:00", 5000, status="failed")]

    day = _by_date(summarize(charges, [], [], declines, JAN_1, JAN_3, "UTC"))[date(2024, 1, 2)]

    assert day.charges_count == 1
    assert day.declines_count == 1
    assert day.totals_count == 2
    assert day.approval_pct == Decimal("50.00")
    # Declines carry no amount
    assert day.totals_amount == Decimal("100.00")


def test_only_declines_gives_zero_approval():
    declines = [_event("2024-01-02T13:00:00", 5000)]
    day = _by_date(summarize([], [], [], declines, JAN_1, JAN_3, "UTC"))[date(2024, 1, 2)]
    assert day.approval_pct == Decimal("0.00")


def test_approval_rounds_to_two_decimals():
    charges = [_event("2024-01-02T10:00:00", 100), _event("2024-01-02T11:00:00", 100)]
    declines = [_event("2024-01-02T12:00:00")]

    day = _by_date(summarize(charges, [], [], declines, JAN_1, JAN_3, "UTC"))[date(2024, 1, 2)]

    assert day.approval_pct == Decimal("66.67")


def test_refunds_and_chargebacks_reduce_total_amount():
    charges = [_event("2024-01-02T10:00:00", 10000)]
    refunds = [_event("2024-01-02T11:00:00", 2550)]
    chargebacks = [_event("2024-01-02T12:00:00", 1000)]

    day = _by_date(summarize(charges, refunds, chargebacks, [], JAN_1, JAN_3, "UTC"))[date(2024, 1, 2)]

    assert day.refunds_count == 1
    assert day.refunds_amount == Decimal("25.50")
    assert day.chargebacks_count == 1
    assert day.chargebacks_amount == Decimal("10.00")
    assert day.totals_count == 3
    assert day.totals_amount == Decimal("64.50")
    # Refunds and chargebacks are not attempts
    assert day.approval_pct == Decimal("100.00")


def test_small_amounts_accumulate_exactly():
    charges = [_event(f"2024-01-02T1{i}:00:00", 10, event_id=f"ch_{i}") for i in range(3)]

    day = _by_date(summarize(charges, [], [], [], JAN_1, JAN_3, "UTC"))[date(2024, 1, 2)]

    assert day.charges_amount == Decimal("0.30")


def test_events_outside_range_are_dropped():
    charges = [
        _event("2023-12-31T23:59:59", 500, event_id="before"),
        _event("2024-01-04T00:00:00", 700, event_id="after"),
    ]

    rows = summarize(charges, [], [], [], JAN_1, JAN_3, "UTC")

    assert sum(row.charges_count for row in rows) == 0


def test_timezone_moves_event_to_previous_day():
    # 00:30 UTC on Jan 2 is still Jan 1 in Los Angeles
    charges = [_event("2024-01-02T00:30:00", 1000)]

    utc_rows = _by_date(summarize(charges, [], [], [], JAN_1, JAN_3, "UTC"))
    la_rows = _by_date(summarize(charges, [], [], [], JAN_1, JAN_3, "America/Los_Angeles"))

    assert utc_rows[date(2024, 1, 2)].charges_count == 1
    assert utc_rows[date(2024, 1, 1)].charges_count == 0
    assert la_rows[date(2024, 1, 1)].charges_count == 1
    assert la_rows[date(2024, 1, 2)].charges_count == 0


def test_totals_invariants_hold_for_mixed_days():
    charges = [_event(f"2024-01-0{d}T0{h}:00:00", 1234 * h, event_id=f"c{d}{h}") for d in (1, 2, 3) for h in (1, 2, 5)]
    refunds = [_event("2024-01-01T09:00:00", 999), _event("2024-01-03T09:00:00", 1)]
    chargebacks = [_event("2024-01-02T09:00:00", 4321)]
    declines = [_event("2024-01-01T08:00:00"), _event("2024-01-02T08:00:00"), _event("2024-01-02T08:30:00")]

    for row in summarize(charges, refunds, chargebacks, declines, JAN_1, JAN_3, "UTC"):
        assert row.totals_count == (
            row.charges_count + row.refunds_count + row.chargebacks_count + row.declines_count
        )
        assert row.totals_amount == (
            row.charges_amount - row.refunds_amount - row.chargebacks_amount
        ).quantize(Decimal("0.01"))
        assert Decimal("0") <= row.approval_pct <= Decimal("100")


def test_helpers():
    assert to_major_units(12345) == Decimal("123.45")
    assert local_date(ts("2024-01-02T00:30:00"), ZoneInfo("America/New_York")) == date(2024, 1, 1)
