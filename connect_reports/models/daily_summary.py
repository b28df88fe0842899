"""
Domain model representing one calendar day of activity for one connected account.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class DailySummary:
    date: date
    account_id: str
    charges_count: int = 0
    charges_amount: Decimal = Decimal("0.00")
    refunds_count: int = 0
    refunds_amount: Decimal = Decimal("0.00")
    chargebacks_count: int = 0
    chargebacks_amount: Decimal = Decimal("0.00")
    declines_count: int = 0
    approval_pct: Decimal = Decimal("100.00")
    totals_count: int = 0
    totals_amount: Decimal = Decimal("0.00")
