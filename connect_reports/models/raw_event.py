"""
Domain model for a single payments API event (charge, refund, dispute, failed charge).
Events are transient: fetched, folded into daily buckets once, then discarded.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    CHARGE = "charge"
    REFUND = "refund"
    DISPUTE = "dispute"
    FAILED_CHARGE = "failed-charge"


@dataclass(frozen=True)
class RawEvent:
    id: str
    created: int
    amount: int
    status: Optional[str] = None

    @classmethod
    def from_stripe(cls, obj) -> "RawEvent":
        """Build a RawEvent from a Stripe API object (or any mapping)."""
        return cls(
            id=obj["id"],
            created=int(obj["created"]),
            amount=int(obj.get("amount") or 0),
            status=obj.get("status"),
        )
