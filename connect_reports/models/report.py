"""
Domain models for a merged multi-account report and its failure diagnostics.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from connect_reports.models.account_info import AccountInfo
from connect_reports.models.daily_summary import DailySummary
from connect_reports.models.raw_event import EventType


class FailureStage(str, Enum):
    ACCOUNT = "account"
    EVENTS = "events"


@dataclass(frozen=True)
class FetchFailure:
    """A partial data loss recorded while building a report."""

    account_id: str
    stage: FailureStage
    message: str
    event_type: Optional[EventType] = None


@dataclass(frozen=True)
class MultiAccountReport:
    """
    Rows for every requested account, sorted by date descending.

    Rows sharing a date keep the order in which their accounts were
    requested; callers should not rely on any other secondary order.
    """

    rows: tuple[DailySummary, ...] = ()
    accounts: tuple[AccountInfo, ...] = ()
    failures: tuple[FetchFailure, ...] = ()

    @property
    def is_complete(self) -> bool:
        """True when no account or event listing was lost or truncated."""
        return not self.failures

    @property
    def is_empty(self) -> bool:
        return not self.rows
