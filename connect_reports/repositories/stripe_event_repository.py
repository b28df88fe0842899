"""
Repository layer for charge, refund and dispute listings on a connected account.
All cursor pagination over the Stripe list endpoints lives here.
"""
from dataclasses import dataclass
from typing import Optional
import logging

import stripe

from connect_reports.core.logging_config import log_api_timing
from connect_reports.models.raw_event import EventType, RawEvent
from connect_reports.repositories.stripe_repository import StripeRepository

logger = logging.getLogger(__name__)

# Stripe has no decline-only endpoint: failed charges come from the charge listing.
_RESOURCE_NAMES = {
    EventType.CHARGE: "Charge",
    EventType.FAILED_CHARGE: "Charge",
    EventType.REFUND: "Refund",
    EventType.DISPUTE: "Dispute",
}


@dataclass(frozen=True)
class EventListing:
    """Events accumulated for one event type, plus the error that cut it short."""

    event_type: EventType
    events: tuple[RawEvent, ...]
    error: Optional[str] = None

    @property
    def truncated(self) -> bool:
        return self.error is not None


def _matches(event_type: EventType, obj) -> bool:
    """Return True when a listed object belongs to *event_type*."""
    if event_type is EventType.FAILED_CHARGE:
        return obj.get("status") == "failed"
    if event_type is EventType.CHARGE:
        return obj.get("status") != "failed"
    return True


class StripeEventRepository(StripeRepository):
    """Data access layer for paginated event listings."""

    def list_events(
        self,
        event_type: EventType,
        account_id: str,
        window_start: int,
        window_end: int,
    ) -> EventListing:
        """
        Return every event of *event_type* created within the inclusive
        [window_start, window_end] unix window on behalf of *account_id*.

        A failing page request stops the listing; whatever was accumulated
        so far is returned together with the error message.
        """
        logger.info(
            "Listing %s events for account=%s window=%s-%s",
            event_type.value,
            account_id,
            window_start,
            window_end,
        )
        events: list[RawEvent] = []
        starting_after: Optional[str] = None

        while True:
            try:
                page = self._list_page(
                    _RESOURCE_NAMES[event_type],
                    account_id,
                    window_start,
                    window_end,
                    starting_after,
                )
            except stripe.StripeError as exc:
                logger.warning(
                    "Stopped %s listing for account=%s after %s events: %s",
                    event_type.value,
                    account_id,
                    len(events),
                    exc,
                )
                return EventListing(event_type, tuple(events), error=str(exc))

            data = list(page.data)
            events.extend(
                RawEvent.from_stripe(obj) for obj in data if _matches(event_type, obj)
            )
            if not page.has_more or not data:
                break
            # Cursor is the last listed object, not the last one kept by the filter
            starting_after = data[-1]["id"]

        logger.info(
            "Listed %s %s events for account=%s",
            len(events),
            event_type.value,
            account_id,
        )
        return EventListing(event_type, tuple(events))

    @log_api_timing
    def _list_page(
        self,
        resource_name: str,
        account_id: str,
        window_start: int,
        window_end: int,
        starting_after: Optional[str],
    ):
        """Request a single page from the named Stripe list endpoint."""
        params: dict = {
            "limit": self._page_limit,
            "created": {"gte": window_start, "lte": window_end},
        }
        if starting_after:
            params["starting_after"] = starting_after
        resource = getattr(stripe, resource_name)
        return resource.list(**params, **self._request_options(account_id))
