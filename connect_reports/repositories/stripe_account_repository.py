"""
Repository layer for connected-account metadata.
"""
from typing import Optional
import logging

import stripe

from connect_reports.core.logging_config import log_api_timing
from connect_reports.models.account_info import AccountInfo
from connect_reports.repositories.stripe_repository import StripeRepository

logger = logging.getLogger(__name__)


class StripeAccountRepository(StripeRepository):
    """Data access layer for connected accounts. Stripe errors propagate."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_api_timing
    def get_by_id(self, account_id: str) -> AccountInfo:
        """Retrieve one connected account."""
        account = stripe.Account.retrieve(account_id, **self._request_options())
        return AccountInfo.from_stripe(account)

    def list_all(self) -> list[AccountInfo]:
        """Return every connected account, following the listing cursor."""
        logger.trace("Listing all connected accounts")
        accounts: list[AccountInfo] = []
        starting_after: Optional[str] = None

        while True:
            page = self._list_page(starting_after)
            data = list(page.data)
            accounts.extend(AccountInfo.from_stripe(account) for account in data)
            if not page.has_more or not data:
                break
            starting_after = data[-1]["id"]

        logger.info("Listed %s connected accounts", len(accounts))
        return accounts

    @log_api_timing
    def _list_page(self, starting_after: Optional[str]):
        """Request a single page of connected accounts."""
        params: dict = {"limit": self._page_limit}
        if starting_after:
            params["starting_after"] = starting_after
        return stripe.Account.list(**params, **self._request_options())
