"""
Connected account directory service.
"""
from typing import Optional
import logging

import stripe

from connect_reports.core.exceptions import UpstreamServiceError
from connect_reports.models.account_info import AccountInfo
from connect_reports.models.credential import StripeCredential
from connect_reports.repositories.stripe_account_repository import StripeAccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Business logic for listing and looking up connected accounts."""

    def __init__(self, credential: StripeCredential) -> None:
        """Initialize the account repository bound to the request credential."""
        logger.trace("Initializing AccountService")
        self._account_repo = StripeAccountRepository(credential)

    def list_accounts(self) -> list[AccountInfo]:
        """Return every connected account visible to the credential."""
        logger.info("Listing connected accounts")
        try:
            return self._account_repo.list_all()
        except stripe.StripeError as exc:
            logger.error("Failed to list connected accounts: %s", exc)
            raise UpstreamServiceError("Failed to fetch accounts") from exc

    def get_account(self, account_id: str) -> Optional[AccountInfo]:
        """Return one connected account, or None if it cannot be retrieved."""
        logger.info("Fetching connected account id=%s", account_id)
        try:
            return self._account_repo.get_by_id(account_id)
        except stripe.StripeError as exc:
            logger.warning("Connected account id=%s not available: %s", account_id, exc)
            return None
