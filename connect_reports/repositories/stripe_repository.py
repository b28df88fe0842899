"""
Shared base for repositories that read from the Stripe API.
"""
from typing import Optional
import logging

from connect_reports.core.config import settings
from connect_reports.models.credential import StripeCredential

logger = logging.getLogger(__name__)


class StripeRepository:
    """Holds the per-request credential and builds request options."""

    def __init__(self, credential: StripeCredential) -> None:
        """Store the credential used for every API call of this repository."""
        logger.trace("Initializing %s with %s", type(self).__name__, credential)
        self._credential = credential
        self._page_limit = settings.STRIPE_PAGE_LIMIT

    def _request_options(self, account_id: Optional[str] = None) -> dict:
        """Return keyword options shared by every Stripe resource call."""
        options: dict = {"api_key": self._credential.secret_key}
        if settings.STRIPE_API_VERSION:
            options["stripe_version"] = settings.STRIPE_API_VERSION
        if account_id:
            options["stripe_account"] = account_id
        return options
