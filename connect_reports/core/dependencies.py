"""
FastAPI dependency injection helpers for per-request credentials and services.
"""
from typing import Optional
import logging

from fastapi import Depends, Header, HTTPException, status

from connect_reports.models.credential import StripeCredential
from connect_reports.services.account_service import AccountService
from connect_reports.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Credential dependency
# ---------------------------------------------------------------------------

def get_stripe_credential(
    x_secret_key: Optional[str] = Header(default=None),
) -> StripeCredential:
    """
    Build the Stripe credential for this request from the X-Secret-Key header.
    Raises HTTP 401 if the header is missing or blank.
    """
    if not x_secret_key or not x_secret_key.strip():
        logger.warning("Request missing x-secret-key header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing x-secret-key header",
        )
    credential = StripeCredential(secret_key=x_secret_key.strip())
    logger.trace("Resolved request credential %s", credential)
    return credential


# ---------------------------------------------------------------------------
# Service dependencies
# ---------------------------------------------------------------------------

def get_transaction_service(
    credential: StripeCredential = Depends(get_stripe_credential),
) -> TransactionService:
    """Return a TransactionService bound to the request credential."""
    return TransactionService(credential)


def get_account_service(
    credential: StripeCredential = Depends(get_stripe_credential),
) -> AccountService:
    """Return an AccountService bound to the request credential."""
    return AccountService(credential)
