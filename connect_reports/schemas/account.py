"""
Pydantic schemas for connected account responses.
"""
from pydantic import BaseModel


class AccountInfoResponse(BaseModel):
    """Snapshot of a connected account's metadata."""

    id: str
    business_type: str
    country: str
    charges_enabled: bool
    payouts_enabled: bool
    email: str
    type: str

    model_config = {"from_attributes": True}


class AccountListResponse(BaseModel):
    """Response payload for the account selection list."""

    success: bool = True
    accounts: list[AccountInfoResponse]
    total: int
