"""
Domain model (plain Python dataclass) describing a connected account.
Optional fields are defaulted so consumers never see missing values.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountInfo:
    id: str
    business_type: str = "individual"
    country: str = "US"
    charges_enabled: bool = False
    payouts_enabled: bool = False
    email: str = ""
    type: str = "express"

    @classmethod
    def from_stripe(cls, account) -> "AccountInfo":
        """Project a Stripe Account object into an AccountInfo snapshot."""
        return cls(
            id=account["id"],
            business_type=account.get("business_type") or "individual",
            country=account.get("country") or "US",
            charges_enabled=bool(account.get("charges_enabled") or False),
            payouts_enabled=bool(account.get("payouts_enabled") or False),
            email=account.get("email") or "",
            type=account.get("type") or "express",
        )
