"""
Per-request payments API credential.
Threaded explicitly into every repository instead of living in global state.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class StripeCredential:
    secret_key: str = field(repr=False)

    @property
    def masked(self) -> str:
        """Return the key with everything but its prefix and last 4 chars hidden."""
        if len(self.secret_key) <= 12:
            return "****"
        return f"{self.secret_key[:8]}...{self.secret_key[-4:]}"

    def __str__(self) -> str:
        return f"StripeCredential({self.masked})"
