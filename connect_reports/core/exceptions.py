"""
Typed errors raised by the reporting services.
The HTTP layer translates them into request-level failure responses.
"""


class ReportValidationError(ValueError):
    """Raised when report parameters are missing or malformed."""


class UpstreamServiceError(RuntimeError):
    """Raised when a payments API call fails with no degraded fallback."""
