"""
Exception hierarchy for actions marketplace synchronization.
"""


class ActionsSyncError(Exception):
    """Base exception for actions sync operations."""

    pass


class ConfigError(ActionsSyncError, ValueError):
    """Invalid sync configuration."""

    pass


class CandidateInputError(ActionsSyncError):
    """The candidate actions file could not be read or is malformed."""

    pass


class MarketplaceApiError(ActionsSyncError):
    """Error returned by, or while talking to, the marketplace API."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
        correlation_id: str | None = None,
        details: object | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.details = details
