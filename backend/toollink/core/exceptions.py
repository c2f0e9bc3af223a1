"""Errors raised by the upstream inventory API client."""


class UpstreamError(Exception):
    """Base class for failures talking to the ToolLink inventory API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UpstreamAuthError(UpstreamError):
    """401/403 from the API (missing, expired or rejected token)."""


class UpstreamNotFoundError(UpstreamError):
    pass


class UpstreamResponseError(UpstreamError):
    """Non-success status, ``success: false`` envelope or unreadable body."""


class UpstreamConnectionError(UpstreamError):
    """Transport failure or timeout; no response was received."""
