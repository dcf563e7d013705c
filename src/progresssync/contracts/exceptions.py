"""Exception hierarchy for progresssync."""

from __future__ import annotations


class ProgressSyncError(Exception):
    """Base exception for all progresssync errors."""


class ConfigError(ProgressSyncError):
    """Configuration loading or validation failure."""


class UnknownContentTypeError(ProgressSyncError):
    """No metric adapter is registered for the requested content type."""

    def __init__(self, content_type: str, *, available: tuple[str, ...] = ()) -> None:
        listed = ", ".join(available) or "(none registered)"
        super().__init__(f"Unknown content type: {content_type!r}. Available: {listed}")
        self.content_type = content_type
        self.available = available


class GatewayError(ProgressSyncError):
    """Base sync gateway operation failure."""


class AuthenticationError(GatewayError):
    """The store of record rejected the learner's credentials."""


class GatewayResponseError(GatewayError):
    """The store of record answered with an unexpected status or payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SessionClosedError(ProgressSyncError):
    """An operation was attempted on an engine or session after unmount."""
