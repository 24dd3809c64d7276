"""Errors raised by the notification engine."""

from __future__ import annotations


class NotificationEngineError(Exception):
    """Base class for every error surfaced by the notification engine."""


class ValidationError(NotificationEngineError):
    """The template, target, include or context combination is invalid."""


class ForbiddenError(NotificationEngineError):
    """The acting user lacks rights for the requested operation."""


class NotFoundError(NotificationEngineError):
    """A referenced template, entity or record does not exist."""


class EmptyRecipientSetError(NotificationEngineError):
    """Recipient resolution produced no active users."""

    def __init__(self, message: str = "no recipients matched the selected target") -> None:
        super().__init__(message)


class PushProviderError(NotificationEngineError):
    """A single push delivery attempt failed."""


class PushGoneError(PushProviderError):
    """The push service reported the subscription endpoint as expired."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"push subscription gone: {endpoint}")
        self.endpoint = endpoint


__all__ = [
    "NotificationEngineError",
    "ValidationError",
    "ForbiddenError",
    "NotFoundError",
    "EmptyRecipientSetError",
    "PushProviderError",
    "PushGoneError",
]
