"""Custom exception hierarchy for jeevansetu."""

from __future__ import annotations


class JeevanSetuError(Exception):
    """Base exception for all jeevansetu errors."""


class ConfigError(JeevanSetuError):
    """Invalid or missing configuration."""


class StorageError(JeevanSetuError):
    """Key/value store could not be written."""


class TransportError(JeevanSetuError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ApiError(TransportError):
    """Backend answered with an application-level error."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.code = code
        super().__init__(message, status_code=status_code, endpoint=endpoint)


class AuthenticationError(ApiError):
    """Login failed: unknown credentials or unusable token response."""


class RegistrationError(ApiError):
    """Registration rejected (e.g. password confirmation mismatch)."""


class AuthorizationError(JeevanSetuError):
    """Session role is not allowed on the requested route."""


class TimelineError(JeevanSetuError):
    """Timeline slot is out of range or already completed."""


class DispatchError(JeevanSetuError):
    """A dispatch backend step failed.

    The state machine stores the error on ``DispatchStateMachine.error``
    and moves to the terminal ``failed`` phase instead of raising from
    its background task.
    """

    def __init__(self, message: str, *, step: str = "") -> None:
        self.step = step
        super().__init__(message)


class DispatchTimeoutError(DispatchError):
    """A dispatch backend step did not complete within ``step_timeout``."""


class ProfileValidationError(JeevanSetuError):
    """A profile wizard step is incomplete."""
