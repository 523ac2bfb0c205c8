"""Session context and its key/value persistence."""

from __future__ import annotations

import logging
import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jeevansetu._constants import ROLE_KEY, TOKEN_KEY
from jeevansetu.storage import KeyValueStore

_logger = logging.getLogger(__name__)

#: Default session lifetime in seconds (12 hours).
DEFAULT_SESSION_TTL: float = 12 * 3600


class Role(StrEnum):
    PATIENT = "patient"
    DRIVER = "driver"
    HOSPITAL = "hospital"


class SessionContext(BaseModel):
    """Authenticated session passed explicitly to routes.

    Parameters
    ----------
    token : str
        Bearer token issued by the auth provider.
    role : Role
        Account role; selects the landing route.
    created_at : float
        Epoch seconds at which the session was issued.
    ttl : float
        Lifetime in seconds. ``inf`` never expires.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    token: str
    role: Role
    created_at: float = Field(default_factory=time.time)
    ttl: float = DEFAULT_SESSION_TTL

    @field_validator("token")
    @classmethod
    def _require_token(cls, value: str) -> str:
        if not value:
            raise ValueError("token must be non-empty")
        return value

    @property
    def is_expired(self) -> bool:
        """Whether the session has exceeded its TTL."""
        return (time.time() - self.created_at) >= self.ttl

    @property
    def age(self) -> float:
        """Seconds since the session was issued."""
        return time.time() - self.created_at


class SessionStore:
    """Persist a :class:`SessionContext` as the ``token``/``role`` pair.

    Only the two keys are stored, so a restored session is treated as
    freshly issued with the given *ttl*.
    """

    def __init__(self, store: KeyValueStore, *, ttl: float = DEFAULT_SESSION_TTL) -> None:
        self._store = store
        self._ttl = ttl if ttl > 0 else float("inf")

    def save(self, session: SessionContext) -> None:
        self._store.set(TOKEN_KEY, session.token)
        self._store.set(ROLE_KEY, session.role.value)

    def load(self) -> SessionContext | None:
        token = self._store.get(TOKEN_KEY)
        role = self._store.get(ROLE_KEY)
        if not token or not role:
            return None
        try:
            parsed_role = Role(role)
        except ValueError:
            _logger.warning("Ignoring stored session with unknown role %r", role)
            return None
        try:
            return SessionContext(token=token, role=parsed_role, ttl=self._ttl)
        except ValidationError:
            _logger.warning("Ignoring stored session with unusable token", exc_info=True)
            return None

    def clear(self) -> None:
        self._store.remove(TOKEN_KEY)
        self._store.remove(ROLE_KEY)
