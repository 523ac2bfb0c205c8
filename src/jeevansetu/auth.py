"""Authentication providers.

Both providers resolve to a :class:`~jeevansetu.session.SessionContext`.
:class:`DemoAuthProvider` accepts the fixed demo accounts after a
simulated network delay; :class:`HttpAuthProvider` talks to the auth API.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, field_validator

from jeevansetu._constants import DEMO_CREDENTIALS, MOCK_TOKEN_PREFIX
from jeevansetu._redact import redact_for_log
from jeevansetu._transport import Transport
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.exceptions import AuthenticationError, RegistrationError
from jeevansetu.session import Role, SessionContext

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class Registration(BaseModel):
    """Sign-up form."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    phone: str
    password: str
    confirm_password: str
    role: Role = Role.PATIENT

    @field_validator("name", "phone")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value

    @property
    def passwords_match(self) -> bool:
        return self.password == self.confirm_password


class AuthProvider(Protocol):
    async def login(self, phone: str, password: str) -> SessionContext:
        ...

    async def register(self, registration: Registration) -> SessionContext:
        ...


def _session_ttl(config: JeevanSetuConfig) -> float:
    return config.session_ttl if config.session_ttl > 0 else float("inf")


class DemoAuthProvider:
    """Accept the built-in demo accounts and issue mock tokens."""

    def __init__(
        self,
        config: JeevanSetuConfig | None = None,
        *,
        credentials: dict[str, tuple[str, str]] | None = None,
    ) -> None:
        self._config = config or JeevanSetuConfig()
        self._credentials = dict(credentials if credentials is not None else DEMO_CREDENTIALS)

    def _issue(self, role: Role) -> SessionContext:
        return SessionContext(
            token=f"{MOCK_TOKEN_PREFIX}{_now_ms()}",
            role=role,
            ttl=_session_ttl(self._config),
        )

    async def login(self, phone: str, password: str) -> SessionContext:
        await asyncio.sleep(self._config.auth_delay)
        entry = self._credentials.get(phone.strip())
        if entry is None or entry[0] != password:
            _logger.debug("Demo login rejected for %s", redact_for_log({"phone": phone}))
            raise AuthenticationError("Invalid credentials", endpoint="demo")
        session = self._issue(Role(entry[1]))
        _logger.info("Demo login succeeded as %s", session.role)
        return session

    async def register(self, registration: Registration) -> SessionContext:
        if not registration.passwords_match:
            raise RegistrationError("Passwords don't match", endpoint="demo")
        await asyncio.sleep(self._config.auth_delay)
        session = self._issue(registration.role)
        _logger.info("Demo registration succeeded as %s", session.role)
        return session


class HttpAuthProvider:
    """Authenticate against ``POST /auth/login`` and ``POST /auth/register``.

    Both endpoints answer ``{"token": "...", "role": "patient|driver|hospital"}``.
    """

    LOGIN_ENDPOINT = "/auth/login"
    REGISTER_ENDPOINT = "/auth/register"

    def __init__(self, transport: Transport, config: JeevanSetuConfig | None = None) -> None:
        self._transport = transport
        self._config = config or JeevanSetuConfig()

    def _parse_session(self, response: dict[str, Any], *, endpoint: str) -> SessionContext:
        token = response.get("token")
        role = response.get("role")
        if not isinstance(token, str) or not token:
            raise AuthenticationError(f"{endpoint} response missing token", endpoint=endpoint)
        try:
            parsed_role = Role(str(role))
        except ValueError as exc:
            raise AuthenticationError(f"{endpoint} response has unknown role {role!r}", endpoint=endpoint) from exc
        return SessionContext(token=token, role=parsed_role, ttl=_session_ttl(self._config))

    async def login(self, phone: str, password: str) -> SessionContext:
        endpoint = self.LOGIN_ENDPOINT
        response = await self._transport.post_json(endpoint, {"phone": phone.strip(), "password": password})
        return self._parse_session(response, endpoint=endpoint)

    async def register(self, registration: Registration) -> SessionContext:
        endpoint = self.REGISTER_ENDPOINT
        if not registration.passwords_match:
            raise RegistrationError("Passwords don't match", endpoint=endpoint)
        payload = {
            "name": registration.name,
            "phone": registration.phone,
            "password": registration.password,
            "role": registration.role.value,
        }
        response = await self._transport.post_json(endpoint, payload)
        return self._parse_session(response, endpoint=endpoint)
