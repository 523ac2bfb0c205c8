"""JSON-over-HTTP transport for the auth and dispatch backends."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from jeevansetu._constants import USER_AGENT
from jeevansetu._redact import redact_for_log
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.exceptions import ApiError, TransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the HTTP collaborators.

    Tests pass doubles that implement ``post_json`` directly.
    """

    async def post_json(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        *,
        token: str | None = None,
    ) -> dict[str, Any]:
        ...


class JsonTransport:
    """POST JSON bodies and decode JSON object replies."""

    def __init__(self, config: JeevanSetuConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def post_json(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        *,
        token: str | None = None,
    ) -> dict[str, Any]:
        """Send *payload* to ``base_url + endpoint`` and return the decoded reply.

        Raises
        ------
        ApiError
            The backend answered 4xx/5xx with an ``error`` field.
        TransportError
            Network failure, non-2xx status without a usable error body,
            or a body that is not a JSON object.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        if token:
            headers["authorization"] = f"Bearer {token}"

        url = f"{self._config.base_url}{endpoint}"
        body = json.dumps(dict(payload), separators=(",", ":"))

        _logger.debug("POST %s payload=%s", url, redact_for_log(dict(payload)))

        try:
            async with self._http.post(url, data=body, headers=headers) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise TransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body_json = json.loads(text) if text else {}
        except json.JSONDecodeError as exc:
            raise TransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if not isinstance(body_json, dict):
            raise TransportError(
                f"Expected JSON object from {endpoint}, got {type(body_json).__name__}",
                status_code=status,
                endpoint=endpoint,
            )

        if not 200 <= status < 300:
            error = body_json.get("error")
            if error:
                raise ApiError(
                    f"{endpoint} rejected: {error}",
                    code=str(body_json.get("code", "")),
                    status_code=status,
                    endpoint=endpoint,
                )
            raise TransportError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        _logger.debug("POST %s -> %s %s", url, status, redact_for_log(body_json))
        return body_json
