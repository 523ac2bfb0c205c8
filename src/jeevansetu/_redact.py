"""Helpers for safe logging of session, profile and incident data.

Sessions carry bearer tokens; profiles and bystander reports carry phone
numbers, emails and the patient's position. :func:`redact_for_log` masks
known personal fields by key, scrubs phone numbers and emails out of free
text, and coarsens coordinates before anything is logged.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import BaseModel

# Compared after lower-casing and dropping underscores, so ``contactNumber``
# and ``contact_number`` both match ``contactnumber``.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "confirmpassword",
        "token",
        "authorization",
        "cookie",
        "phone",
        "contact",
        "contactnumber",
        "email",
        "emergencycontacts",
        "policynumber",
    }
)
_COORDINATE_KEYS: frozenset[str] = frozenset({"latitude", "longitude", "lat", "lon", "lng"})

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
# Ten or more digits, optionally with a leading + and single spaces.
_PHONE_RE = re.compile(r"(?<!\d)\+?\d(?: ?\d){9,}(?!\d)")

# Roughly 1 km.
_COORDINATE_DECIMALS = 2


def _normalize_key(key: str) -> str:
    return key.lower().replace("_", "")


def scrub_text(text: str) -> str:
    """Mask emails and phone numbers inside free text."""
    return _PHONE_RE.sub("<phone>", _EMAIL_RE.sub("<email>", text))


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted, JSON-friendly copy of *value* for logs.

    Pydantic models are dumped by alias first, so a ``SessionContext`` or
    ``SubmittedReport`` can be passed directly.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)

    if isinstance(value, datetime):
        return value.isoformat()

    if isinstance(value, str):
        text = scrub_text(value)
        if len(text) > max_string:
            return f"{text[:max_string]}…<truncated>"
        return text

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            normalized = _normalize_key(key)
            if normalized in _SENSITIVE_KEYS:
                redacted[key] = "<redacted>" if v not in (None, "") else v
            elif normalized in _COORDINATE_KEYS and isinstance(v, (int, float)) and not isinstance(v, bool):
                redacted[key] = round(float(v), _COORDINATE_DECIMALS)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
