"""Base model and parsing helpers shared by jeevansetu models.

Every model inherits from :class:`JeevanBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys used by the web
  client's JSON (``bloodGroup``, ``accuracyMeters``) map to snake_case
  fields, while snake_case keeps working via ``populate_by_name``.
* Frozen instances: state changes produce new models via
  ``model_copy(update=...)``.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

# Threshold to distinguish epoch seconds from milliseconds.
_MS_THRESHOLD = 1e11


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def parse_epoch_seconds(value: Any) -> float | None:
    """Normalize an epoch timestamp (seconds or milliseconds) to seconds.

    Device position APIs report milliseconds; Python clocks use seconds.
    ``datetime`` values are accepted as well.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.timestamp()
    ts = safe_float(value)
    if ts is None or ts <= 0:
        return None
    if ts > _MS_THRESHOLD:
        ts /= 1000.0
    return ts


EpochSeconds = Annotated[float | None, BeforeValidator(parse_epoch_seconds)]
"""Annotated type that coerces epoch seconds or milliseconds to seconds."""


class JeevanBaseModel(BaseModel):
    """Base for all jeevansetu models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
