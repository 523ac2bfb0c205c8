"""Device position fixes and the tracker's location state."""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, Field, TypeAdapter, field_validator

from jeevansetu.models._base import EpochSeconds, JeevanBaseModel, safe_float


class PositionFix(JeevanBaseModel):
    """A single coordinate fix delivered by the device.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    accuracy : float or None
        Horizontal accuracy radius in meters, when reported.
    timestamp : float or None
        Epoch seconds at which the fix was taken. Millisecond inputs
        are normalized.
    """

    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(validation_alias=AliasChoices("longitude", "lon", "lng"))
    accuracy: float | None = Field(default=None, validation_alias=AliasChoices("accuracy", "accuracyMeters"))
    timestamp: EpochSeconds = None

    @field_validator("accuracy", mode="before")
    @classmethod
    def _coerce_accuracy(cls, value: Any) -> float | None:
        parsed = safe_float(value)
        if parsed is None or parsed < 0:
            return None
        return parsed

    @field_validator("latitude")
    @classmethod
    def _check_latitude(cls, value: float) -> float:
        if not -90.0 <= value <= 90.0:
            raise ValueError(f"latitude out of range: {value}")
        return value

    @field_validator("longitude")
    @classmethod
    def _check_longitude(cls, value: float) -> float:
        if not -180.0 <= value <= 180.0:
            raise ValueError(f"longitude out of range: {value}")
        return value


class PositionErrorCode(enum.IntEnum):
    """Error codes of the device positioning API."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class PositionError(JeevanBaseModel):
    code: PositionErrorCode = PositionErrorCode.POSITION_UNAVAILABLE
    message: str = ""


class PositionOptions(JeevanBaseModel):
    """Options passed to the device when a watch is started.

    ``maximum_age`` permits the device to answer with a cached fix no
    older than that many seconds.
    """

    enable_high_accuracy: bool = True
    maximum_age: float = 10.0
    timeout: float | None = None


# ---------------------------------------------------------------------------
# LocationState: one model per variant, discriminated on ``status``.
# ---------------------------------------------------------------------------


class LocationIdle(JeevanBaseModel):
    status: Literal["idle"] = "idle"


class LocationUnsupported(JeevanBaseModel):
    status: Literal["unsupported"] = "unsupported"


class LocationDenied(JeevanBaseModel):
    status: Literal["denied"] = "denied"
    reason: str = ""


class LocationFetching(JeevanBaseModel):
    status: Literal["fetching"] = "fetching"


class LocationReady(JeevanBaseModel):
    status: Literal["ready"] = "ready"
    latitude: float
    longitude: float
    accuracy_meters: float | None = None
    timestamp: EpochSeconds = None

    @classmethod
    def from_fix(cls, fix: PositionFix) -> LocationReady:
        return cls(
            latitude=fix.latitude,
            longitude=fix.longitude,
            accuracy_meters=fix.accuracy,
            timestamp=fix.timestamp,
        )


AnyLocation = LocationIdle | LocationUnsupported | LocationDenied | LocationFetching | LocationReady

LocationState = Annotated[AnyLocation, Field(discriminator="status")]

_LOCATION_ADAPTER: TypeAdapter[Any] = TypeAdapter(LocationState)


def parse_location_state(data: Any) -> AnyLocation:
    """Validate a serialized location state into its variant model."""
    return _LOCATION_ADAPTER.validate_python(data)
