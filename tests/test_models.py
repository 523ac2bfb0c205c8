"""Tests for model parsing with JeevanBaseModel."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from jeevansetu.models import (
    EmergencyPhase,
    LocationDenied,
    LocationIdle,
    LocationReady,
    PositionFix,
    SubmittedReport,
    parse_location_state,
)
from jeevansetu.models._base import parse_epoch_seconds, safe_float

# ------------------------------------------------------------------
# Parsing helpers
# ------------------------------------------------------------------


class TestHelpers:
    @pytest.mark.parametrize("value", [None, "", True, "abc", float("nan"), float("inf")])
    def test_safe_float_rejects(self, value: object) -> None:
        assert safe_float(value) is None

    def test_safe_float_parses_strings(self) -> None:
        assert safe_float("12.5") == 12.5

    def test_epoch_millis_normalized(self) -> None:
        assert parse_epoch_seconds(1_700_000_000_000) == 1_700_000_000.0
        assert parse_epoch_seconds(1_700_000_000) == 1_700_000_000.0
        assert parse_epoch_seconds(0) is None

    def test_epoch_from_datetime(self) -> None:
        assert parse_epoch_seconds(datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)) == 1_700_000_000.0


# ------------------------------------------------------------------
# PositionFix
# ------------------------------------------------------------------


class TestPositionFix:
    def test_short_aliases(self) -> None:
        fix = PositionFix.model_validate({"lat": 28.6, "lng": 77.2, "accuracy": "15", "timestamp": 1_700_000_000_000})
        assert fix.latitude == 28.6
        assert fix.longitude == 77.2
        assert fix.accuracy == 15.0
        assert fix.timestamp == 1_700_000_000.0

    @pytest.mark.parametrize("accuracy", [-1, "n/a", None])
    def test_unusable_accuracy_dropped(self, accuracy: object) -> None:
        assert PositionFix(latitude=0, longitude=0, accuracy=accuracy).accuracy is None

    @pytest.mark.parametrize(("lat", "lon"), [(91, 0), (-90.5, 0), (0, 180.1)])
    def test_out_of_range_rejected(self, lat: float, lon: float) -> None:
        with pytest.raises(ValidationError):
            PositionFix(latitude=lat, longitude=lon)


# ------------------------------------------------------------------
# LocationState
# ------------------------------------------------------------------


class TestLocationState:
    def test_discriminated_parse(self) -> None:
        ready = parse_location_state({"status": "ready", "latitude": 1.5, "longitude": 2.5, "accuracyMeters": 8})
        assert isinstance(ready, LocationReady)
        assert ready.accuracy_meters == 8

        denied = parse_location_state({"status": "denied", "reason": "permission_denied"})
        assert isinstance(denied, LocationDenied)

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_location_state({"status": "teleported"})

    def test_ready_requires_coordinates(self) -> None:
        with pytest.raises(ValidationError):
            parse_location_state({"status": "ready"})

    def test_from_fix(self) -> None:
        fix = PositionFix(latitude=1.0, longitude=2.0, accuracy=3.0, timestamp=1_700_000_000)
        ready = LocationReady.from_fix(fix)
        assert (ready.latitude, ready.longitude, ready.accuracy_meters, ready.timestamp) == (
            1.0,
            2.0,
            3.0,
            1_700_000_000.0,
        )

    def test_models_are_frozen(self) -> None:
        with pytest.raises(ValidationError):
            LocationReady(latitude=1.0, longitude=2.0).latitude = 3.0  # type: ignore[misc]


def test_submitted_report_serializes_location_variant() -> None:
    report = SubmittedReport(tag="Stroke", description="", contact="")
    assert isinstance(report.location, LocationIdle)

    dumped = SubmittedReport(
        tag="Stroke",
        description="",
        contact="",
        location=LocationReady(latitude=1.0, longitude=2.0),
    ).model_dump(by_alias=True)
    assert dumped["location"]["status"] == "ready"
    assert dumped["submittedAt"] is not None


def test_phase_properties() -> None:
    assert [p for p in EmergencyPhase if p.is_terminal] == [
        EmergencyPhase.LOCKED,
        EmergencyPhase.FAILED,
        EmergencyPhase.CANCELLED,
    ]
    assert [p for p in EmergencyPhase if p.is_active] == [EmergencyPhase.PRECHECK, EmergencyPhase.DISPATCHING]
    assert EmergencyPhase.IDLE.rank < EmergencyPhase.PRECHECK.rank < EmergencyPhase.DISPATCHING.rank
