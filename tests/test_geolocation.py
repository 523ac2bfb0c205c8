from __future__ import annotations

import logging

import pytest

from jeevansetu.config import JeevanSetuConfig
from jeevansetu.geolocation import (
    GeolocationTracker,
    SimulatedPositionProvider,
    location_summary,
    location_tone,
)
from jeevansetu.models.location import (
    LocationDenied,
    LocationFetching,
    LocationIdle,
    LocationReady,
    LocationUnsupported,
    PositionErrorCode,
)

NOW = 1_700_000_000.0


def _clock() -> float:
    return NOW


def _tracker(provider: SimulatedPositionProvider | None, **kwargs) -> GeolocationTracker:
    return GeolocationTracker(provider, clock=_clock, **kwargs)


def _provider(**kwargs) -> SimulatedPositionProvider:
    return SimulatedPositionProvider(clock=_clock, **kwargs)


# ------------------------------------------------------------------
# location_summary / location_tone
# ------------------------------------------------------------------


class TestLocationSummary:
    def test_ready_formats_four_decimals_and_rounded_accuracy(self) -> None:
        state = LocationReady(latitude=28.6139, longitude=77.2090, accuracy_meters=12.4)
        assert location_summary(state) == "28.6139, 77.2090 (12m)"

    def test_missing_accuracy_falls_back_to_ten_meters(self) -> None:
        state = LocationReady(latitude=28.6139, longitude=77.2090)
        assert location_summary(state) == "28.6139, 77.2090 (10m)"

    def test_accuracy_rounds_half_up(self) -> None:
        state = LocationReady(latitude=1.0, longitude=2.0, accuracy_meters=12.5)
        assert location_summary(state) == "1.0000, 2.0000 (13m)"

    def test_explanatory_strings(self) -> None:
        assert location_summary(LocationUnsupported()) == "Device has no GPS"
        assert location_summary(LocationDenied()) == "Location blocked – tap to enter manually"
        assert location_summary(LocationFetching()) == "Fetching live location..."
        assert location_summary(LocationIdle()) == "Fetching live location..."

    def test_tone(self) -> None:
        assert location_tone(LocationReady(latitude=0.0, longitude=0.0)) == "ok"
        assert location_tone(LocationDenied()) == "warn"
        assert location_tone(LocationFetching()) == "pending"
        assert location_tone(LocationUnsupported()) == "pending"


# ------------------------------------------------------------------
# GeolocationTracker
# ------------------------------------------------------------------


def test_starts_idle_without_subscription() -> None:
    provider = _provider()
    tracker = _tracker(provider)

    assert isinstance(tracker.state, LocationIdle)
    assert provider.active_watches == 0


def test_missing_capability_resolves_to_unsupported() -> None:
    tracker = _tracker(None)
    tracker.start()
    assert isinstance(tracker.state, LocationUnsupported)
    assert not tracker.is_watching

    provider = _provider(supported=False)
    tracker = _tracker(provider)
    tracker.start()
    assert isinstance(tracker.state, LocationUnsupported)
    assert provider.active_watches == 0


def test_fetching_then_ready_on_every_fix() -> None:
    provider = _provider()
    seen: list[str] = []
    tracker = _tracker(provider, on_change=lambda state: seen.append(state.status))

    tracker.start()
    assert isinstance(tracker.state, LocationFetching)

    provider.push_fix(latitude=28.6139, longitude=77.2090, accuracy=12.4)
    assert tracker.summary() == "28.6139, 77.2090 (12m)"

    provider.push_fix(latitude=28.7, longitude=77.3, accuracy=5.0)
    state = tracker.state
    assert isinstance(state, LocationReady)
    assert state.latitude == 28.7
    assert state.accuracy_meters == 5.0

    assert seen == ["fetching", "ready", "ready"]


def test_watch_requested_with_high_accuracy_and_max_age() -> None:
    tracker = _tracker(_provider(), config=JeevanSetuConfig(position_max_age=10.0))
    options = tracker.options
    assert options.enable_high_accuracy is True
    assert options.maximum_age == 10.0


def test_error_is_terminal_and_releases_watch() -> None:
    provider = _provider()
    tracker = _tracker(provider)
    tracker.start()

    provider.push_error(PositionErrorCode.PERMISSION_DENIED, "User denied geolocation")

    assert isinstance(tracker.state, LocationDenied)
    assert tracker.state.reason == "permission_denied"
    assert provider.active_watches == 0
    assert not tracker.is_watching

    # Late fixes cannot bring the tracker back.
    provider.push_fix(latitude=1.0, longitude=1.0)
    assert isinstance(tracker.state, LocationDenied)


def test_explicit_restart_after_denial() -> None:
    provider = _provider()
    tracker = _tracker(provider)
    tracker.start()
    provider.push_error(PositionErrorCode.POSITION_UNAVAILABLE)
    assert isinstance(tracker.state, LocationDenied)

    tracker.start()
    assert isinstance(tracker.state, LocationFetching)
    provider.push_fix(latitude=12.9716, longitude=77.5946, accuracy=8.0)
    assert isinstance(tracker.state, LocationReady)


def test_start_twice_keeps_single_watch() -> None:
    provider = _provider()
    tracker = _tracker(provider)
    tracker.start()
    tracker.start()
    assert provider.active_watches == 1


def test_stop_keeps_last_state_and_ignores_late_fixes() -> None:
    provider = _provider()
    tracker = _tracker(provider)
    tracker.start()
    provider.push_fix(latitude=1.0, longitude=2.0, accuracy=3.0)
    tracker.stop()

    assert provider.active_watches == 0
    assert isinstance(tracker.state, LocationReady)

    tracker._handle_fix(provider.push_fix(latitude=5.0, longitude=5.0))  # noqa: SLF001
    assert tracker.state.latitude == 1.0


def test_context_manager_releases_watch_on_error_exit() -> None:
    provider = _provider()

    with pytest.raises(RuntimeError):
        with _tracker(provider) as tracker:
            assert provider.active_watches == 1
            assert tracker.is_watching
            raise RuntimeError("view torn down")

    assert provider.active_watches == 0


def test_stale_fix_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    provider = _provider()
    tracker = _tracker(provider, config=JeevanSetuConfig(position_max_age=10.0))
    tracker.start()

    with caplog.at_level(logging.WARNING, logger="jeevansetu.geolocation"):
        provider.push_fix(latitude=1.0, longitude=1.0, timestamp=NOW - 30)
    assert isinstance(tracker.state, LocationFetching)
    assert "stale" in caplog.text

    provider.push_fix(latitude=1.0, longitude=1.0, timestamp=NOW - 5)
    assert isinstance(tracker.state, LocationReady)


def test_cached_fix_within_window_is_reused_on_new_watch() -> None:
    provider = _provider()
    provider.push_fix(latitude=19.076, longitude=72.8777, accuracy=20.0, timestamp=NOW - 3)

    tracker = _tracker(provider)
    tracker.start()

    assert isinstance(tracker.state, LocationReady)
    assert tracker.summary() == "19.0760, 72.8777 (20m)"


def test_cached_fix_outside_window_is_not_reused() -> None:
    provider = _provider()
    provider.push_fix(latitude=19.076, longitude=72.8777, timestamp=NOW - 60)

    tracker = _tracker(provider)
    tracker.start()

    assert isinstance(tracker.state, LocationFetching)


def test_exactly_one_variant_for_any_callback_sequence() -> None:
    provider = _provider()
    states = []
    tracker = _tracker(provider, on_change=states.append)
    variants = (LocationIdle, LocationUnsupported, LocationDenied, LocationFetching, LocationReady)

    tracker.start()
    provider.push_fix(latitude=1.0, longitude=1.0)
    provider.push_error()
    tracker.start()
    provider.push_fix(latitude=2.0, longitude=2.0, accuracy=None)
    tracker.stop()

    for state in states:
        assert sum(isinstance(state, variant) for variant in variants) == 1
