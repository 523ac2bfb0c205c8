"""Continuous device position tracking.

:class:`GeolocationTracker` owns a single watch on a
:class:`PositionProvider` and maps its callbacks onto the
:data:`~jeevansetu.models.location.LocationState` sum type.

State transitions:

* ``start()`` without a capable provider → ``unsupported``
* ``start()`` → ``fetching``
* fix callback → ``ready`` (every fix, first and subsequent)
* error callback → ``denied``; the watch is released and stays released
  until ``start()`` is called again

The tracker is a context manager; leaving the block releases the watch
on every exit path.
"""

from __future__ import annotations

import itertools
import logging
import math
import time
from collections.abc import Callable
from typing import Any, Protocol

from jeevansetu._constants import DEFAULT_ACCURACY_M
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.models.console import LocationTone
from jeevansetu.models.location import (
    AnyLocation,
    LocationDenied,
    LocationFetching,
    LocationIdle,
    LocationReady,
    LocationUnsupported,
    PositionError,
    PositionErrorCode,
    PositionFix,
    PositionOptions,
)

_logger = logging.getLogger(__name__)

FixCallback = Callable[[PositionFix], None]
ErrorCallback = Callable[[PositionError], None]


class PositionProvider(Protocol):
    """Host device positioning capability."""

    @property
    def supported(self) -> bool:
        ...

    def watch_position(self, on_fix: FixCallback, on_error: ErrorCallback, options: PositionOptions) -> int:
        """Start a continuous subscription and return its watch id."""
        ...

    def clear_watch(self, watch_id: int) -> None:
        ...


# ---------------------------------------------------------------------------
# Derived display values
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def location_summary(state: AnyLocation, *, default_accuracy: float = DEFAULT_ACCURACY_M) -> str:
    """Human-readable one-line description of *state*."""
    if isinstance(state, LocationUnsupported):
        return "Device has no GPS"
    if isinstance(state, LocationDenied):
        return "Location blocked – tap to enter manually"
    if isinstance(state, (LocationFetching, LocationIdle)):
        return "Fetching live location..."
    if isinstance(state, LocationReady):
        accuracy = state.accuracy_meters if state.accuracy_meters is not None else default_accuracy
        return f"{state.latitude:.4f}, {state.longitude:.4f} ({_round_half_up(accuracy)}m)"
    return "Live location pending"


def location_tone(state: AnyLocation) -> LocationTone:
    if isinstance(state, LocationReady):
        return "ok"
    if isinstance(state, LocationDenied):
        return "warn"
    return "pending"


# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------


class GeolocationTracker:
    """Map a device position watch onto a :data:`LocationState`.

    Parameters
    ----------
    provider : PositionProvider or None
        Device capability. ``None`` means the host has no positioning.
    config : JeevanSetuConfig or None
        Supplies ``high_accuracy``, ``position_max_age`` and
        ``default_accuracy_m``.
    clock : callable
        Epoch-seconds clock used to age incoming fixes.
    on_change : callable or None
        Invoked with the new state after every transition.
    """

    def __init__(
        self,
        provider: PositionProvider | None,
        *,
        config: JeevanSetuConfig | None = None,
        clock: Callable[[], float] = time.time,
        on_change: Callable[[AnyLocation], None] | None = None,
    ) -> None:
        self._provider = provider
        self._config = config or JeevanSetuConfig()
        self._clock = clock
        self._on_change = on_change
        self._state: AnyLocation = LocationIdle()
        self._watch_id: int | None = None
        self._active = False

    def __enter__(self) -> GeolocationTracker:
        self.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.stop()

    @property
    def state(self) -> AnyLocation:
        return self._state

    @property
    def is_watching(self) -> bool:
        return self._active

    @property
    def options(self) -> PositionOptions:
        return PositionOptions(
            enable_high_accuracy=self._config.high_accuracy,
            maximum_age=self._config.position_max_age,
        )

    def summary(self) -> str:
        return location_summary(self._state, default_accuracy=self._config.default_accuracy_m)

    def tone(self) -> LocationTone:
        return location_tone(self._state)

    def start(self) -> None:
        """Subscribe to the device position stream.

        No-op while a watch is active. After ``denied`` this is the
        explicit restart.
        """
        if self._active:
            return
        provider = self._provider
        if provider is None or not provider.supported:
            self._set_state(LocationUnsupported())
            return

        self._active = True
        self._set_state(LocationFetching())
        try:
            self._watch_id = provider.watch_position(self._handle_fix, self._handle_error, self.options)
        except Exception:
            self._active = False
            self._set_state(LocationIdle())
            raise
        if not self._active:
            # The provider reported an error synchronously.
            self.stop()
            return
        _logger.debug("Position watch %s started", self._watch_id)

    def stop(self) -> None:
        """Release the watch. The last known state is kept."""
        self._active = False
        watch_id = self._watch_id
        if watch_id is None:
            return
        self._watch_id = None
        if self._provider is not None:
            self._provider.clear_watch(watch_id)
        _logger.debug("Position watch %s cleared", watch_id)

    def _set_state(self, state: AnyLocation) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def _handle_fix(self, fix: PositionFix) -> None:
        if not self._active:
            # Late delivery after stop() or an error.
            return
        if fix.timestamp is not None:
            age = self._clock() - fix.timestamp
            if age > self._config.position_max_age:
                _logger.warning("Dropping stale position fix (%.1fs old)", age)
                return
        self._set_state(LocationReady.from_fix(fix))

    def _handle_error(self, error: PositionError) -> None:
        if not self._active:
            return
        _logger.warning("Positioning failed: %s %s", error.code.name, error.message)
        self.stop()
        self._set_state(LocationDenied(reason=error.code.name.lower()))


# ---------------------------------------------------------------------------
# Simulated device
# ---------------------------------------------------------------------------


class SimulatedPositionProvider:
    """Scriptable stand-in for a device's positioning capability.

    Fixes and errors pushed with :meth:`push_fix` / :meth:`push_error`
    are delivered synchronously to every active watch. A watch started
    while a cached fix is younger than the requested ``maximum_age`` is
    answered with that fix immediately.
    """

    def __init__(self, *, supported: bool = True, clock: Callable[[], float] = time.time) -> None:
        self._supported = supported
        self._clock = clock
        self._ids = itertools.count(1)
        self._watches: dict[int, tuple[FixCallback, ErrorCallback, PositionOptions]] = {}
        self._last_fix: PositionFix | None = None

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def active_watches(self) -> int:
        return len(self._watches)

    def watch_position(self, on_fix: FixCallback, on_error: ErrorCallback, options: PositionOptions) -> int:
        watch_id = next(self._ids)
        self._watches[watch_id] = (on_fix, on_error, options)
        cached = self._last_fix
        if cached is not None and cached.timestamp is not None:
            if self._clock() - cached.timestamp <= options.maximum_age:
                on_fix(cached)
        return watch_id

    def clear_watch(self, watch_id: int) -> None:
        self._watches.pop(watch_id, None)

    def push_fix(
        self,
        *,
        latitude: float,
        longitude: float,
        accuracy: float | None = None,
        timestamp: float | None = None,
    ) -> PositionFix:
        fix = PositionFix(
            latitude=latitude,
            longitude=longitude,
            accuracy=accuracy,
            timestamp=timestamp if timestamp is not None else self._clock(),
        )
        self._last_fix = fix
        for on_fix, _on_error, _options in list(self._watches.values()):
            on_fix(fix)
        return fix

    def push_error(
        self,
        code: PositionErrorCode = PositionErrorCode.PERMISSION_DENIED,
        message: str = "",
    ) -> None:
        error = PositionError(code=code, message=message)
        for _on_fix, on_error, _options in list(self._watches.values()):
            on_error(error)
