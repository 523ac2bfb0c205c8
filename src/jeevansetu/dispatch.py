"""Emergency dispatch state machine.

:meth:`DispatchStateMachine.trigger` starts a one-shot sequence:

1. ``precheck`` immediately; timeline slot 1 marked done.
2. ``dispatching`` once the backend confirms a driver was alerted;
   slot 2 marked done.
3. ``locked`` once the backend confirms the family was notified;
   slot 3 marked done.

Steps 2 and 3 await a :class:`DispatchBackend`. Each await is bounded by
``step_timeout``; a failure or timeout moves the machine to the terminal
``failed`` phase. The background task is owned by the machine and is
cancelled by :meth:`close` (also run by ``async with``).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, Protocol

from jeevansetu._constants import (
    DETAIL_DRIVER_ALERTED,
    DETAIL_FAMILY_NOTIFIED,
    DETAIL_HOSPITALS_PINGED,
    SLOT_AMBULANCE,
    SLOT_FAMILY,
    SLOT_HOSPITALS,
)
from jeevansetu._transport import Transport
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.exceptions import ConfigError, DispatchError, DispatchTimeoutError
from jeevansetu.models.dispatch import EmergencyPhase
from jeevansetu.timeline import Timeline, complete_slot, initial_timeline

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DispatchBackend(Protocol):
    """Asynchronous collaborator that carries out the dispatch steps.

    Each coroutine resolves when the step has been confirmed and may
    return a replacement detail line for the timeline. Raising signals
    failure.
    """

    async def alert_driver(self) -> str | None:
        ...

    async def notify_family(self) -> str | None:
        ...


class SimulatedDispatchBackend:
    """Backend that always succeeds after fixed delays.

    ``dispatch_delay`` and ``lock_delay`` are measured from the first
    step call, so the two confirmations land at those offsets from the
    trigger.
    """

    def __init__(self, *, dispatch_delay: float, lock_delay: float) -> None:
        if lock_delay < dispatch_delay:
            raise ConfigError("lock_delay must not be less than dispatch_delay")
        self._dispatch_delay = dispatch_delay
        self._lock_delay = lock_delay

    @classmethod
    def from_config(cls, config: JeevanSetuConfig) -> SimulatedDispatchBackend:
        return cls(dispatch_delay=config.dispatch_delay, lock_delay=config.lock_delay)

    async def alert_driver(self) -> str | None:
        await asyncio.sleep(self._dispatch_delay)
        return None

    async def notify_family(self) -> str | None:
        await asyncio.sleep(self._lock_delay - self._dispatch_delay)
        return None


class HttpDispatchBackend:
    """Backend that confirms each step with the dispatch API.

    Endpoints reply with ``{"detail": "..."}`` (optional) on success.
    """

    ALERT_DRIVER_ENDPOINT = "/dispatch/alert-driver"
    NOTIFY_FAMILY_ENDPOINT = "/dispatch/notify-family"

    def __init__(self, transport: Transport, *, token: str, incident: dict[str, Any] | None = None) -> None:
        self._transport = transport
        self._token = token
        self._incident = dict(incident or {})

    async def _post(self, endpoint: str) -> str | None:
        response = await self._transport.post_json(endpoint, self._incident, token=self._token)
        detail = response.get("detail")
        return str(detail) if detail else None

    async def alert_driver(self) -> str | None:
        return await self._post(self.ALERT_DRIVER_ENDPOINT)

    async def notify_family(self) -> str | None:
        return await self._post(self.NOTIFY_FAMILY_ENDPOINT)


class DispatchStateMachine:
    """Drive the emergency sequence and expose its observable state.

    Usage::

        async with DispatchStateMachine(backend, config=config) as machine:
            machine.trigger()
            await machine.wait()
    """

    def __init__(
        self,
        backend: DispatchBackend | None = None,
        *,
        config: JeevanSetuConfig | None = None,
        clock: Callable[[], datetime] = _utcnow,
        on_change: Callable[[DispatchStateMachine], None] | None = None,
    ) -> None:
        self._config = config or JeevanSetuConfig()
        self._backend: DispatchBackend = backend or SimulatedDispatchBackend.from_config(self._config)
        self._clock = clock
        self._on_change = on_change
        self._phase = EmergencyPhase.IDLE
        self._timeline: Timeline = initial_timeline(clock())
        self._error: DispatchError | None = None
        self._task: asyncio.Task[None] | None = None

    async def __aenter__(self) -> DispatchStateMachine:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def phase(self) -> EmergencyPhase:
        return self._phase

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def error(self) -> DispatchError | None:
        return self._error

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def trigger(self) -> bool:
        """Start the sequence. Returns ``False`` (no change) unless idle.

        Must be called from a running event loop.
        """
        if self._phase is not EmergencyPhase.IDLE:
            _logger.debug("Ignoring trigger in phase %s", self._phase)
            return False

        loop = asyncio.get_running_loop()
        self._advance(EmergencyPhase.PRECHECK, SLOT_HOSPITALS, DETAIL_HOSPITALS_PINGED)
        self._task = loop.create_task(self._run())
        _logger.info("Emergency triggered")
        return True

    async def wait(self) -> EmergencyPhase:
        """Wait for the running sequence to settle and return the phase."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})
        return self._phase

    async def cancel(self) -> bool:
        """Abort a running sequence and move to ``cancelled``.

        Returns ``False`` when nothing was running.
        """
        if not self._phase.is_active:
            return False
        await self._stop_task()
        self._set_phase(EmergencyPhase.CANCELLED)
        _logger.info("Emergency dispatch cancelled")
        return True

    async def close(self) -> None:
        """Release the background task without changing the phase."""
        await self._stop_task()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _stop_task(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self)
        except Exception:
            _logger.exception("Dispatch on_change callback failed in phase %s", self._phase)

    def _set_phase(self, phase: EmergencyPhase) -> None:
        _logger.debug("Dispatch phase %s -> %s", self._phase, phase)
        self._phase = phase
        self._notify()

    def _advance(self, phase: EmergencyPhase, slot: int, detail: str) -> None:
        self._timeline = complete_slot(self._timeline, slot, detail=detail, at=self._clock())
        self._set_phase(phase)

    async def _step(self, name: str, call: Callable[[], Awaitable[str | None]]) -> str | None:
        try:
            return await asyncio.wait_for(call(), timeout=self._config.step_timeout)
        except TimeoutError as exc:
            raise DispatchTimeoutError(
                f"{name} did not complete within {self._config.step_timeout}s",
                step=name,
            ) from exc
        except DispatchError:
            raise
        except Exception as exc:
            raise DispatchError(f"{name} failed: {exc}", step=name) from exc

    async def _run(self) -> None:
        try:
            detail = await self._step("alert_driver", self._backend.alert_driver)
            self._advance(EmergencyPhase.DISPATCHING, SLOT_AMBULANCE, detail or DETAIL_DRIVER_ALERTED)

            detail = await self._step("notify_family", self._backend.notify_family)
            self._advance(EmergencyPhase.LOCKED, SLOT_FAMILY, detail or DETAIL_FAMILY_NOTIFIED)
            _logger.info("Ambulance locked; family notified")
        except DispatchError as exc:
            _logger.warning("Emergency dispatch failed at %s: %s", exc.step, exc)
            self._error = exc
            self._set_phase(EmergencyPhase.FAILED)
