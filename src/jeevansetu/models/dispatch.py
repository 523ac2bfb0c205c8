"""Emergency dispatch phase."""

from __future__ import annotations

from enum import StrEnum


class EmergencyPhase(StrEnum):
    """Phase of the emergency dispatch sequence.

    The main path ``idle → precheck → dispatching → locked`` only moves
    forward. ``failed`` and ``cancelled`` are terminal exits taken from
    ``precheck`` or ``dispatching``.
    """

    IDLE = "idle"
    PRECHECK = "precheck"
    DISPATCHING = "dispatching"
    LOCKED = "locked"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL

    @property
    def is_active(self) -> bool:
        return self in (EmergencyPhase.PRECHECK, EmergencyPhase.DISPATCHING)

    @property
    def rank(self) -> int:
        """Position on the main path; terminal exits rank after every live phase."""
        return _RANK[self]


_TERMINAL = frozenset({EmergencyPhase.LOCKED, EmergencyPhase.FAILED, EmergencyPhase.CANCELLED})
_RANK: dict[EmergencyPhase, int] = {
    EmergencyPhase.IDLE: 0,
    EmergencyPhase.PRECHECK: 1,
    EmergencyPhase.DISPATCHING: 2,
    EmergencyPhase.LOCKED: 3,
    EmergencyPhase.FAILED: 3,
    EmergencyPhase.CANCELLED: 3,
}
