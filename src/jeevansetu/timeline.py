"""Emergency timeline construction and slot completion.

The timeline is a fixed-length tuple. Completing a slot returns a new
tuple with only that index replaced, so entries are never reordered,
removed or reverted to ``pending``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from jeevansetu._constants import TIMELINE_SLOTS
from jeevansetu.exceptions import TimelineError
from jeevansetu.models.timeline import EntryStatus, TimelineEntry

Timeline = tuple[TimelineEntry, ...]


def initial_timeline(now: datetime) -> Timeline:
    """Seed the timeline: slot 0 (medical snapshot) done at *now*, the rest pending."""
    entries: list[TimelineEntry] = []
    for index, (label, detail) in enumerate(TIMELINE_SLOTS):
        if index == 0:
            entries.append(TimelineEntry(label=label, detail=detail, status=EntryStatus.DONE, timestamp=now))
        else:
            entries.append(TimelineEntry(label=label, detail=detail))
    return tuple(entries)


def complete_slot(timeline: Sequence[TimelineEntry], index: int, *, detail: str, at: datetime) -> Timeline:
    """Return a copy of *timeline* with slot *index* marked done.

    Raises
    ------
    TimelineError
        If *index* is out of range or the slot is already done.
    """
    if not 0 <= index < len(timeline):
        raise TimelineError(f"timeline slot {index} out of range (0..{len(timeline) - 1})")
    entry = timeline[index]
    if entry.is_done:
        raise TimelineError(f"timeline slot {index} ({entry.label!r}) already completed")
    updated = entry.model_copy(update={"status": EntryStatus.DONE, "detail": detail, "timestamp": at})
    return tuple(updated if i == index else e for i, e in enumerate(timeline))


def completed_count(timeline: Sequence[TimelineEntry]) -> int:
    return sum(1 for entry in timeline if entry.is_done)
