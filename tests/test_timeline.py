from __future__ import annotations

from datetime import UTC, datetime

import pytest

from jeevansetu.exceptions import TimelineError
from jeevansetu.models.timeline import EntryStatus
from jeevansetu.timeline import complete_slot, completed_count, initial_timeline


def _dt(second: int = 0) -> datetime:
    return datetime(2026, 1, 1, 12, 0, second, tzinfo=UTC)


def test_initial_timeline_seeds_medical_snapshot() -> None:
    timeline = initial_timeline(_dt())

    assert [e.label for e in timeline] == [
        "Medical snapshot",
        "Preferred hospitals",
        "Ambulance lock",
        "Family notified",
    ]
    assert timeline[0].status is EntryStatus.DONE
    assert timeline[0].timestamp == _dt()
    assert all(e.status is EntryStatus.PENDING and e.timestamp is None for e in timeline[1:])
    assert completed_count(timeline) == 1


def test_complete_slot_replaces_only_that_index() -> None:
    timeline = initial_timeline(_dt())
    updated = complete_slot(timeline, 2, detail="Driver alerted", at=_dt(5))

    assert updated[2].status is EntryStatus.DONE
    assert updated[2].detail == "Driver alerted"
    assert updated[2].timestamp == _dt(5)
    assert updated[2].label == "Ambulance lock"
    for index in (0, 1, 3):
        assert updated[index] is timeline[index]
    # Input left untouched.
    assert timeline[2].status is EntryStatus.PENDING


def test_complete_slot_twice_raises() -> None:
    timeline = complete_slot(initial_timeline(_dt()), 1, detail="Hospitals pinged", at=_dt(1))
    with pytest.raises(TimelineError):
        complete_slot(timeline, 1, detail="again", at=_dt(2))
    with pytest.raises(TimelineError):
        complete_slot(timeline, 0, detail="again", at=_dt(2))


@pytest.mark.parametrize("index", [-1, 4])
def test_complete_slot_out_of_range(index: int) -> None:
    with pytest.raises(TimelineError):
        complete_slot(initial_timeline(_dt()), index, detail="x", at=_dt())


def test_display_time() -> None:
    timeline = initial_timeline(_dt())
    assert timeline[1].display_time() == ""
    assert len(timeline[0].display_time()) == len("12:00:00")
