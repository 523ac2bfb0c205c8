"""Emergency timeline entry model."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from jeevansetu.models._base import JeevanBaseModel


class EntryStatus(StrEnum):
    PENDING = "pending"
    DONE = "done"


class TimelineEntry(JeevanBaseModel):
    """One displayed step of the emergency response.

    ``timestamp`` is set exactly when ``status`` becomes ``done``.
    """

    label: str
    detail: str
    status: EntryStatus = EntryStatus.PENDING
    timestamp: datetime | None = None

    @property
    def is_done(self) -> bool:
        return self.status is EntryStatus.DONE

    def display_time(self) -> str:
        """Local wall-clock time of completion (``HH:MM:SS``), or ``""``."""
        if self.timestamp is None:
            return ""
        return self.timestamp.astimezone().strftime("%H:%M:%S")
