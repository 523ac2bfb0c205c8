"""Bystander incident report models."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from jeevansetu.models._base import JeevanBaseModel
from jeevansetu.models.location import LocationIdle, LocationState


class BystanderReport(JeevanBaseModel):
    """Ephemeral report draft; never persisted."""

    description: str = ""
    contact: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.description and not self.contact


class SubmittedReport(JeevanBaseModel):
    """Snapshot handed to the command center when a report is sent."""

    tag: str
    description: str
    contact: str
    location: LocationState = Field(default_factory=LocationIdle)
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
