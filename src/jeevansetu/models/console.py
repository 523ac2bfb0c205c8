"""Read-only view models rendered by the presentation layer."""

from __future__ import annotations

from typing import Literal

from jeevansetu.models._base import JeevanBaseModel
from jeevansetu.models.dispatch import EmergencyPhase
from jeevansetu.models.timeline import TimelineEntry

LocationTone = Literal["ok", "warn", "pending"]


class AmbulanceEta(JeevanBaseModel):
    unit: str
    eta_minutes: int


class VitalReading(JeevanBaseModel):
    label: str
    value: str
    status: Literal["stable", "alert"] = "stable"


class ConsoleView(JeevanBaseModel):
    """Snapshot of the patient emergency console."""

    phase: EmergencyPhase
    button_label: str
    button_enabled: bool
    timeline: tuple[TimelineEntry, ...]
    location_summary: str
    location_tone: LocationTone
    selected_tag: str
    incident_tags: tuple[str, ...]
    nearby_ambulances: tuple[AmbulanceEta, ...]
    rejection_policies: tuple[str, ...]
    vitals: tuple[VitalReading, ...]
    error: str | None = None


class DashboardView(JeevanBaseModel):
    title: str
    message: str
    logout_label: str
