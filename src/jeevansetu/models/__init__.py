"""Data models for jeevansetu."""

from jeevansetu.models._base import EpochSeconds, JeevanBaseModel, parse_epoch_seconds, safe_float
from jeevansetu.models.console import AmbulanceEta, ConsoleView, DashboardView, LocationTone, VitalReading
from jeevansetu.models.dispatch import EmergencyPhase
from jeevansetu.models.location import (
    AnyLocation,
    LocationDenied,
    LocationFetching,
    LocationIdle,
    LocationReady,
    LocationState,
    LocationUnsupported,
    PositionError,
    PositionErrorCode,
    PositionFix,
    PositionOptions,
    parse_location_state,
)
from jeevansetu.models.profile import PatientProfileDraft
from jeevansetu.models.report import BystanderReport, SubmittedReport
from jeevansetu.models.timeline import EntryStatus, TimelineEntry

__all__ = [
    "AmbulanceEta",
    "AnyLocation",
    "BystanderReport",
    "ConsoleView",
    "DashboardView",
    "EmergencyPhase",
    "EntryStatus",
    "EpochSeconds",
    "JeevanBaseModel",
    "LocationDenied",
    "LocationFetching",
    "LocationIdle",
    "LocationReady",
    "LocationState",
    "LocationTone",
    "LocationUnsupported",
    "PatientProfileDraft",
    "PositionError",
    "PositionErrorCode",
    "PositionFix",
    "PositionOptions",
    "SubmittedReport",
    "TimelineEntry",
    "VitalReading",
    "parse_epoch_seconds",
    "parse_location_state",
    "safe_float",
]
