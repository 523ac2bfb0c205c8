"""Presentation-facing facades for the patient console and dashboards."""

from __future__ import annotations

import logging
from typing import Any

from jeevansetu._constants import INCIDENT_TAGS, NEARBY_AMBULANCES, REJECTION_POLICIES, VITALS
from jeevansetu.bystander import BystanderReportForm
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.dispatch import DispatchBackend, DispatchStateMachine
from jeevansetu.exceptions import AuthorizationError
from jeevansetu.geolocation import GeolocationTracker, PositionProvider
from jeevansetu.models.console import AmbulanceEta, ConsoleView, DashboardView, VitalReading
from jeevansetu.models.dispatch import EmergencyPhase
from jeevansetu.models.report import SubmittedReport
from jeevansetu.routing import require_role
from jeevansetu.session import Role, SessionContext

_logger = logging.getLogger(__name__)

BUTTON_LABELS: dict[EmergencyPhase, str] = {
    EmergencyPhase.IDLE: "Emergency",
    EmergencyPhase.PRECHECK: "Checking hospitals",
    EmergencyPhase.DISPATCHING: "Alerting ambulances",
    EmergencyPhase.LOCKED: "Ambulance locked",
    EmergencyPhase.FAILED: "Dispatch failed",
    EmergencyPhase.CANCELLED: "Dispatch cancelled",
}


class EmergencyConsole:
    """Patient emergency console.

    Owns a :class:`GeolocationTracker`, a :class:`DispatchStateMachine`
    and a :class:`BystanderReportForm`. Entering the context starts
    location tracking; leaving it releases the position watch and any
    pending dispatch work.

    Raises
    ------
    AuthorizationError
        If *session* is missing, expired or not a patient session.
    """

    def __init__(
        self,
        session: SessionContext | None,
        *,
        config: JeevanSetuConfig | None = None,
        position_provider: PositionProvider | None = None,
        dispatch_backend: DispatchBackend | None = None,
    ) -> None:
        self._session = require_role(session, Role.PATIENT)
        self._config = config or JeevanSetuConfig()
        self.tracker = GeolocationTracker(position_provider, config=self._config)
        self.dispatch = DispatchStateMachine(dispatch_backend, config=self._config)
        self.bystander = BystanderReportForm()

    async def __aenter__(self) -> EmergencyConsole:
        self.tracker.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        try:
            self.tracker.stop()
        finally:
            await self.dispatch.close()

    @property
    def session(self) -> SessionContext:
        return self._session

    def trigger(self) -> bool:
        return self.dispatch.trigger()

    def submit_report(self) -> SubmittedReport:
        """Send the bystander report with the current location attached."""
        return self.bystander.submit(self.tracker.state)

    def view(self) -> ConsoleView:
        phase = self.dispatch.phase
        error = self.dispatch.error
        return ConsoleView(
            phase=phase,
            button_label=BUTTON_LABELS[phase],
            button_enabled=phase is EmergencyPhase.IDLE,
            timeline=self.dispatch.timeline,
            location_summary=self.tracker.summary(),
            location_tone=self.tracker.tone(),
            selected_tag=self.bystander.selected_tag,
            incident_tags=INCIDENT_TAGS,
            nearby_ambulances=tuple(AmbulanceEta(unit=unit, eta_minutes=eta) for unit, eta in NEARBY_AMBULANCES),
            rejection_policies=REJECTION_POLICIES,
            vitals=tuple(VitalReading(label=label, value=value, status=status) for label, value, status in VITALS),
            error=str(error) if error is not None else None,
        )


_DASHBOARDS: dict[Role, DashboardView] = {
    Role.DRIVER: DashboardView(
        title="Driver Dashboard",
        message="Job requests will appear here.",
        logout_label="Logout (Go Offline)",
    ),
    Role.HOSPITAL: DashboardView(
        title="Hospital Dashboard",
        message="Live emergency table will go here.",
        logout_label="Logout",
    ),
}


def dashboard_for(session: SessionContext | None) -> DashboardView:
    """Placeholder dashboard for a driver or hospital session."""
    if session is None or session.is_expired:
        raise AuthorizationError("Login required")
    view = _DASHBOARDS.get(session.role)
    if view is None:
        raise AuthorizationError(f"No dashboard for role {session.role.value!r}")
    _logger.debug("Serving %s dashboard", session.role)
    return view
