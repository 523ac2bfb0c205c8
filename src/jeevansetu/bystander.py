"""Anonymous bystander incident reporting."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from jeevansetu._constants import DEFAULT_INCIDENT_TAG, INCIDENT_TAGS, VOICE_NOTE
from jeevansetu._redact import redact_for_log
from jeevansetu.models.location import AnyLocation, LocationIdle
from jeevansetu.models.report import BystanderReport, SubmittedReport

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BystanderReportForm:
    """Draft state of the bystander report card.

    No login is involved; submitted reports are handed to an optional
    *on_submit* sink and the draft is cleared.
    """

    tags: tuple[str, ...] = INCIDENT_TAGS

    def __init__(
        self,
        *,
        on_submit: Callable[[SubmittedReport], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._on_submit = on_submit
        self._clock = clock
        self.report = BystanderReport()
        self.selected_tag = DEFAULT_INCIDENT_TAG
        self.voice_capturing = False

    def select_tag(self, tag: str) -> None:
        if tag not in self.tags:
            raise ValueError(f"unknown incident tag {tag!r}")
        self.selected_tag = tag

    def set_description(self, text: str) -> None:
        self.report = self.report.model_copy(update={"description": text})

    def set_contact(self, text: str) -> None:
        self.report = self.report.model_copy(update={"contact": text})

    def toggle_voice_capture(self) -> bool:
        """Flip voice capture; starting a capture appends the transcribed note."""
        starting = not self.voice_capturing
        self.voice_capturing = starting
        if starting:
            current = self.report.description
            self.set_description(f"{current}\n{VOICE_NOTE}" if current else VOICE_NOTE)
        return self.voice_capturing

    def submit(self, location: AnyLocation | None = None) -> SubmittedReport:
        submitted = SubmittedReport(
            tag=self.selected_tag,
            description=self.report.description,
            contact=self.report.contact,
            location=location if location is not None else LocationIdle(),
            submitted_at=self._clock(),
        )
        _logger.info(
            "Accident report queued with live GPS: %s",
            redact_for_log({"tag": submitted.tag, "contact": submitted.contact, "location": submitted.location}),
        )
        if self._on_submit is not None:
            self._on_submit(submitted)
        self.report = BystanderReport()
        return submitted