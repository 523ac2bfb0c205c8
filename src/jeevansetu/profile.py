"""Patient profile intake: draft persistence and the three-step wizard."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Literal

from pydantic import ValidationError

from jeevansetu._constants import PREFERRED_MIN, PROFILE_DRAFT_KEY, PROFILE_STEPS
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.exceptions import ProfileValidationError
from jeevansetu.models.profile import PatientProfileDraft
from jeevansetu.storage import KeyValueStore

_logger = logging.getLogger(__name__)

MSG_INCOMPLETE = "Complete required fields before continuing."
MSG_NEED_HOSPITALS = "Please ensure at least two preferred hospitals are selected."
MSG_SAVED = "Profile saved locally. We will sync it once APIs are available."

FileKind = Literal["insurance_card_name", "report_name"]


def load_draft(store: KeyValueStore, *, key: str = PROFILE_DRAFT_KEY) -> PatientProfileDraft:
    """Read the stored draft, falling back to defaults.

    Stored fields are merged over the defaults. Unparseable JSON, a
    non-object payload or invalid field values are logged and yield the
    all-default draft; nothing is raised.
    """
    stored = store.get(key)
    if not stored:
        return PatientProfileDraft()
    try:
        parsed = json.loads(stored)
    except json.JSONDecodeError:
        _logger.warning("Failed to parse patient profile draft", exc_info=True)
        return PatientProfileDraft()
    if not isinstance(parsed, dict):
        _logger.warning("Failed to parse patient profile draft: expected object, got %s", type(parsed).__name__)
        return PatientProfileDraft()
    try:
        return PatientProfileDraft.model_validate(parsed)
    except ValidationError:
        _logger.warning("Failed to parse patient profile draft", exc_info=True)
        return PatientProfileDraft()


def save_draft(store: KeyValueStore, draft: PatientProfileDraft, *, key: str = PROFILE_DRAFT_KEY) -> None:
    store.set(key, draft.model_dump_json(by_alias=True))


class ProfileWizard:
    """Multi-step profile form.

    Steps: ``Personal``, ``Medical & Insurance``, ``Preferences``. The
    wizard refuses to advance past an incomplete step and records a
    status message for the presentation layer.
    """

    steps: tuple[str, ...] = PROFILE_STEPS

    def __init__(self, store: KeyValueStore, *, config: JeevanSetuConfig | None = None) -> None:
        self._store = store
        self._config = config or JeevanSetuConfig()
        self.draft: PatientProfileDraft = load_draft(store)
        self.step_index = 0
        self.status_message: str | None = None
        self.is_saving = False

    @property
    def step_name(self) -> str:
        return self.steps[self.step_index]

    @property
    def is_last_step(self) -> bool:
        return self.step_index == len(self.steps) - 1

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def update(self, **fields: Any) -> PatientProfileDraft:
        """Replace draft fields by name (snake_case)."""
        unknown = set(fields) - set(PatientProfileDraft.model_fields)
        if unknown:
            raise ValueError(f"unknown profile fields: {', '.join(sorted(unknown))}")
        self.draft = PatientProfileDraft.model_validate({**self.draft.model_dump(), **fields})
        return self.draft

    def set_emergency_contact(self, index: int, value: str) -> None:
        if index not in (0, 1):
            raise IndexError(f"emergency contact index must be 0 or 1, got {index}")
        contacts = list(self.draft.emergency_contacts)
        contacts[index] = value
        self.update(emergency_contacts=tuple(contacts))

    def toggle_hospital(self, hospital: str) -> bool:
        """Add or remove *hospital*; return whether it is now selected."""
        preferred = list(self.draft.preferred_hospitals)
        if hospital in preferred:
            preferred.remove(hospital)
            selected = False
        else:
            preferred.append(hospital)
            selected = True
        self.update(preferred_hospitals=preferred)
        return selected

    def set_additional_hospitals(self, text: str) -> list[str]:
        items = [item.strip() for item in text.split(",")]
        self.update(additional_hospitals=[item for item in items if item])
        return self.draft.additional_hospitals

    def capture_file(self, kind: FileKind, filename: str | None) -> None:
        """Record the name of an uploaded file; empty selections are ignored."""
        if not filename:
            return
        self.update(**{kind: filename})

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def can_continue(self) -> bool:
        if self.step_index == 0:
            return self.draft.personal_complete()
        if self.step_index == 1:
            return self.draft.insurance_complete()
        return len(self.draft.preferred_hospitals) >= PREFERRED_MIN

    def next(self) -> bool:
        if not self.can_continue():
            self.status_message = MSG_INCOMPLETE
            return False
        self.status_message = None
        self.step_index = min(self.step_index + 1, len(self.steps) - 1)
        return True

    def back(self) -> None:
        self.status_message = None
        self.step_index = max(self.step_index - 1, 0)

    async def submit(self) -> PatientProfileDraft:
        """Persist the draft.

        Raises
        ------
        ProfileValidationError
            The current step is incomplete or fewer than two preferred
            hospitals are selected. ``status_message`` carries the
            user-facing text.
        """
        if not self.can_continue() or len(self.draft.preferred_hospitals) < PREFERRED_MIN:
            self.status_message = MSG_NEED_HOSPITALS
            raise ProfileValidationError(MSG_NEED_HOSPITALS)

        self.is_saving = True
        try:
            save_draft(self._store, self.draft)
            await asyncio.sleep(self._config.profile_save_delay)
        finally:
            self.is_saving = False
        self.status_message = MSG_SAVED
        _logger.info("Patient profile draft saved")
        return self.draft
