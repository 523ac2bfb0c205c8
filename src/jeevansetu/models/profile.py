"""Patient profile intake draft."""

from __future__ import annotations

from pydantic import Field

from jeevansetu._constants import HOSPITAL_OPTIONS
from jeevansetu.models._base import JeevanBaseModel

_DEFAULT_PREFERRED: tuple[str, ...] = HOSPITAL_OPTIONS[:2]


class PatientProfileDraft(JeevanBaseModel):
    """Profile form state persisted as a JSON blob.

    Serialize with ``model_dump_json(by_alias=True)`` to keep the
    camelCase keys the web client writes.
    """

    # Personal
    name: str = ""
    age: str = ""
    gender: str = ""
    address: str = ""
    blood_group: str = ""
    contact_number: str = ""
    email: str = ""
    emergency_contacts: tuple[str, str] = ("", "")

    # Medical
    diabetes: bool = False
    bp_issues: bool = False
    heart_conditions: str = ""
    kidney_conditions: str = ""
    allergies: str = ""
    medications: str = ""
    disabilities: str = ""

    # Insurance
    has_insurance: bool = True
    insurance_provider: str = ""
    policy_number: str = ""
    insurance_card_name: str | None = None
    report_name: str | None = None

    # Preferences
    preferred_hospitals: list[str] = Field(default_factory=lambda: list(_DEFAULT_PREFERRED))
    additional_hospitals: list[str] = Field(default_factory=list)
    allow_location: bool = True
    allow_sms: bool = True
    allow_voice: bool = True
    wearable_paired: bool = False

    def personal_complete(self) -> bool:
        required = (
            self.name,
            self.age,
            self.gender,
            self.address,
            self.blood_group,
            self.contact_number,
            self.email,
        )
        return all(required) and all(self.emergency_contacts)

    def insurance_complete(self) -> bool:
        if not self.has_insurance:
            return True
        return bool(self.insurance_provider and self.policy_number)
