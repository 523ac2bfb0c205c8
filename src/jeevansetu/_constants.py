"""Internal constants shared across the library."""

from __future__ import annotations

BASE_URL = "http://localhost:8000"
USER_AGENT = "jeevansetu/0.1"

# ------------------------------------------------------------------
# Local key/value storage keys
# ------------------------------------------------------------------

TOKEN_KEY = "token"
ROLE_KEY = "role"
PROFILE_DRAFT_KEY = "patient-profile-draft"

MOCK_TOKEN_PREFIX = "mock-jwt-token-"

# ------------------------------------------------------------------
# Geolocation
# ------------------------------------------------------------------

DEFAULT_ACCURACY_M = 10.0
POSITION_MAX_AGE_S = 10.0

# ------------------------------------------------------------------
# Dispatch timing (simulated backend), seconds from trigger
# ------------------------------------------------------------------

DISPATCH_DELAY_S = 1.2
LOCK_DELAY_S = 2.8
STEP_TIMEOUT_S = 30.0

# ------------------------------------------------------------------
# Emergency timeline: (label, initial detail) per slot
# ------------------------------------------------------------------

TIMELINE_SLOTS: tuple[tuple[str, str], ...] = (
    ("Medical snapshot", "Profile verified & synced"),
    ("Preferred hospitals", "Awaiting readiness check"),
    ("Ambulance lock", "No active dispatch"),
    ("Family notified", "SMS/WhatsApp queued"),
)

SLOT_HOSPITALS = 1
SLOT_AMBULANCE = 2
SLOT_FAMILY = 3

DETAIL_HOSPITALS_PINGED = "Hospitals pinged"
DETAIL_DRIVER_ALERTED = "Driver alerted – awaiting accept"
DETAIL_FAMILY_NOTIFIED = "Family notified with live map"

# ------------------------------------------------------------------
# Demo accounts: phone -> (password, role)
# ------------------------------------------------------------------

DEMO_CREDENTIALS: dict[str, tuple[str, str]] = {
    "1234567890": ("patient123", "patient"),
    "9876543210": ("driver123", "driver"),
    "1122334455": ("hospital123", "hospital"),
}

# ------------------------------------------------------------------
# Profile intake
# ------------------------------------------------------------------

HOSPITAL_OPTIONS: tuple[str, ...] = (
    "City Heart Institute",
    "MetroCare Cardiac",
    "Govt Trauma Center",
    "Sunrise Multispeciality",
    "Pulse Children Hospital",
)
PREFERRED_MIN = 2
PROFILE_STEPS: tuple[str, ...] = ("Personal", "Medical & Insurance", "Preferences")

# ------------------------------------------------------------------
# Emergency console display data
# ------------------------------------------------------------------

INCIDENT_TAGS: tuple[str, ...] = ("Road accident", "Cardiac", "Stroke", "Breathing", "Burn", "Other")
DEFAULT_INCIDENT_TAG = "Cardiac"
VOICE_NOTE = "Voice: Victim unconscious"

REJECTION_POLICIES: tuple[str, ...] = (
    "Block driver after 3 rejects",
    "Escalate to govt dashboard",
    "Auto-assign after 2 mins",
)
NEARBY_AMBULANCES: tuple[tuple[str, int], ...] = (
    ("ALS-21", 4),
    ("BLS-07", 5),
    ("Gov-12", 6),
)
VITALS: tuple[tuple[str, str, str], ...] = (
    ("ECG", "72 bpm", "stable"),
    ("BP", "118/78", "stable"),
    ("SpO2", "97%", "stable"),
)
