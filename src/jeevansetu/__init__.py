"""jeevansetu - Async core for the Jeevan Setu emergency-dispatch client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jeevansetu")
except PackageNotFoundError:
    __version__ = "0+local"
from jeevansetu.auth import AuthProvider, DemoAuthProvider, HttpAuthProvider, Registration
from jeevansetu.bystander import BystanderReportForm
from jeevansetu.config import JeevanSetuConfig
from jeevansetu.console import EmergencyConsole, dashboard_for
from jeevansetu.dispatch import (
    DispatchBackend,
    DispatchStateMachine,
    HttpDispatchBackend,
    SimulatedDispatchBackend,
)
from jeevansetu.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConfigError,
    DispatchError,
    DispatchTimeoutError,
    JeevanSetuError,
    ProfileValidationError,
    RegistrationError,
    StorageError,
    TimelineError,
    TransportError,
)
from jeevansetu.geolocation import (
    GeolocationTracker,
    PositionProvider,
    SimulatedPositionProvider,
    location_summary,
    location_tone,
)
from jeevansetu.models import (
    BystanderReport,
    ConsoleView,
    DashboardView,
    EmergencyPhase,
    EntryStatus,
    LocationDenied,
    LocationFetching,
    LocationIdle,
    LocationReady,
    LocationState,
    LocationUnsupported,
    PatientProfileDraft,
    PositionError,
    PositionFix,
    SubmittedReport,
    TimelineEntry,
)
from jeevansetu.profile import ProfileWizard, load_draft, save_draft
from jeevansetu.routing import Route, landing_route, logout_route, require_role, route_for_role
from jeevansetu.session import Role, SessionContext, SessionStore
from jeevansetu.storage import JsonFileStore, KeyValueStore, MemoryStore, open_store

__all__ = [
    "__version__",
    "ApiError",
    "AuthProvider",
    "AuthenticationError",
    "AuthorizationError",
    "BystanderReport",
    "BystanderReportForm",
    "ConfigError",
    "ConsoleView",
    "DashboardView",
    "DemoAuthProvider",
    "DispatchBackend",
    "DispatchError",
    "DispatchStateMachine",
    "DispatchTimeoutError",
    "EmergencyConsole",
    "EmergencyPhase",
    "EntryStatus",
    "GeolocationTracker",
    "HttpAuthProvider",
    "HttpDispatchBackend",
    "JeevanSetuConfig",
    "JeevanSetuError",
    "JsonFileStore",
    "KeyValueStore",
    "LocationDenied",
    "LocationFetching",
    "LocationIdle",
    "LocationReady",
    "LocationState",
    "LocationUnsupported",
    "MemoryStore",
    "PatientProfileDraft",
    "PositionError",
    "PositionFix",
    "PositionProvider",
    "ProfileValidationError",
    "ProfileWizard",
    "Registration",
    "RegistrationError",
    "Role",
    "Route",
    "SessionContext",
    "SessionStore",
    "SimulatedDispatchBackend",
    "SimulatedPositionProvider",
    "StorageError",
    "SubmittedReport",
    "TimelineEntry",
    "TimelineError",
    "TransportError",
    "dashboard_for",
    "landing_route",
    "load_draft",
    "location_summary",
    "location_tone",
    "logout_route",
    "open_store",
    "require_role",
    "route_for_role",
    "save_draft",
]
