"""Role-based route resolution."""

from __future__ import annotations

from enum import StrEnum

from jeevansetu.exceptions import AuthorizationError
from jeevansetu.session import Role, SessionContext


class Route(StrEnum):
    LANDING = "/"
    LOGIN = "/login"
    REGISTER = "/register"
    PATIENT_EMERGENCY = "/patient/emergency"
    PATIENT_PROFILE = "/patient/profile"
    DRIVER_DASHBOARD = "/driver/dashboard"
    HOSPITAL_DASHBOARD = "/hospital/dashboard"


_ROLE_HOME: dict[Role, Route] = {
    Role.PATIENT: Route.PATIENT_EMERGENCY,
    Role.DRIVER: Route.DRIVER_DASHBOARD,
    Role.HOSPITAL: Route.HOSPITAL_DASHBOARD,
}


def route_for_role(role: Role) -> Route:
    return _ROLE_HOME[role]


def landing_route(session: SessionContext | None) -> Route:
    """Where the landing page sends a visitor.

    A live session goes to its role's home; anyone else stays on the
    landing page.
    """
    if session is None or session.is_expired:
        return Route.LANDING
    return route_for_role(session.role)


def logout_route(role: Role) -> Route:
    if role is Role.PATIENT:
        return Route.LOGIN
    return Route.LANDING


def require_role(session: SessionContext | None, role: Role) -> SessionContext:
    """Return *session* if it is live and has *role*.

    Raises
    ------
    AuthorizationError
        No session, an expired session, or a different role.
    """
    if session is None or session.is_expired:
        raise AuthorizationError("Login required")
    if session.role is not role:
        raise AuthorizationError(f"Route requires role {role.value!r}, session has {session.role.value!r}")
    return session
