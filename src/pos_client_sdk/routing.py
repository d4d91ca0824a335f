"""Role gate for the navigational destinations of the POS front end.

Pure functions over a ``SessionState`` snapshot: no I/O, no mutation.  While
the session is still loading no decision is made (``WAIT``) so a restored
session is never bounced to the login screen during the startup profile fetch.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .models import Role
from .session import SessionState

LOGIN_PATH = "/login"
LANDING_PATH = "/dashboard"

_SALES_ROLES = frozenset({Role.ADMIN, Role.KASIR})
_ADMIN_ONLY = frozenset({Role.ADMIN})


class RouteOutcome(str, Enum):
    ALLOW = "allow"
    WAIT = "wait"
    LOGIN = "login"
    LANDING = "landing"


@dataclass(frozen=True)
class Route:
    path: str
    label: str
    required_roles: frozenset[Role] = field(default_factory=frozenset)
    public: bool = False


@dataclass(frozen=True)
class RouteDecision:
    outcome: RouteOutcome
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is RouteOutcome.ALLOW


ROUTES: tuple[Route, ...] = (
    Route(LOGIN_PATH, "Login", public=True),
    Route(LANDING_PATH, "Dashboard"),
    Route("/profile", "Profile"),
    Route("/notifications", "Notifications"),
    Route("/vehicles", "Vehicles"),
    Route("/customers", "Customers"),
    Route("/sales", "Sales", _SALES_ROLES),
    Route("/purchases", "Purchases", _SALES_ROLES),
    Route("/work-orders", "Work Orders"),
    Route("/spare-parts", "Spare Parts"),
    Route("/users", "Users", _ADMIN_ONLY),
    Route("/reports", "Reports"),
)

_ROUTES_BY_PATH = {route.path: route for route in ROUTES}


def _normalize(path: str) -> str:
    cleaned = path.split("?", 1)[0].split("#", 1)[0].strip()
    if not cleaned.startswith("/"):
        cleaned = f"/{cleaned}"
    return cleaned.rstrip("/") or "/"


def find_route(path: str) -> Route | None:
    """Match ``path`` or any sub-path (``/vehicles/12`` -> ``/vehicles``)."""
    normalized = _normalize(path)
    while normalized:
        route = _ROUTES_BY_PATH.get(normalized)
        if route is not None:
            return route
        normalized = normalized.rsplit("/", 1)[0]
    return None


def can_access(session: SessionState, required_roles: Iterable[Role | str] | None = None) -> bool:
    if session.loading or not session.authenticated or session.role is None:
        return False
    roles = {Role.parse(role) for role in required_roles or ()}
    if not roles:
        return True
    return session.role in roles


def authorize(session: SessionState, path: str) -> RouteDecision:
    route = find_route(path)
    if route is not None and route.public:
        return RouteDecision(RouteOutcome.ALLOW)
    if session.loading:
        return RouteDecision(RouteOutcome.WAIT)
    if not session.authenticated:
        return RouteDecision(RouteOutcome.LOGIN, LOGIN_PATH)
    if route is None:
        return RouteDecision(RouteOutcome.LANDING, LANDING_PATH)
    if can_access(session, route.required_roles):
        return RouteDecision(RouteOutcome.ALLOW)
    return RouteDecision(RouteOutcome.LANDING, LANDING_PATH)


def visible_routes(session: SessionState) -> list[Route]:
    """Navigation entries the signed-in user may open."""
    return [route for route in ROUTES if not route.public and can_access(session, route.required_roles)]
