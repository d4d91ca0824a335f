from .auth_store import AuthStore, MemoryAuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationError,
    to_user_facing_error,
)
from .http_client import HttpClient
from .models import LoginResult, Paginated, Pagination, Role, UploadResult, UserIdentity
from .models_showroom import Customer, ManagedUser, PurchaseInvoice, SalesInvoice, Vehicle, VehicleStatus
from .models_workshop import Notification, SparePart, WorkOrder, WorkOrderStatus
from .routing import ROUTES, Route, RouteDecision, RouteOutcome, authorize, can_access, find_route, visible_routes
from .session import SessionPhase, SessionState, SessionStore
from .telemetry import TelemetryLogger, build_event

__all__ = [
    "ApiError",
    "AuthError",
    "AuthStore",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "Customer",
    "ForbiddenError",
    "HttpClient",
    "LoginResult",
    "ManagedUser",
    "MemoryAuthStore",
    "NetworkError",
    "NotFoundError",
    "Notification",
    "Paginated",
    "Pagination",
    "PurchaseInvoice",
    "ROUTES",
    "Role",
    "Route",
    "RouteDecision",
    "RouteOutcome",
    "SalesInvoice",
    "ServerError",
    "SessionPhase",
    "SessionState",
    "SessionStore",
    "SparePart",
    "TelemetryLogger",
    "UploadResult",
    "UserIdentity",
    "ValidationError",
    "Vehicle",
    "VehicleStatus",
    "WorkOrder",
    "WorkOrderStatus",
    "authorize",
    "build_event",
    "can_access",
    "find_route",
    "load_config",
    "to_user_facing_error",
    "visible_routes",
]
