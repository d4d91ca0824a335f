from .auth import AuthClient
from .base import BaseClient
from .customers import CustomersClient
from .dashboard import DashboardClient
from .files import FilesClient
from .health import HealthClient
from .notifications import NotificationsClient
from .purchases import PurchasesClient
from .reports import ReportsClient
from .sales import SalesClient
from .spare_parts import SparePartsClient
from .users import UsersClient
from .vehicles import VehiclesClient
from .work_orders import WorkOrdersClient

__all__ = [
    "AuthClient",
    "BaseClient",
    "CustomersClient",
    "DashboardClient",
    "FilesClient",
    "HealthClient",
    "NotificationsClient",
    "PurchasesClient",
    "ReportsClient",
    "SalesClient",
    "SparePartsClient",
    "UsersClient",
    "VehiclesClient",
    "WorkOrdersClient",
]
