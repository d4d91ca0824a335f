from __future__ import annotations

from enum import Enum
from typing import Optional

from .models_showroom import ResourceModel, Vehicle


class WorkOrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkOrder(ResourceModel):
    id: int
    wo_number: Optional[str] = None
    vehicle_id: Optional[int] = None
    description: Optional[str] = None
    assigned_mechanic_id: Optional[int] = None
    status: Optional[str] = None
    progress_percentage: Optional[int] = None
    labor_cost: Optional[float] = None
    total_cost: Optional[float] = None
    notes: Optional[str] = None
    vehicle: Optional[Vehicle] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    created_at: Optional[str] = None


class SparePart(ResourceModel):
    id: int
    name: str
    part_code: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    cost_price: Optional[float] = None
    selling_price: Optional[float] = None
    stock_quantity: Optional[int] = None
    min_stock_level: Optional[int] = None
    unit: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        if self.stock_quantity is None or self.min_stock_level is None:
            return False
        return self.stock_quantity <= self.min_stock_level


class Notification(ResourceModel):
    id: int
    title: Optional[str] = None
    message: Optional[str] = None
    type: Optional[str] = None
    is_read: bool = False
    created_at: Optional[str] = None
