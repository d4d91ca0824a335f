from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from .models import UserIdentity, WireModel


class ResourceModel(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class VehicleStatus(str, Enum):
    AVAILABLE = "available"
    SOLD = "sold"
    IN_WORKSHOP = "in_workshop"
    RESERVED = "reserved"


class Customer(ResourceModel):
    id: int
    name: str
    customer_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Vehicle(ResourceModel):
    id: int
    brand: str
    model: str
    year: Optional[int] = None
    vehicle_code: Optional[str] = None
    plate_number: Optional[str] = None
    color: Optional[str] = None
    status: Optional[str] = None
    purchase_price: Optional[float] = None
    selling_price: Optional[float] = None
    primary_photo: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SalesInvoice(ResourceModel):
    id: int
    invoice_number: Optional[str] = None
    customer_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    selling_price: Optional[float] = None
    final_price: Optional[float] = None
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    transfer_proof: Optional[str] = None
    notes: Optional[str] = None
    customer: Optional[Customer] = None
    vehicle: Optional[Vehicle] = None
    created_at: Optional[str] = None


class PurchaseInvoice(ResourceModel):
    id: int
    invoice_number: Optional[str] = None
    transaction_type: Optional[str] = None
    customer_id: Optional[int] = None
    supplier_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    purchase_price: Optional[float] = None
    final_price: Optional[float] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None


class ManagedUser(UserIdentity):
    """A user row as returned by the admin user-management endpoints."""

    phone: Optional[str] = None
