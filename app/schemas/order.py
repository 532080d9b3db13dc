# app/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common import ApiModel

OrderStatus = Literal["pending", "assigned", "picked_up", "delivered", "cancelled"]

# Statuses a caller may request through the status endpoint
DeliveryStatus = Literal["picked_up", "delivered"]


class Location(ApiModel):
    """
    Geographic point in decimal degrees.
    """

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(ge=-90, le=90, strict=True)
    lng: float = Field(ge=-180, le=180, strict=True)


class OrderCreate(ApiModel):
    """
    Payload for creating a delivery order (admin).

    Admin provides:
      - customer name / phone
      - pickup address + location
      - delivery address + location
      - notes (optional)

    Backend derives:
      - order_number
      - status = 'pending'
      - assigned_to = None
    """

    model_config = ConfigDict(extra="forbid")

    customer_name: str
    customer_phone: str
    pickup_address: str
    pickup_location: Location
    delivery_address: str
    delivery_location: Location
    notes: str | None = None

    @field_validator(
        "customer_name", "customer_phone", "pickup_address", "delivery_address"
    )
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("notes")
    @classmethod
    def normalize_notes(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class PartnerSummary(ApiModel):
    """
    Partner details embedded in an order, resolved at read time.
    """

    id: uuid.UUID
    name: str
    email: str
    phone: str | None = None


class OrderRead(ApiModel):
    """
    Order representation for clients.

    `assigned_to` is the raw partner id; `assigned_partner` is the looked-up
    partner, or None when unassigned or the user no longer exists.
    """

    id: uuid.UUID
    order_number: str
    customer_name: str
    customer_phone: str
    pickup_address: str
    pickup_location: Location
    delivery_address: str
    delivery_location: Location
    status: OrderStatus
    assigned_to: uuid.UUID | None = None
    assigned_partner: PartnerSummary | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class OrderAssign(ApiModel):
    """
    Admin payload to bind a partner to an order.
    """

    model_config = ConfigDict(extra="forbid")

    partner_id: uuid.UUID


class OrderStatusUpdate(ApiModel):
    """
    Payload to advance order status (assigned partner or admin).
    """

    model_config = ConfigDict(extra="forbid")

    status: DeliveryStatus


class OrderResponse(ApiModel):
    order: OrderRead


class OrderMessageResponse(ApiModel):
    message: str
    order: OrderRead


class OrderListResponse(ApiModel):
    orders: list[OrderRead]
