# app/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Delivery order: a single pickup-to-delivery task.

    Locations are stored as flat lat/lng columns and exposed as
    {lat, lng} objects by the API schemas.

    `assigned_to` is a plain user id (no FK cascade); the partner is
    looked up explicitly when the order is read.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_number: str = Field(
        unique=True,
        index=True,
        description="Human-readable number, ORD-<epoch ms>-<0..999>",
    )

    customer_name: str = Field(description="Customer full name")
    customer_phone: str = Field(description="Customer contact phone")

    pickup_address: str = Field(description="Pickup street address")
    pickup_lat: float
    pickup_lng: float

    delivery_address: str = Field(description="Delivery street address")
    delivery_lat: float
    delivery_lng: float

    # pending | assigned | picked_up | delivered | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    assigned_to: uuid.UUID | None = Field(
        default=None,
        index=True,
        description="Id of the assigned partner (weak reference)",
    )

    notes: str | None = Field(
        default=None,
        description="Optional note / special instructions",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
