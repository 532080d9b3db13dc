# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent account for the delivery app.

    Role:
      - "admin"   : creates and assigns orders
      - "partner" : delivers assigned orders, toggles own availability

    Email is stored lower-cased so uniqueness is case-insensitive.
    Only the password hash is persisted, never the plaintext.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        description="Display name",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email (lower-cased)",
    )

    password_hash: str = Field(
        description="Salted one-way password hash",
    )

    # admin | partner (immutable after registration)
    role: str = Field(
        index=True,
        description="Application role: admin | partner",
    )

    phone: str | None = Field(
        default=None,
        description="Optional contact phone",
    )

    # Only meaningful for partners
    is_available: bool = Field(
        default=True,
        index=True,
        description="Whether the partner accepts new assignments",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
