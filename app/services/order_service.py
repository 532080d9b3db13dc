# app/services/order_service.py
import logging
import random
import time
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from app.core.auth import Identity, PartnerIdentity
from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.order import Order
from app.models.user import User
from app.repositories.order_repo import OrderRepository
from app.repositories.user_repo import UserRepository
from app.schemas.order import (
    Location,
    OrderAssign,
    OrderCreate,
    OrderRead,
    OrderStatusUpdate,
    PartnerSummary,
)

logger = logging.getLogger(__name__)

# Forward-only delivery progress. "cancelled" has no producing transition.
STATUS_TRANSITIONS: dict[str, set[str]] = {
    "pending": set(),
    "assigned": {"picked_up"},
    "picked_up": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


def generate_order_number() -> str:
    """
    ORD-<epoch millis>-<0..999>.

    Not collision-proof; the unique index on orders.order_number is the
    last line of defence.
    """
    return f"ORD-{int(time.time() * 1000)}-{random.randint(0, 999)}"


class OrderService:
    """
    Business logic for the order lifecycle.

    Responsibilities:
      - Create orders (status='pending')
      - Assign orders to partners (status='assigned')
      - Advance status: assigned -> picked_up -> delivered
      - Scope visibility: admins see everything, partners only their orders
    """

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository):
        self.order_repo = order_repo
        self.user_repo = user_repo

    # -------- Admin operations --------

    def create_order(self, session: Session, payload: OrderCreate) -> OrderRead:
        order = Order(
            order_number=generate_order_number(),
            customer_name=payload.customer_name,
            customer_phone=payload.customer_phone,
            pickup_address=payload.pickup_address,
            pickup_lat=payload.pickup_location.lat,
            pickup_lng=payload.pickup_location.lng,
            delivery_address=payload.delivery_address,
            delivery_lat=payload.delivery_location.lat,
            delivery_lng=payload.delivery_location.lng,
            notes=payload.notes,
            status="pending",
        )
        order = self.order_repo.create(session, order)
        logger.info("Created order %s (%s)", order.order_number, order.id)
        return self._build_order_dto(order, None)

    def assign_order(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderAssign,
    ) -> OrderRead:
        """
        Bind a partner to an order and set status='assigned' in one commit.

        Calling this again on an assigned order re-assigns it (overwrites
        the partner and resets status to 'assigned').

        Raises:
            NotFoundError(404): if the partner or the order does not exist.
        """
        partner = self.user_repo.get_partner(session, payload.partner_id)
        if not partner:
            raise NotFoundError("Partner not found")

        order = self._get_order_or_404(session, order_id)

        if order.assigned_to is not None:
            logger.warning(
                "Re-assigning order %s from %s to %s (status was %s)",
                order.id,
                order.assigned_to,
                partner.id,
                order.status,
            )

        order.assigned_to = partner.id
        order.status = "assigned"
        order.updated_at = datetime.now(timezone.utc)
        order = self.order_repo.update(session, order)

        logger.info("Assigned order %s to partner %s", order.id, partner.id)
        return self._build_order_dto(order, partner)

    def delete_order(self, session: Session, order_id: uuid.UUID) -> None:
        """Hard delete (admin only)."""
        order = self._get_order_or_404(session, order_id)
        self.order_repo.delete(session, order)
        logger.info("Deleted order %s", order_id)

    # -------- Shared operations (scoped by role) --------

    def list_orders(self, session: Session, identity: Identity) -> list[OrderRead]:
        """
        Newest first. Partners only see orders assigned to them.
        """
        if isinstance(identity, PartnerIdentity):
            orders = self.order_repo.list_for_partner(session, identity.id)
        else:
            orders = self.order_repo.list_all(session)

        partner_ids = {o.assigned_to for o in orders if o.assigned_to is not None}
        partners = self.user_repo.get_many(session, partner_ids)

        return [
            self._build_order_dto(o, partners.get(o.assigned_to) if o.assigned_to else None)
            for o in orders
        ]

    def get_order(
        self,
        session: Session,
        identity: Identity,
        order_id: uuid.UUID,
    ) -> OrderRead:
        order = self._get_order_or_404(session, order_id)
        self._ensure_can_access(identity, order)
        return self._build_order_dto(order, self._lookup_partner(session, order))

    def update_status(
        self,
        session: Session,
        identity: Identity,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> OrderRead:
        """
        Advance delivery status.

          assigned  -> picked_up
          picked_up -> delivered

        Same status => no-op. Any other transition raises 400.
        Only an admin or the assigned partner may call this.
        """
        order = self._get_order_or_404(session, order_id)
        self._ensure_can_access(identity, order)

        current = order.status
        new = payload.status

        if current != new:
            if new not in STATUS_TRANSITIONS.get(current, set()):
                raise ValidationError(f"Invalid status transition: {current} -> {new}")

            order.status = new
            order.updated_at = datetime.now(timezone.utc)
            order = self.order_repo.update(session, order)
            logger.info(
                "Order %s status %s -> %s by %s %s",
                order.id,
                current,
                new,
                identity.role,
                identity.id,
            )

        return self._build_order_dto(order, self._lookup_partner(session, order))

    # -------- Helpers --------

    def _get_order_or_404(self, session: Session, order_id: uuid.UUID) -> Order:
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def _ensure_can_access(identity: Identity, order: Order) -> None:
        """Partners may only touch orders assigned to them."""
        if isinstance(identity, PartnerIdentity) and order.assigned_to != identity.id:
            raise ForbiddenError("Access denied")

    def _lookup_partner(self, session: Session, order: Order) -> User | None:
        if order.assigned_to is None:
            return None
        return self.user_repo.get_by_id(session, order.assigned_to)

    @staticmethod
    def _build_order_dto(order: Order, partner: User | None) -> OrderRead:
        """
        Compose OrderRead from the ORM row and the looked-up partner.
        """
        partner_dto = None
        if partner is not None:
            partner_dto = PartnerSummary(
                id=partner.id,
                name=partner.name,
                email=partner.email,
                phone=partner.phone,
            )

        return OrderRead(
            id=order.id,
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            pickup_address=order.pickup_address,
            pickup_location=Location(lat=order.pickup_lat, lng=order.pickup_lng),
            delivery_address=order.delivery_address,
            delivery_location=Location(lat=order.delivery_lat, lng=order.delivery_lng),
            status=order.status,
            assigned_to=order.assigned_to,
            assigned_partner=partner_dto,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
