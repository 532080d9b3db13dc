# app/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import Identity, get_current_identity, require_admin
from app.database import get_session
from app.repositories.order_repo import OrderRepository
from app.repositories.user_repo import UserRepository
from app.schemas.common import MessageResponse
from app.schemas.order import (
    OrderAssign,
    OrderCreate,
    OrderListResponse,
    OrderMessageResponse,
    OrderResponse,
    OrderStatusUpdate,
)
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
user_repo = UserRepository()
service = OrderService(order_repo, user_repo)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=OrderMessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
):
    """
    Create a delivery order (admin only). Starts as 'pending'.
    """
    order = service.create_order(session, payload)
    return {"message": "Order created successfully", "order": order}


@router.put(
    "/{order_id}/assign",
    response_model=OrderMessageResponse,
    dependencies=[Depends(require_admin)],
)
def assign_order(
    order_id: uuid.UUID,
    payload: OrderAssign,
    session: Session = Depends(get_session),
):
    """
    Assign an order to a partner (admin only).
    """
    order = service.assign_order(session, order_id, payload)
    return {"message": "Order assigned successfully", "order": order}


@router.delete(
    "/{order_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Permanently delete an order (admin only).
    """
    service.delete_order(session, order_id)
    return {"message": "Order deleted successfully"}


# -------- Shared endpoints --------


@router.get("", response_model=OrderListResponse)
def list_orders(
    session: Session = Depends(get_session),
    identity: Identity = Depends(get_current_identity),
):
    """
    List orders, newest first.

      admin   -> all orders

      partner -> only orders assigned to the caller
    """
    return {"orders": service.list_orders(session, identity)}


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    identity: Identity = Depends(get_current_identity),
):
    """
    Get a single order. Partners get 403 for orders not assigned to them.
    """
    return {"order": service.get_order(session, identity, order_id)}


@router.put("/{order_id}/status", response_model=OrderMessageResponse)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
    identity: Identity = Depends(get_current_identity),
):
    """
    Advance order status (admin or the assigned partner).

      assigned  -> picked_up

      picked_up -> delivered
    """
    order = service.update_status(session, identity, order_id, payload)
    return {"message": "Order status updated successfully", "order": order}
