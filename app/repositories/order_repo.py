# app/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from app.models.order import Order


class OrderRepository:
    """
    Data access layer for orders.

    NOTE:
      - Each write is a single commit; there is no locking or versioning,
        so concurrent writers on the same order are last-write-wins.
    """

    def list_all(self, session: Session) -> list[Order]:
        stmt = select(Order).order_by(Order.created_at.desc())
        return list(session.exec(stmt).all())

    def list_for_partner(
        self,
        session: Session,
        partner_id: uuid.UUID,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.assigned_to == partner_id)
            .order_by(Order.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def create(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def update(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def delete(self, session: Session, order: Order) -> None:
        session.delete(order)
        session.commit()
