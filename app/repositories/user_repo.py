# app/repositories/user_repo.py
import uuid

from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique (lower-cased) email, or None if not found."""
        stmt = select(User).where(User.email == email.strip().lower())
        return session.exec(stmt).first()

    def get_partner(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return the user only if it exists AND has role='partner'."""
        stmt = select(User).where(User.id == user_id, User.role == "partner")
        return session.exec(stmt).first()

    def get_many(self, session: Session, user_ids: set[uuid.UUID]) -> dict[uuid.UUID, User]:
        """Return {id: User} for the given ids; missing ids are simply absent."""
        if not user_ids:
            return {}
        stmt = select(User).where(User.id.in_(user_ids))
        return {user.id: user for user in session.exec(stmt).all()}

    def list_partners(self, session: Session, only_available: bool = False) -> list[User]:
        """
        List users with role='partner', optionally only available ones.
        """
        stmt = select(User).where(User.role == "partner")
        if only_available:
            stmt = stmt.where(User.is_available == True)  # noqa: E712
        stmt = stmt.order_by(User.name)
        return list(session.exec(stmt).all())

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
