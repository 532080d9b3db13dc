# app/services/partner_service.py
import logging
from datetime import datetime, timezone

from sqlmodel import Session

from app.core.auth import Identity, PartnerIdentity
from app.core.errors import NotFoundError
from app.repositories.user_repo import UserRepository
from app.schemas.user import AvailabilityUpdate, UserRead

logger = logging.getLogger(__name__)


class PartnerService:
    """
    Partner directory.

    - Any authenticated caller may list partners.
    - A partner may only toggle their own availability.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def list_partners(self, session: Session, identity: Identity) -> list[UserRead]:
        """All users with role='partner'."""
        partners = self.repo.list_partners(session)
        return [UserRead.model_validate(p) for p in partners]

    def list_available_partners(
        self,
        session: Session,
        identity: Identity,
    ) -> list[UserRead]:
        """Partners with is_available=True (the assignable pool)."""
        partners = self.repo.list_partners(session, only_available=True)
        return [UserRead.model_validate(p) for p in partners]

    def set_availability(
        self,
        session: Session,
        identity: PartnerIdentity,
        payload: AvailabilityUpdate,
    ) -> UserRead:
        """
        Update the calling partner's own availability flag.

        Raises:
            NotFoundError(404): if the caller's account no longer exists.
        """
        user = self.repo.get_by_id(session, identity.id)
        if not user:
            raise NotFoundError("User not found")

        user.is_available = payload.is_available
        user.updated_at = datetime.now(timezone.utc)
        user = self.repo.update(session, user)

        logger.info("Partner %s availability set to %s", user.id, user.is_available)
        return UserRead.model_validate(user)
