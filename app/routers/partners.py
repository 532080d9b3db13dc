# app/routers/partners.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import Identity, PartnerIdentity, get_current_identity, require_partner
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.user import AvailabilityResponse, AvailabilityUpdate, PartnerListResponse
from app.services.partner_service import PartnerService

router = APIRouter(prefix="/partners", tags=["Partners"])

repo = UserRepository()
service = PartnerService(repo)


@router.get("", response_model=PartnerListResponse)
def list_partners(
    session: Session = Depends(get_session),
    identity: Identity = Depends(get_current_identity),
):
    """
    List all delivery partners (any authenticated user).
    """
    return {"partners": service.list_partners(session, identity)}


@router.get("/available", response_model=PartnerListResponse)
def list_available_partners(
    session: Session = Depends(get_session),
    identity: Identity = Depends(get_current_identity),
):
    """
    List partners currently accepting assignments.
    """
    return {"partners": service.list_available_partners(session, identity)}


@router.put("/availability", response_model=AvailabilityResponse)
def update_availability(
    payload: AvailabilityUpdate,
    session: Session = Depends(get_session),
    identity: PartnerIdentity = Depends(require_partner),
):
    """
    Toggle the calling partner's availability (partner only).
    """
    user = service.set_availability(session, identity, payload)
    return {"message": "Availability updated successfully", "user": user}
