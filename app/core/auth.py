# app/core/auth.py
import uuid
from dataclasses import dataclass
from typing import Literal, Union

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.errors import AuthError, ForbiddenError
from app.core.security import decode_access_token

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise the
#   framework's 403, so we can answer with our own 401 envelope.
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AdminIdentity:
    """Authenticated caller with role='admin'."""

    id: uuid.UUID
    email: str
    role: Literal["admin"] = "admin"


@dataclass(frozen=True)
class PartnerIdentity:
    """Authenticated caller with role='partner'."""

    id: uuid.UUID
    email: str
    role: Literal["partner"] = "partner"


# Closed set of caller identities passed explicitly to the services.
Identity = Union[AdminIdentity, PartnerIdentity]


def identity_from_claims(claims: dict) -> Identity:
    """
    Build the caller identity from decoded token claims.

    Raises:
        AuthError(401): if id/email/role are missing or role is unknown.
    """
    raw_id = claims.get("id")
    email = claims.get("email")
    role = claims.get("role")

    if not raw_id or not email or not role:
        raise AuthError("Token missing id/email/role")

    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError:
        raise AuthError("Invalid id in token")

    if role == "admin":
        return AdminIdentity(id=user_id, email=email)
    if role == "partner":
        return PartnerIdentity(id=user_id, email=email)

    raise AuthError("Invalid role in token")


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header.

    Flow:
      1. No header => 401.
      2. Decode + verify JWT (signature, exp).
      3. Map claims to AdminIdentity / PartnerIdentity.

    The store is not consulted here; services look up records they need.
    """
    if credentials is None:
        raise AuthError("Authentication required")

    claims = decode_access_token(credentials.credentials)
    return identity_from_claims(claims)


def require_admin(identity: Identity = Depends(get_current_identity)) -> AdminIdentity:
    """
    Enforce admin role.

    Raises:
        ForbiddenError(403): if the caller is a partner.
    """
    if not isinstance(identity, AdminIdentity):
        raise ForbiddenError("Admin access required")
    return identity


def require_partner(
    identity: Identity = Depends(get_current_identity),
) -> PartnerIdentity:
    """
    Enforce partner role.

    Use this for:
      - availability toggle
    Admins will be rejected with 403.
    """
    if not isinstance(identity, PartnerIdentity):
        raise ForbiddenError("Partner access required")
    return identity
