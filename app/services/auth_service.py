# app/services/auth_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.errors import AuthError, ConflictError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    LoginResponse,
    RegisterResponse,
    UserLogin,
    UserPublic,
    UserRegister,
    UserSession,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - keep emails unique (case-insensitive)
      - hash passwords before storing them
      - issue signed bearer tokens
      - never reveal whether an email exists on failed login
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(self, session: Session, payload: UserRegister) -> RegisterResponse:
        """
        Create an account and return a token for it.

        Raises:
            ConflictError(400): if the email is already registered.
        """
        if self.repo.get_by_email(session, payload.email):
            raise ConflictError("User already exists with this email")

        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=payload.role,
            phone=payload.phone,
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # Lost a race against a concurrent registration with the same email
            session.rollback()
            raise ConflictError("User already exists with this email")

        logger.info("Registered %s user %s", user.role, user.id)

        return RegisterResponse(
            message="User registered successfully",
            token=create_access_token(user.id, user.email, user.role),
            user=UserPublic.model_validate(user),
        )

    def login(self, session: Session, payload: UserLogin) -> LoginResponse:
        """
        Verify credentials and return a fresh token.

        Unknown email and wrong password raise the same AuthError.
        """
        user = self.repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        return LoginResponse(
            message="Login successful",
            token=create_access_token(user.id, user.email, user.role),
            user=UserSession.model_validate(user),
        )
