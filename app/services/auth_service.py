"""
Authentication service - handles registration, sign-in, and token issuing.
"""
from typing import Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import verify_password, hash_password, create_access_token
from app.core.exceptions import (
    InvalidCredentialsException,
    RegistrationConflictException,
)
from app.repositories.user_repository import UserRepository
from app.schemas.auth import RegisterResponse, SignInResponse
from app.services.profile_service import user_to_response

logger = get_logger(__name__)


class AuthService:
    """Handles all authentication business logic."""

    def __init__(self):
        self.user_repo = UserRepository()

    async def register(
        self,
        db: AsyncSession,
        *,
        username: str,
        email: str,
        password: str,
    ) -> RegisterResponse:
        """
        Register a new user and return an access token.

        The lookup below only produces friendly per-field messages. The
        UNIQUE constraints on users.username / users.email decide: a
        concurrent registration that slips past the lookup fails at insert
        and is reported the same way.

        Raises:
            RegistrationConflictException: username and/or email taken.
        """
        conflicts = await self._find_conflicts(db, username, email)
        if conflicts:
            raise RegistrationConflictException(conflicts)

        try:
            user = await self.user_repo.create(
                db,
                username=username,
                email=email,
                password_hash=hash_password(password),
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            conflicts = await self._find_conflicts(db, username, email)
            if not conflicts:
                raise
            logger.info("registration_conflict_at_insert", fields=sorted(conflicts))
            raise RegistrationConflictException(conflicts)

        logger.info("user_registered", user_id=str(user.id))

        return RegisterResponse(
            message=f"Welcome to Skill Swap {user.username}",
            access_token=create_access_token(user.username),
            username=user.username,
        )

    async def sign_in(
        self,
        db: AsyncSession,
        *,
        username: str,
        password: str,
    ) -> SignInResponse:
        """
        Authenticate a user and return a token plus their record.

        Raises:
            InvalidCredentialsException: with one message per offending field.
        """
        username = username.strip()

        missing: Dict[str, str] = {}
        if not username:
            missing["username"] = "Username is required"
        if not password:
            missing["password"] = "Password is required"
        if missing:
            raise InvalidCredentialsException(missing)

        user = await self.user_repo.get_by_username(db, username)
        if user is None:
            raise InvalidCredentialsException({"username": "Incorrect username"})

        if not verify_password(password, user.password_hash):
            logger.info("sign_in_failed", user_id=str(user.id))
            raise InvalidCredentialsException({"password": "Incorrect password"})

        return SignInResponse(
            access_token=create_access_token(user.username),
            expires_in=settings.access_token_expire_seconds,
            user=user_to_response(user),
        )

    async def _find_conflicts(
        self,
        db: AsyncSession,
        username: str,
        email: str,
    ) -> Dict[str, str]:
        conflicts: Dict[str, str] = {}
        if await self.user_repo.username_exists(db, username):
            conflicts["username"] = "Username already exists"
        if await self.user_repo.email_exists(db, email):
            conflicts["email"] = "Email already exists"
        return conflicts
