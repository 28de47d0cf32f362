"""
API dependencies for dependency injection.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_token_subject
from app.core.exceptions import (
    ForbiddenException,
    InvalidTokenException,
    TokenMissingException,
)
from app.models.user import User
from app.repositories.user_repository import UserRepository


# Security scheme
security = HTTPBearer(auto_error=False)

user_repo = UserRepository()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    Raises:
        TokenMissingException: no bearer token (401)
        InvalidTokenException: bad signature, expired, or unknown subject (403)
    """
    if not credentials:
        raise TokenMissingException()

    username = get_token_subject(credentials.credentials)
    if not username:
        raise InvalidTokenException()

    user = await user_repo.get_by_username(db, username)
    if not user:
        raise InvalidTokenException()

    # Read by the rate limiter key function
    request.state.current_user = user
    return user


def ensure_acting_user(current_user: User, claimed_username: Optional[str]) -> None:
    """
    Reject requests that name a different user than the token.

    Older clients still send the acting username in the body or query.
    It is accepted when it matches and otherwise refused; the token is the
    only source of identity.
    """
    if claimed_username and claimed_username != current_user.username:
        raise ForbiddenException(
            "You can only act on your own account",
            code="ACTING_USER_MISMATCH",
        )
