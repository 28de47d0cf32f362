"""
Authentication routes.

Thin controllers - all business logic lives in AuthService.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_AUTH
from app.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    SignInRequest,
    SignInResponse,
)
from app.schemas.base import ErrorResponse
from app.services.auth_service import AuthService

router = APIRouter(tags=["auth"])

auth_service = AuthService()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
@limiter.limit(RATE_AUTH)
async def register(
    request: Request,
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user.

    Returns an access token on success; 409 with per-field messages when the
    username and/or email is taken.
    """
    return await auth_service.register(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )


@router.post(
    "/signin",
    response_model=SignInResponse,
    responses={401: {"model": ErrorResponse}},
)
@limiter.limit(RATE_AUTH)
async def sign_in(
    request: Request,
    payload: SignInRequest,
    db: AsyncSession = Depends(get_db),
):
    """Sign in with username and password."""
    return await auth_service.sign_in(
        db,
        username=payload.username,
        password=payload.password,
    )


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out():
    """
    Sign out.

    Tokens are stateless, so the client discards its token; nothing is
    revoked server-side.
    """
    return Response(status_code=status.HTTP_204_NO_CONTENT)
