"""
Match routes - match requests and unmatching.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_current_user, ensure_acting_user
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.match import (
    MatchRequestsResponse,
    RemovedResponse,
    SendMatchRequest,
    UnmatchRequest,
)
from app.services.match_service import MatchService

router = APIRouter(tags=["matches"])

match_service = MatchService()


@router.get("/fetch-requests", response_model=MatchRequestsResponse)
async def fetch_requests(
    user: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Usernames the current user has sent requests to and received them from."""
    ensure_acting_user(current_user, user)
    return await match_service.list_requests(db, current_user)


@router.post(
    "/send-match-request",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_match_request(
    payload: SendMatchRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Send a match request to another user."""
    ensure_acting_user(current_user, payload.user)
    return await match_service.send_request(db, current_user, payload.selected_user)


@router.delete("/remove-all-match-requests", response_model=RemovedResponse)
async def remove_all_match_requests(
    username: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw every match request the current user has sent."""
    ensure_acting_user(current_user, username)
    return await match_service.cancel_all_sent(db, current_user)


@router.post("/unmatch", response_model=RemovedResponse)
async def unmatch(
    payload: UnmatchRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove the match between the current user and selectedUser."""
    ensure_acting_user(current_user, payload.user)
    return await match_service.unmatch(db, current_user, payload.selected_user)
