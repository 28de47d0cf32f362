"""
Match request and match schemas.
"""
from typing import List, Optional
from pydantic import Field
from app.schemas.base import BaseSchema


class MatchRequestsResponse(BaseSchema):
    """Usernames on either side of the caller's pending requests."""

    sent_requests: List[str]
    received_requests: List[str]


class SendMatchRequest(BaseSchema):
    selected_user: str = Field(..., min_length=1)
    user: Optional[str] = None


class UnmatchRequest(BaseSchema):
    selected_user: str = Field(..., min_length=1)
    user: Optional[str] = None


class RemovedResponse(BaseSchema):
    """Bulk or pairwise delete result."""

    message: str
    removed: int
