"""
User schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID
from app.schemas.base import BaseSchema


class UserResponse(BaseSchema):
    """User record as returned to clients. Never carries the password hash."""

    id: UUID
    username: str
    email: str
    profile_picture: Optional[str] = None  # public URL
    phone_number: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
