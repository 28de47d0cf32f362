"""
Profile schemas.
"""
from datetime import datetime
from typing import List, Optional
from app.schemas.base import BaseSchema


# Clients render this sentence verbatim instead of an empty list
NO_SKILLS_PLACEHOLDER = "No skills to display"


class SocialLinkResponse(BaseSchema):
    platform: str
    url: str


class ProfileView(BaseSchema):
    """Aggregated public profile: user record, skills, and social links."""

    username: str
    email: str
    profile_picture: Optional[str] = None  # public URL
    phone_number: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    skills_to_learn: List[str]
    skills_to_teach: List[str]
    priority_skill_to_learn: Optional[str] = None
    priority_skill_to_teach: Optional[str] = None
    socials: List[SocialLinkResponse]


class ProfileResponse(BaseSchema):
    profile_data: ProfileView


class EditProfileResponse(BaseSchema):
    """
    Result of a profile edit.

    access_token is only present when the username changed, because tokens
    are issued for a username.
    """

    img: Optional[str] = None
    new_socials: List[SocialLinkResponse]
    new_username: str
    access_token: Optional[str] = None
