"""
Pydantic schemas for API validation and serialization.
"""
from app.schemas.base import (
    BaseSchema,
    MessageResponse,
    ErrorResponse,
)
from app.schemas.auth import (
    RegisterRequest,
    SignInRequest,
    RegisterResponse,
    SignInResponse,
)
from app.schemas.user import UserResponse
from app.schemas.skill import (
    CategorySkills,
    UnselectedSkillsResponse,
    AddSkillRequest,
    SkillMutationResponse,
    PriorityRequest,
    UnprioritizeRequest,
)
from app.schemas.match import (
    MatchRequestsResponse,
    SendMatchRequest,
    UnmatchRequest,
    RemovedResponse,
)
from app.schemas.profile import (
    NO_SKILLS_PLACEHOLDER,
    SocialLinkResponse,
    ProfileView,
    ProfileResponse,
    EditProfileResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "MessageResponse",
    "ErrorResponse",
    # Auth
    "RegisterRequest",
    "SignInRequest",
    "RegisterResponse",
    "SignInResponse",
    # User
    "UserResponse",
    # Skill
    "CategorySkills",
    "UnselectedSkillsResponse",
    "AddSkillRequest",
    "SkillMutationResponse",
    "PriorityRequest",
    "UnprioritizeRequest",
    # Match
    "MatchRequestsResponse",
    "SendMatchRequest",
    "UnmatchRequest",
    "RemovedResponse",
    # Profile
    "NO_SKILLS_PLACEHOLDER",
    "SocialLinkResponse",
    "ProfileView",
    "ProfileResponse",
    "EditProfileResponse",
]
