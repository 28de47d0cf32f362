"""Core module exports."""
from app.core.config import settings, get_settings
from app.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from app.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    decode_token,
    get_token_subject,
)
from app.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    InvalidCredentialsException,
    TokenMissingException,
    InvalidTokenException,
    RegistrationConflictException,
    UsernameTakenException,
    UserNotFoundException,
    SkillNotFoundException,
    NoUnselectedSkillsException,
    SkillNotAssignedException,
    SkillAlreadyAssignedException,
    SkillNotPrioritizableException,
    SelfRequestException,
    MatchRequestExistsException,
    SocialLinkExistsException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "verify_password",
    "hash_password",
    "create_access_token",
    "decode_token",
    "get_token_subject",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "InvalidCredentialsException",
    "TokenMissingException",
    "InvalidTokenException",
    "RegistrationConflictException",
    "UsernameTakenException",
    "UserNotFoundException",
    "SkillNotFoundException",
    "NoUnselectedSkillsException",
    "SkillNotAssignedException",
    "SkillAlreadyAssignedException",
    "SkillNotPrioritizableException",
    "SelfRequestException",
    "MatchRequestExistsException",
    "SocialLinkExistsException",
]
