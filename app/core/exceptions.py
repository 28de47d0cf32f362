"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any, Dict


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.

    field_errors, when set, is rendered as ``newErrors`` so clients can show
    one message per form field.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        self.field_errors = field_errors
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(400, code, message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(401, code, message, field_errors=field_errors)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ConflictException(APIException):
    """409 Conflict"""

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str = "CONFLICT",
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(409, code, message, field_errors=field_errors)


# Authentication specific exceptions
class InvalidCredentialsException(UnauthorizedException):
    """Unknown username and/or wrong password, reported per field."""

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__(
            message="Invalid username or password",
            code="INVALID_CREDENTIALS",
            field_errors=field_errors,
        )


class TokenMissingException(UnauthorizedException):
    """No bearer token supplied"""

    def __init__(self):
        super().__init__(
            message="Authentication required",
            code="TOKEN_MISSING",
        )


class InvalidTokenException(ForbiddenException):
    """Token is invalid, expired, or names a user that no longer exists"""

    def __init__(self):
        super().__init__(
            message="Invalid token data",
            code="INVALID_TOKEN",
        )


class RegistrationConflictException(ConflictException):
    """Username and/or email already registered"""

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__(
            message="Account already exists",
            code="ACCOUNT_EXISTS",
            field_errors=field_errors,
        )


class UsernameTakenException(ConflictException):
    """Requested new username is in use"""

    def __init__(self, username: str):
        super().__init__(
            message=f"Username of: {username} already exists",
            code="USERNAME_TAKEN",
        )


# Resource specific exceptions
class UserNotFoundException(NotFoundException):
    """User not found"""

    def __init__(self):
        super().__init__(message="User not found", code="USER_NOT_FOUND")


class SkillNotFoundException(NotFoundException):
    """Skill name not in the catalog"""

    def __init__(self, skill_name: str):
        super().__init__(message=f"Skill '{skill_name}' does not exist", code="SKILL_NOT_FOUND")


class NoUnselectedSkillsException(NotFoundException):
    """Every catalog skill is already assigned to the user"""

    def __init__(self):
        super().__init__(message="No data", code="NO_DATA")


class SkillNotAssignedException(NotFoundException):
    """Removal matched no assignment row"""

    def __init__(self, skill_name: str):
        super().__init__(
            message=f"'{skill_name}' is not in your list",
            code="SKILL_NOT_ASSIGNED",
        )


class SkillAlreadyAssignedException(ConflictException):
    """Insert would duplicate an existing (user, skill) row"""

    def __init__(self, skill_name: str):
        super().__init__(
            message=f"'{skill_name}' is already in your list",
            code="SKILL_ALREADY_ASSIGNED",
        )


class SkillNotPrioritizableException(ConflictException):
    """Priority pointer would reference a skill outside the user's set"""

    def __init__(self, skill_name: str, to_learn: bool):
        role = "learn" if to_learn else "teach"
        super().__init__(
            message=f"'{skill_name}' is not in your list of skills to {role}",
            code="SKILL_NOT_PRIORITIZABLE",
        )


class SelfRequestException(BadRequestException):
    """Sender and receiver are the same user"""

    def __init__(self):
        super().__init__(
            message="You cannot send a match request to yourself",
            code="SELF_REQUEST",
        )


class MatchRequestExistsException(ConflictException):
    """A pending request already exists for this ordered pair"""

    def __init__(self, username: str):
        super().__init__(
            message=f"A match request to {username} is already pending",
            code="MATCH_REQUEST_EXISTS",
        )


class SocialLinkExistsException(ConflictException):
    """A concurrent edit stored a link for the same platform first"""

    def __init__(self, platform: str):
        super().__init__(
            message=f"A {platform} link was saved by another request, try again",
            code="PLATFORM_EXISTS",
        )
