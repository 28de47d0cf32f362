"""
Authentication schemas.
"""
from pydantic import EmailStr, Field, field_validator
from app.schemas.base import BaseSchema
from app.schemas.user import UserResponse


class RegisterRequest(BaseSchema):
    """Registration request body."""

    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)  # bcrypt input limit

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value


class SignInRequest(BaseSchema):
    """
    Sign-in request body.

    Blank fields are accepted here so the service can report every missing
    field at once.
    """

    username: str = ""
    password: str = ""


class RegisterResponse(BaseSchema):
    """Returned after a successful registration."""

    message: str
    access_token: str
    token_type: str = "bearer"
    username: str


class SignInResponse(BaseSchema):
    """Token response after successful authentication."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse
