"""
User model - represents an application user.
"""
from typing import TYPE_CHECKING, Optional, List
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.skill_assignment import SkillAssignment
    from app.models.social_link import SocialLink


class User(BaseModel):
    """
    User entity.

    Stores credentials and the public profile. Username and email are
    unique at the storage layer; registration relies on those constraints.
    """

    __tablename__ = "users"

    # Authentication
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    profile_picture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # object store key
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    skill_assignments: Mapped[List["SkillAssignment"]] = relationship(
        "SkillAssignment",
        back_populates="user",
        cascade="all, delete-orphan",
        foreign_keys="SkillAssignment.user_id",
    )
    social_links: Mapped[List["SocialLink"]] = relationship(
        "SocialLink",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
