"""
SkillAssignment model - a user's relationship to one skill.
"""
import uuid
from typing import TYPE_CHECKING, Optional
from sqlalchemy import Boolean, CheckConstraint, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.skill import Skill


class SkillAssignment(BaseModel):
    """
    User skill entity.

    One row per (user, skill). A skill is either being learned or taught by
    the user, never both. The two priority columns carry the same value on
    every row of a user and point at one of that user's own skills.
    """

    __tablename__ = "users_skills"

    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", name="uq_user_skill"),
        CheckConstraint("is_learning <> is_teaching", name="ck_user_skill_single_role"),
    )

    # Foreign Keys
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Role
    is_learning: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_teaching: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Priority pointers
    learn_priority_skill_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("skills.id", ondelete="SET NULL"),
        nullable=True,
    )
    teach_priority_skill_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("skills.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="skill_assignments")
    skill: Mapped["Skill"] = relationship("Skill", foreign_keys=[skill_id])

    def __repr__(self) -> str:
        role = "learning" if self.is_learning else "teaching"
        return f"<SkillAssignment skill_id={self.skill_id} {role} user_id={self.user_id}>"
