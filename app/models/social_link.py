"""
SocialLink model - one external profile link per platform per user.
"""
import uuid
from typing import TYPE_CHECKING
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.user import User


class SocialLink(BaseModel):
    __tablename__ = "social_links"

    __table_args__ = (
        UniqueConstraint("user_id", "platform", name="uq_social_link_platform"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    platform: Mapped[str] = mapped_column(String(50), nullable=False)  # 'github', 'linkedin', ...
    url: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="social_links")

    def __repr__(self) -> str:
        return f"<SocialLink {self.platform} for user_id={self.user_id}>"
