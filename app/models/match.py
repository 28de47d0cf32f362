"""
Match models - pending requests and confirmed matches between users.
"""
import uuid
from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class MatchRequest(BaseModel):
    """
    Directional, pending request from sender to receiver.

    At most one per ordered pair; A→B and B→A may coexist.
    """

    __tablename__ = "match_requests"

    __table_args__ = (
        UniqueConstraint("sender_id", "receiver_id", name="uq_match_request_pair"),
        CheckConstraint("sender_id <> receiver_id", name="ck_match_request_not_self"),
    )

    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<MatchRequest {self.sender_id} -> {self.receiver_id}>"


class Match(BaseModel):
    """
    Confirmed, undirected match.

    Stored once per unordered pair with user_id < match_id, so one row
    represents both directions.
    """

    __tablename__ = "matches"

    __table_args__ = (
        UniqueConstraint("user_id", "match_id", name="uq_match_pair"),
        CheckConstraint("user_id < match_id", name="ck_match_canonical_order"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    match_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    @staticmethod
    def canonical_pair(a: uuid.UUID, b: uuid.UUID) -> tuple[uuid.UUID, uuid.UUID]:
        """Order a pair the way it is stored."""
        return (a, b) if a < b else (b, a)

    def __repr__(self) -> str:
        return f"<Match {self.user_id} <-> {self.match_id}>"
