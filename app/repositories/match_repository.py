"""
Match repositories - pending match requests and confirmed matches.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.match import Match, MatchRequest
from app.models.user import User
from app.repositories.base import BaseRepository


class MatchRequestRepository(BaseRepository[MatchRequest]):
    def __init__(self):
        super().__init__(MatchRequest)

    async def find_pending(
        self,
        db: AsyncSession,
        sender_id: UUID,
        receiver_id: UUID,
    ) -> Optional[MatchRequest]:
        """The pending request for one ordered pair, if any."""
        result = await db.execute(
            select(MatchRequest).where(
                MatchRequest.sender_id == sender_id,
                MatchRequest.receiver_id == receiver_id,
            )
        )
        return result.scalar_one_or_none()

    async def sent_usernames(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[str]:
        """Distinct usernames the user has sent requests to."""
        result = await db.execute(
            select(User.username)
            .join(MatchRequest, MatchRequest.receiver_id == User.id)
            .where(MatchRequest.sender_id == user_id)
            .distinct()
            .order_by(User.username)
        )
        return list(result.scalars().all())

    async def received_usernames(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[str]:
        """Distinct usernames that have sent requests to the user."""
        result = await db.execute(
            select(User.username)
            .join(MatchRequest, MatchRequest.sender_id == User.id)
            .where(MatchRequest.receiver_id == user_id)
            .distinct()
            .order_by(User.username)
        )
        return list(result.scalars().all())

    async def delete_sent(
        self,
        db: AsyncSession,
        sender_id: UUID,
    ) -> int:
        """Delete every request the user has sent. Returns rows deleted."""
        result = await db.execute(
            delete(MatchRequest).where(MatchRequest.sender_id == sender_id)
        )
        return result.rowcount


class MatchRepository(BaseRepository[Match]):
    def __init__(self):
        super().__init__(Match)

    @staticmethod
    def _pair_clause(a: UUID, b: UUID):
        # Either ordering; create_pair always writes the canonical one
        return or_(
            and_(Match.user_id == a, Match.match_id == b),
            and_(Match.user_id == b, Match.match_id == a),
        )

    async def create_pair(
        self,
        db: AsyncSession,
        a: UUID,
        b: UUID,
    ) -> Match:
        """Record a confirmed match between two users."""
        user_id, match_id = Match.canonical_pair(a, b)
        return await self.create(db, user_id=user_id, match_id=match_id)

    async def exists(
        self,
        db: AsyncSession,
        a: UUID,
        b: UUID,
    ) -> bool:
        result = await db.execute(
            select(Match.id).where(self._pair_clause(a, b)).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def delete_pair(
        self,
        db: AsyncSession,
        a: UUID,
        b: UUID,
    ) -> int:
        """Remove the match in both directions. Returns rows deleted."""
        result = await db.execute(
            delete(Match).where(self._pair_clause(a, b))
        )
        return result.rowcount
