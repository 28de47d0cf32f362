"""
Match service - pending match requests and confirmed matches.

Requests are directional; matches are not. Turning a request into a match
is not part of this API; matches are created by MatchRepository.create_pair
from outside the request path.
"""
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.exceptions import (
    MatchRequestExistsException,
    SelfRequestException,
    UserNotFoundException,
)
from app.models.user import User
from app.repositories.match_repository import MatchRepository, MatchRequestRepository
from app.repositories.user_repository import UserRepository
from app.schemas.base import MessageResponse
from app.schemas.match import MatchRequestsResponse, RemovedResponse

logger = get_logger(__name__)


class MatchService:
    """Handles match requests and unmatching."""

    def __init__(self):
        self.user_repo = UserRepository()
        self.request_repo = MatchRequestRepository()
        self.match_repo = MatchRepository()

    async def send_request(
        self,
        db: AsyncSession,
        sender: User,
        receiver_username: str,
    ) -> MessageResponse:
        """
        Send a match request.

        Raises:
            UserNotFoundException: receiver does not exist.
            SelfRequestException: receiver is the sender.
            MatchRequestExistsException: a request to receiver is pending.
        """
        receiver_id = await self._resolve(db, receiver_username)
        if receiver_id == sender.id:
            raise SelfRequestException()

        if await self.request_repo.find_pending(db, sender.id, receiver_id) is not None:
            raise MatchRequestExistsException(receiver_username)

        try:
            await self.request_repo.create(db, sender_id=sender.id, receiver_id=receiver_id)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise MatchRequestExistsException(receiver_username)

        logger.info("match_request_sent", sender_id=str(sender.id), receiver_id=str(receiver_id))
        return MessageResponse(message=f"Match request sent to {receiver_username}")

    async def list_requests(
        self,
        db: AsyncSession,
        user: User,
    ) -> MatchRequestsResponse:
        """Usernames the user has requested, and who has requested the user."""
        return MatchRequestsResponse(
            sent_requests=await self.request_repo.sent_usernames(db, user.id),
            received_requests=await self.request_repo.received_usernames(db, user.id),
        )

    async def cancel_all_sent(
        self,
        db: AsyncSession,
        user: User,
    ) -> RemovedResponse:
        """Withdraw every request the user sent. Received requests stay."""
        removed = await self.request_repo.delete_sent(db, user.id)
        await db.commit()

        logger.info("match_requests_cancelled", user_id=str(user.id), removed=removed)
        return RemovedResponse(message="removed all sent requests", removed=removed)

    async def unmatch(
        self,
        db: AsyncSession,
        user: User,
        other_username: str,
    ) -> RemovedResponse:
        """
        Remove the match between user and other_username in both directions.

        Idempotent: removing an absent match succeeds with removed=0.

        Raises:
            UserNotFoundException: other user does not exist.
        """
        other_id = await self._resolve(db, other_username)

        removed = await self.match_repo.delete_pair(db, user.id, other_id)
        await db.commit()

        logger.info("match_removed", user_id=str(user.id), other_id=str(other_id), removed=removed)
        return RemovedResponse(message="deleted", removed=removed)

    async def _resolve(self, db: AsyncSession, username: str) -> UUID:
        user_id = await self.user_repo.get_id_by_username(db, username)
        if user_id is None:
            raise UserNotFoundException()
        return user_id
