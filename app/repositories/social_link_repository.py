"""
Social link repository - data access for SocialLink entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.social_link import SocialLink
from app.repositories.base import BaseRepository


class SocialLinkRepository(BaseRepository[SocialLink]):
    def __init__(self):
        super().__init__(SocialLink)

    async def get_for_platform(
        self,
        db: AsyncSession,
        user_id: UUID,
        platform: str,
    ) -> Optional[SocialLink]:
        result = await db.execute(
            select(SocialLink).where(
                SocialLink.user_id == user_id,
                SocialLink.platform == platform,
            )
        )
        return result.scalar_one_or_none()

    async def platform_exists(
        self,
        db: AsyncSession,
        user_id: UUID,
        platform: str,
    ) -> bool:
        result = await db.execute(
            select(SocialLink.id).where(
                SocialLink.user_id == user_id,
                SocialLink.platform == platform,
            )
        )
        return result.scalar_one_or_none() is not None

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[SocialLink]:
        """All links for a user, ordered by platform."""
        result = await db.execute(
            select(SocialLink)
            .where(SocialLink.user_id == user_id)
            .order_by(SocialLink.platform)
        )
        return list(result.scalars().all())

    async def upsert(
        self,
        db: AsyncSession,
        user_id: UUID,
        platform: str,
        url: str,
    ) -> SocialLink:
        """Update the platform's link if one exists, insert it otherwise."""
        link = await self.get_for_platform(db, user_id, platform)
        if link is None:
            return await self.create(db, user_id=user_id, platform=platform, url=url)

        link.url = url
        await db.flush()
        return link
