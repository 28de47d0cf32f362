"""
Base repository shared by the entity repositories.

Repositories only flush; the calling service owns the transaction and
commits or rolls back.
"""
from typing import Any, Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Usage:
        class SocialLinkRepository(BaseRepository[SocialLink]):
            def __init__(self):
                super().__init__(SocialLink)
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def create(
        self,
        db: AsyncSession,
        **kwargs: Any,
    ) -> ModelType:
        """Create a new record. Constraint violations surface as IntegrityError."""
        instance = self.model(**kwargs)
        db.add(instance)
        await db.flush()
        await db.refresh(instance)
        return instance
