"""
User repository - data access for User entity.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import Row, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.skill import Skill
from app.models.skill_assignment import SkillAssignment
from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Optional[User]:
        """Find a user by username."""
        result = await db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_id_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Optional[UUID]:
        """Resolve a username to its id without loading the row."""
        result = await db.execute(
            select(User.id).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def username_exists(
        self,
        db: AsyncSession,
        username: str,
    ) -> bool:
        """Check if a username is taken."""
        return await self.get_id_by_username(db, username) is not None

    async def email_exists(
        self,
        db: AsyncSession,
        email: str,
    ) -> bool:
        """Check if an email is already registered."""
        result = await db.execute(
            select(User.id).where(User.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def update_fields(
        self,
        db: AsyncSession,
        user_id: UUID,
        changes: Dict[str, Any],
    ) -> int:
        """
        Apply several column changes in one UPDATE statement.

        Keys must be User column names; values are always bound parameters.
        Returns the number of rows updated.
        """
        if not changes:
            return 0

        unknown = set(changes) - set(User.__table__.columns.keys())
        if unknown:
            raise ValueError(f"Unknown user columns: {sorted(unknown)}")

        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(**changes)
        )
        return result.rowcount

    async def get_profile_rows(
        self,
        db: AsyncSession,
        username: str,
    ) -> List[Row]:
        """
        The user joined to each of their skill assignments.

        Outer joins, so a user with no skills still yields one row whose
        skill columns are None. An empty list means the user does not exist.
        """
        result = await db.execute(
            select(
                User,
                Skill.name,
                SkillAssignment.skill_id,
                SkillAssignment.is_learning,
                SkillAssignment.is_teaching,
                SkillAssignment.learn_priority_skill_id,
                SkillAssignment.teach_priority_skill_id,
            )
            .outerjoin(SkillAssignment, SkillAssignment.user_id == User.id)
            .outerjoin(Skill, Skill.id == SkillAssignment.skill_id)
            .where(User.username == username)
            .order_by(Skill.name)
        )
        return list(result.all())
