"""
Skill service - catalog browsing and the per-user skill ledger.

A user holds each skill at most once, either to learn or to teach. The
priority pointers (one for learning, one for teaching) are stored on every
assignment row of the user and must name one of the user's own skills in
the matching role.
"""
from itertools import groupby
from operator import itemgetter
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.exceptions import (
    NoUnselectedSkillsException,
    SkillAlreadyAssignedException,
    SkillNotAssignedException,
    SkillNotFoundException,
    SkillNotPrioritizableException,
)
from app.models.skill import Skill
from app.models.user import User
from app.repositories.skill_repository import SkillRepository, SkillAssignmentRepository
from app.schemas.base import MessageResponse
from app.schemas.skill import (
    CategorySkills,
    SkillMutationResponse,
    UnselectedSkillsResponse,
)

logger = get_logger(__name__)


class SkillService:
    """Handles the skill catalog and skill assignments."""

    def __init__(self):
        self.skill_repo = SkillRepository()
        self.assignment_repo = SkillAssignmentRepository()

    async def unselected_skills(
        self,
        db: AsyncSession,
        user: User,
    ) -> UnselectedSkillsResponse:
        """
        Catalog skills the user has not picked, grouped by category.

        Raises:
            NoUnselectedSkillsException: nothing left to pick in any category.
        """
        pairs = await self.skill_repo.find_unselected(db, user.id)
        if not pairs:
            raise NoUnselectedSkillsException()

        return UnselectedSkillsResponse(
            data=[
                CategorySkills(category=category, skills=[name for _, name in rows])
                for category, rows in groupby(pairs, key=itemgetter(0))
            ]
        )

    async def add_skill(
        self,
        db: AsyncSession,
        user: User,
        skill_name: str,
        *,
        to_learn: bool,
    ) -> SkillMutationResponse:
        """
        Assign a skill to learn (to_learn=True) or to teach.

        The new row inherits the user's current priority pointers so all of
        the user's rows agree.

        Raises:
            SkillNotFoundException: skill is not in the catalog.
            SkillAlreadyAssignedException: user already holds the skill.
        """
        skill = await self._get_skill(db, skill_name)

        if await self.assignment_repo.get_for_user(db, user.id, skill.id) is not None:
            raise SkillAlreadyAssignedException(skill.name)

        learn_priority, teach_priority = await self.assignment_repo.get_priorities(db, user.id)

        try:
            await self.assignment_repo.create(
                db,
                user_id=user.id,
                skill_id=skill.id,
                is_learning=to_learn,
                is_teaching=not to_learn,
                learn_priority_skill_id=learn_priority,
                teach_priority_skill_id=teach_priority,
            )
            await db.commit()
        except IntegrityError:
            # uq_user_skill: a concurrent request added it first
            await db.rollback()
            raise SkillAlreadyAssignedException(skill_name)

        row_count = await self.assignment_repo.count_for_user(db, user.id)
        logger.info("skill_added", user_id=str(user.id), skill=skill.name, to_learn=to_learn)

        return SkillMutationResponse(
            message=f"'{skill.name}' has been added to your list",
            row_count=row_count,
        )

    async def remove_skill(
        self,
        db: AsyncSession,
        user: User,
        skill_name: str,
    ) -> SkillMutationResponse:
        """
        Remove a skill whatever its role.

        Raises:
            SkillNotFoundException: skill is not in the catalog.
            SkillNotAssignedException: the delete matched no row.
        """
        skill = await self._get_skill(db, skill_name)

        removed = await self.assignment_repo.remove(db, user.id, skill.id)
        if not removed:
            raise SkillNotAssignedException(skill.name)

        await self.assignment_repo.clear_priorities_for_skill(db, user.id, skill.id)
        await db.commit()

        row_count = await self.assignment_repo.count_for_user(db, user.id)
        logger.info("skill_removed", user_id=str(user.id), skill=skill.name)

        return SkillMutationResponse(message="deletion successful", row_count=row_count)

    async def set_priority(
        self,
        db: AsyncSession,
        user: User,
        skill_name: str,
        *,
        to_learn: bool,
    ) -> MessageResponse:
        """
        Make skill_name the user's priority skill to learn or to teach.

        Raises:
            SkillNotFoundException: skill is not in the catalog.
            SkillNotPrioritizableException: user does not hold the skill in
                the matching role.
        """
        skill = await self._get_skill(db, skill_name)

        assignment = await self.assignment_repo.get_for_user(db, user.id, skill.id)
        if assignment is None or assignment.is_learning != to_learn:
            raise SkillNotPrioritizableException(skill.name, to_learn)

        await self.assignment_repo.set_priority(db, user.id, skill.id, to_learn=to_learn)
        await db.commit()

        logger.info("priority_skill_set", user_id=str(user.id), skill=skill.name, to_learn=to_learn)
        return MessageResponse(message="successfully updated")

    async def clear_priority(
        self,
        db: AsyncSession,
        user: User,
        *,
        to_learn: bool,
        skill_name: Optional[str] = None,
    ) -> MessageResponse:
        """Clear the user's priority skill to learn or to teach. Idempotent."""
        await self.assignment_repo.clear_priority(db, user.id, to_learn=to_learn)
        await db.commit()

        logger.info("priority_skill_cleared", user_id=str(user.id), to_learn=to_learn)
        label = f"'{skill_name}'" if skill_name else "priority skill"
        return MessageResponse(message=f"{label} unprioritized")

    async def _get_skill(self, db: AsyncSession, skill_name: str) -> Skill:
        skill = await self.skill_repo.get_by_name(db, skill_name.strip())
        if skill is None:
            raise SkillNotFoundException(skill_name)
        return skill
