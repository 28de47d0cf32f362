"""
Skill repositories - the read-only catalog and per-user assignments.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.skill import Category, Skill, categories_skills
from app.models.skill_assignment import SkillAssignment
from app.repositories.base import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    def __init__(self):
        super().__init__(Skill)

    async def get_by_name(
        self,
        db: AsyncSession,
        name: str,
    ) -> Optional[Skill]:
        """Find a skill by its exact name."""
        result = await db.execute(
            select(Skill).where(Skill.name == name)
        )
        return result.scalar_one_or_none()

    async def find_unselected(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[Tuple[str, str]]:
        """
        (category, skill) pairs for every catalog skill the user has not
        assigned in either role, ordered by category then skill name.
        """
        assigned = select(SkillAssignment.skill_id).where(
            SkillAssignment.user_id == user_id
        )
        result = await db.execute(
            select(Category.name, Skill.name)
            .join(categories_skills, categories_skills.c.category_id == Category.id)
            .join(Skill, Skill.id == categories_skills.c.skill_id)
            .where(Skill.id.not_in(assigned))
            .order_by(Category.name.asc(), Skill.name.asc())
        )
        return [(row[0], row[1]) for row in result.all()]


class SkillAssignmentRepository(BaseRepository[SkillAssignment]):
    def __init__(self):
        super().__init__(SkillAssignment)

    async def get_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        skill_id: UUID,
    ) -> Optional[SkillAssignment]:
        """The user's assignment row for one skill, if any."""
        result = await db.execute(
            select(SkillAssignment).where(
                SkillAssignment.user_id == user_id,
                SkillAssignment.skill_id == skill_id,
            )
        )
        return result.scalar_one_or_none()

    async def count_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """Count a user's assignment rows."""
        result = await db.execute(
            select(func.count(SkillAssignment.id)).where(
                SkillAssignment.user_id == user_id
            )
        )
        return result.scalar() or 0

    async def get_priorities(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Tuple[Optional[UUID], Optional[UUID]]:
        """(learn_priority_skill_id, teach_priority_skill_id) for a user."""
        result = await db.execute(
            select(
                SkillAssignment.learn_priority_skill_id,
                SkillAssignment.teach_priority_skill_id,
            )
            .where(SkillAssignment.user_id == user_id)
            .limit(1)
        )
        row = result.first()
        if row is None:
            return None, None
        return row[0], row[1]

    async def remove(
        self,
        db: AsyncSession,
        user_id: UUID,
        skill_id: UUID,
    ) -> int:
        """Delete the assignment whatever its role. Returns rows deleted."""
        result = await db.execute(
            delete(SkillAssignment).where(
                SkillAssignment.user_id == user_id,
                SkillAssignment.skill_id == skill_id,
            )
        )
        return result.rowcount

    async def set_priority(
        self,
        db: AsyncSession,
        user_id: UUID,
        skill_id: UUID,
        *,
        to_learn: bool,
    ) -> int:
        """Point the learn or teach priority of every user row at skill_id."""
        column = "learn_priority_skill_id" if to_learn else "teach_priority_skill_id"
        result = await db.execute(
            update(SkillAssignment)
            .where(SkillAssignment.user_id == user_id)
            .values({column: skill_id})
        )
        return result.rowcount

    async def clear_priority(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        to_learn: bool,
    ) -> int:
        """Null the learn or teach priority on every user row."""
        column = "learn_priority_skill_id" if to_learn else "teach_priority_skill_id"
        result = await db.execute(
            update(SkillAssignment)
            .where(SkillAssignment.user_id == user_id)
            .values({column: None})
        )
        return result.rowcount

    async def clear_priorities_for_skill(
        self,
        db: AsyncSession,
        user_id: UUID,
        skill_id: UUID,
    ) -> None:
        """Drop priority pointers that reference skill_id."""
        for column in (
            SkillAssignment.learn_priority_skill_id,
            SkillAssignment.teach_priority_skill_id,
        ):
            await db.execute(
                update(SkillAssignment)
                .where(
                    SkillAssignment.user_id == user_id,
                    column == skill_id,
                )
                .values({column.key: None})
            )
