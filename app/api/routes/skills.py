"""
Skill routes - catalog browsing, skill assignment and priority skills.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_current_user, ensure_acting_user
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.skill import (
    AddSkillRequest,
    PriorityRequest,
    SkillMutationResponse,
    UnprioritizeRequest,
    UnselectedSkillsResponse,
)
from app.services.skill_service import SkillService

router = APIRouter(tags=["skills"])

skill_service = SkillService()


@router.get("/unselected-skills", response_model=UnselectedSkillsResponse)
async def get_unselected_skills(
    username: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Skills the current user has not picked yet, grouped by category."""
    ensure_acting_user(current_user, username)
    return await skill_service.unselected_skills(db, current_user)


@router.post("/add-skill", response_model=SkillMutationResponse)
async def add_skill(
    payload: AddSkillRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a skill to the current user's learn or teach list."""
    ensure_acting_user(current_user, payload.username)
    return await skill_service.add_skill(
        db,
        current_user,
        payload.skill,
        to_learn=payload.to_learn,
    )


@router.delete("/remove-skill", response_model=SkillMutationResponse)
async def remove_skill(
    skill: str = Query(..., min_length=1),
    username: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove a skill from the current user's list, whichever role it has."""
    ensure_acting_user(current_user, username)
    return await skill_service.remove_skill(db, current_user, skill)


@router.put("/update-priority-skill", response_model=MessageResponse)
async def update_priority_skill(
    payload: PriorityRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Set the current user's priority skill to learn or to teach."""
    ensure_acting_user(current_user, payload.user)
    return await skill_service.set_priority(
        db,
        current_user,
        payload.skill,
        to_learn=payload.is_to_learn,
    )


@router.delete("/unprioritize-skill", response_model=MessageResponse)
async def unprioritize_skill(
    payload: UnprioritizeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Clear the current user's priority skill to learn or to teach."""
    ensure_acting_user(current_user, payload.user)
    return await skill_service.clear_priority(
        db,
        current_user,
        to_learn=payload.is_to_learn,
        skill_name=payload.skill,
    )
