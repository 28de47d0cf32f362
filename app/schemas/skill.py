"""
Skill catalog and skill assignment schemas.
"""
from typing import List, Optional
from pydantic import Field
from app.schemas.base import BaseSchema


class CategorySkills(BaseSchema):
    """One category and its skills, alphabetical."""

    category: str
    skills: List[str]


class UnselectedSkillsResponse(BaseSchema):
    data: List[CategorySkills]


class AddSkillRequest(BaseSchema):
    """Add a skill to the caller's learn or teach list."""

    skill: str = Field(..., min_length=1)
    username: Optional[str] = None
    to_learn: bool


class SkillMutationResponse(BaseSchema):
    """Result of adding or removing a skill."""

    message: str
    row_count: int  # user's assignment count after the change


class PriorityRequest(BaseSchema):
    """Set the caller's priority skill to learn or to teach."""

    user: Optional[str] = None
    skill: str = Field(..., min_length=1)
    is_to_learn: bool


class UnprioritizeRequest(BaseSchema):
    """Clear the caller's priority skill to learn or to teach."""

    user: Optional[str] = None
    skill: Optional[str] = None
    is_to_learn: bool
