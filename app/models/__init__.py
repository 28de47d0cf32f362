"""
Database models for Skill Swap.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from app.models.base import BaseModel, TimestampMixin, UUIDMixin
from app.models.user import User
from app.models.skill import Category, Skill, categories_skills
from app.models.skill_assignment import SkillAssignment
from app.models.match import Match, MatchRequest
from app.models.social_link import SocialLink

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "Category",
    "Skill",
    "categories_skills",
    "SkillAssignment",
    "Match",
    "MatchRequest",
    "SocialLink",
]
