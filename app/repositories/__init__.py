"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from app.repositories.base import BaseRepository
from app.repositories.user_repository import UserRepository
from app.repositories.skill_repository import SkillRepository, SkillAssignmentRepository
from app.repositories.match_repository import MatchRepository, MatchRequestRepository
from app.repositories.social_link_repository import SocialLinkRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SkillRepository",
    "SkillAssignmentRepository",
    "MatchRepository",
    "MatchRequestRepository",
    "SocialLinkRepository",
]
