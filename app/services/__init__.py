"""
Service layer - business logic and orchestration.

Services contain the application's business logic, coordinate between
repositories, and own the transaction (commit / rollback).

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from app.services.auth_service import AuthService
from app.services.profile_service import ProfileService
from app.services.skill_service import SkillService
from app.services.match_service import MatchService

__all__ = [
    "AuthService",
    "ProfileService",
    "SkillService",
    "MatchService",
]
