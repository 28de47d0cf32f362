"""
Profile service - aggregated profile reads and profile edits.

This service owns ALL profile operations. Routes never touch
the database directly - they call methods here.
"""
from typing import Any, Dict, List, Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import storage
from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import create_access_token
from app.core.exceptions import (
    BadRequestException,
    SocialLinkExistsException,
    UserNotFoundException,
    UsernameTakenException,
)
from app.models.user import User
from app.repositories.social_link_repository import SocialLinkRepository
from app.repositories.user_repository import UserRepository
from app.schemas.profile import (
    NO_SKILLS_PLACEHOLDER,
    EditProfileResponse,
    ProfileResponse,
    ProfileView,
    SocialLinkResponse,
)
from app.schemas.user import UserResponse

logger = get_logger(__name__)


def user_to_response(user: User) -> UserResponse:
    """
    Convert a User model to UserResponse schema.

    Centralized here so sign-in and profile endpoints return the same shape.
    """
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        profile_picture=storage.public_url(user.profile_picture),
        phone_number=user.phone_number,
        description=user.description,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _or_placeholder(skills: set) -> List[str]:
    return sorted(skills) or [NO_SKILLS_PLACEHOLDER]


class ProfileService:
    """Handles profile reads and edits."""

    def __init__(self):
        self.user_repo = UserRepository()
        self.social_repo = SocialLinkRepository()

    async def get_profile(
        self,
        db: AsyncSession,
        username: str,
    ) -> ProfileResponse:
        """
        Build the public profile of a user.

        Skill lists are never empty: a user without skills in a role gets
        the placeholder sentence instead.

        Raises:
            UserNotFoundException: no such username.
        """
        rows = await self.user_repo.get_profile_rows(db, username)
        if not rows:
            raise UserNotFoundException()

        user = rows[0][0]
        names_by_id = {}
        to_learn, to_teach = set(), set()
        for _, skill_name, skill_id, is_learning, is_teaching, _, _ in rows:
            if skill_name is None:
                continue
            names_by_id[skill_id] = skill_name
            if is_learning:
                to_learn.add(skill_name)
            if is_teaching:
                to_teach.add(skill_name)

        learn_priority_id, teach_priority_id = rows[0][5], rows[0][6]
        socials = await self.social_repo.list_for_user(db, user.id)

        view = ProfileView(
            username=user.username,
            email=user.email,
            profile_picture=storage.public_url(user.profile_picture),
            phone_number=user.phone_number,
            description=user.description,
            created_at=user.created_at,
            skills_to_learn=_or_placeholder(to_learn),
            skills_to_teach=_or_placeholder(to_teach),
            priority_skill_to_learn=names_by_id.get(learn_priority_id),
            priority_skill_to_teach=names_by_id.get(teach_priority_id),
            socials=[SocialLinkResponse.model_validate(link) for link in socials],
        )
        return ProfileResponse(profile_data=view)

    async def edit_profile(
        self,
        db: AsyncSession,
        user: User,
        *,
        new_username: Optional[str] = None,
        new_description: Optional[str] = None,
        platform: Optional[str] = None,
        link_to_platform: Optional[str] = None,
        image: Optional[UploadFile] = None,
    ) -> EditProfileResponse:
        """
        Apply the supplied profile changes; blank values are ignored.

        Users-table changes go out as a single UPDATE built from the fields
        that changed. A social link is updated if the user already has one
        for the platform and inserted otherwise.

        Raises:
            UsernameTakenException: new_username belongs to someone else.
            SocialLinkExistsException: a concurrent edit added the same platform.
            BadRequestException: platform without a link, or a bad image.
        """
        new_username = (new_username or "").strip()
        platform = (platform or "").strip()
        link_to_platform = (link_to_platform or "").strip()
        # Rollback expires the instance; keep the id readable afterwards
        user_id = user.id

        changes: Dict[str, Any] = {}

        if new_username and new_username != user.username:
            if await self.user_repo.username_exists(db, new_username):
                raise UsernameTakenException(new_username)
            changes["username"] = new_username

        if new_description:
            changes["description"] = new_description

        if platform and not link_to_platform:
            raise BadRequestException(
                f"A link is required to add {platform}",
                code="LINK_REQUIRED",
            )

        old_picture = user.profile_picture
        new_picture = None
        if image is not None and image.filename:
            data = await self._read_image(image)
            new_picture = storage.build_avatar_key(str(user_id), image.filename)
            await storage.upload_bytes(new_picture, data, image.content_type)
            changes["profile_picture"] = new_picture

        effective_username = changes.get("username", user.username)
        effective_picture = changes.get("profile_picture", old_picture)

        try:
            if platform:
                await self.social_repo.upsert(db, user_id, platform, link_to_platform)
            await self.user_repo.update_fields(db, user_id, changes)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            if new_picture:
                await storage.delete_object(new_picture)
            if "username" in changes and await self.user_repo.username_exists(db, new_username):
                raise UsernameTakenException(new_username)
            if platform and await self.social_repo.platform_exists(db, user_id, platform):
                raise SocialLinkExistsException(platform)
            raise

        if new_picture and old_picture:
            try:
                await storage.delete_object(old_picture)
            except Exception:
                logger.warning("avatar_delete_failed", user_id=str(user_id), key=old_picture)

        logger.info("profile_updated", user_id=str(user_id), fields=sorted(changes), platform=platform or None)

        socials = await self.social_repo.list_for_user(db, user_id)
        response = EditProfileResponse(
            img=storage.public_url(effective_picture),
            new_socials=[SocialLinkResponse.model_validate(link) for link in socials],
            new_username=effective_username,
        )
        if "username" in changes:
            response.access_token = create_access_token(effective_username)
        return response

    async def _read_image(self, image: UploadFile) -> bytes:
        """Validate extension and size of an uploaded picture and return its bytes."""
        extension = storage.file_extension(image.filename)
        if extension not in settings.allowed_image_extensions:
            raise BadRequestException(
                f"Unsupported image type '{extension or image.filename}'",
                code="UNSUPPORTED_IMAGE",
            )

        data = await image.read()
        if not data:
            raise BadRequestException("Uploaded image is empty", code="EMPTY_IMAGE")
        if len(data) > settings.max_avatar_size_bytes:
            raise BadRequestException(
                f"Image exceeds {settings.max_avatar_size_mb} MB",
                code="IMAGE_TOO_LARGE",
            )
        return data
