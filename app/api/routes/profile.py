"""
Profile routes.

Thin controllers - all business logic lives in ProfileService.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_UPLOAD
from app.api.deps import get_current_user, ensure_acting_user
from app.models.user import User
from app.schemas.profile import EditProfileResponse, ProfileResponse
from app.services.profile_service import ProfileService

router = APIRouter(tags=["profile"])

profile_service = ProfileService()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    selected_user: str = Query(..., alias="selectedUser", min_length=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Aggregated profile of any user: record, skills and social links."""
    return await profile_service.get_profile(db, selected_user)


@router.post(
    "/edit-profile",
    response_model=EditProfileResponse,
    response_model_exclude_unset=True,
)
@limiter.limit(RATE_UPLOAD)
async def edit_profile(
    request: Request,
    current_username: Optional[str] = Form(None, alias="currentUsername"),
    new_username: Optional[str] = Form(None, alias="newUsername"),
    new_description: Optional[str] = Form(None, alias="newDescription"),
    platform: Optional[str] = Form(None),
    link_to_platform: Optional[str] = Form(None, alias="linkToPlatform"),
    img_file: Optional[UploadFile] = File(None, alias="imgFile"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Edit the current user's profile (multipart form).

    Every field is optional. A new access token is returned when the
    username changes.
    """
    ensure_acting_user(current_user, current_username)
    return await profile_service.edit_profile(
        db,
        current_user,
        new_username=new_username,
        new_description=new_description,
        platform=platform,
        link_to_platform=link_to_platform,
        image=img_file,
    )
