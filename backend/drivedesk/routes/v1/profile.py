# backend/drivedesk/routes/v1/profile.py
"""Instructor profile routes - API v1."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import get_current_profile, get_current_user_id, get_profile_service
from ...models.profile import Profile
from ...schemas.profile import ProfileResponse, ProfileUpdate
from ...services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profile-v1"])


@router.get("", response_model=ProfileResponse)
async def get_profile(profile: Profile = Depends(get_current_profile)) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)


@router.patch("", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await asyncio.to_thread(profile_service.update_profile, user_id, payload)
    return ProfileResponse.model_validate(profile)
