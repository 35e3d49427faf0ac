# backend/drivedesk/repositories/profile_repository.py
"""Instructor profile repository."""

from typing import Optional

from sqlalchemy.orm import Session

from ..models.profile import Profile
from .base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def get_or_create(self, user_id: str, default_timezone: str) -> Profile:
        """Return the profile for ``user_id``, creating an empty one on first sight."""
        profile: Optional[Profile] = self.get_by_id(user_id, load_relationships=False)
        if profile is not None:
            return profile
        self.logger.info("Creating profile for new user %s", user_id)
        return self.create(id=user_id, timezone=default_timezone, is_admin=False)
