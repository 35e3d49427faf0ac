# backend/drivedesk/services/profile_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..models.profile import Profile
from ..repositories.factory import RepositoryFactory
from ..repositories.profile_repository import ProfileRepository
from ..schemas.profile import ProfileUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


class ProfileService(BaseService):
    """Instructor profile: name, hourly rate and time zone."""

    def __init__(self, db: Session, repository: Optional[ProfileRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_profile_repository(db)

    def get_or_create(self, user_id: str) -> Profile:
        with self.transaction():
            profile = self.repository.get_or_create(user_id, settings.default_timezone)
        return profile

    @BaseService.measure_operation("update_profile")
    def update_profile(self, user_id: str, data: ProfileUpdate) -> Profile:
        profile = self.repository.get_or_create(user_id, settings.default_timezone)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("timezone") is None:
            changes.pop("timezone", None)
        self.log_operation("update_profile", user_id=user_id, fields=sorted(changes))
        with self.transaction():
            self.repository.update_entity(profile, **changes)
        return profile
