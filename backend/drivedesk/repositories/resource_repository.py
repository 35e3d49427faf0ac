# backend/drivedesk/repositories/resource_repository.py
"""Learning resource repository."""

from typing import List

from sqlalchemy.orm import Session

from ..models.resource import Resource
from .base_repository import BaseRepository


class ResourceRepository(BaseRepository[Resource]):
    def __init__(self, db: Session):
        super().__init__(db, Resource)

    def list_alphabetical(self, user_id: str) -> List[Resource]:
        return self.list_for_user(user_id, Resource.name)
