# backend/drivedesk/services/resource_service.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..models.resource import Resource
from ..repositories.factory import RepositoryFactory
from ..repositories.resource_repository import ResourceRepository
from ..schemas.resource import ResourceCreate, ResourceUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


def _url_fields_to_str(payload: Dict[str, Any]) -> Dict[str, Any]:
    for key in ("resource_url", "image_url"):
        if payload.get(key) is not None:
            payload[key] = str(payload[key])
    return payload


class ResourceService(BaseService):
    def __init__(self, db: Session, repository: Optional[ResourceRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_resource_repository(db)

    def list_resources(self, user_id: str) -> List[Resource]:
        return self.repository.list_alphabetical(user_id)

    def get_resource(self, user_id: str, resource_id: str) -> Resource:
        return self._require_owned(self.repository, resource_id, user_id, "Resource")

    def create_resource(self, user_id: str, data: ResourceCreate) -> Resource:
        with self.transaction():
            resource = self.repository.create(
                user_id=user_id, **_url_fields_to_str(data.model_dump())
            )
        return resource

    def update_resource(self, user_id: str, resource_id: str, data: ResourceUpdate) -> Resource:
        resource = self.get_resource(user_id, resource_id)
        changes = _url_fields_to_str(data.model_dump(exclude_unset=True))
        if changes.get("name") is None:
            changes.pop("name", None)
        if changes.get("resource_url") is None:
            changes.pop("resource_url", None)
        with self.transaction():
            self.repository.update_entity(resource, **changes)
        return resource

    def delete_resource(self, user_id: str, resource_id: str) -> None:
        resource = self.get_resource(user_id, resource_id)
        with self.transaction():
            self.repository.delete_entity(resource)
