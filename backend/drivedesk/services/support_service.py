# backend/drivedesk/services/support_service.py
"""
Support Service for DriveDesk

Instructors raise tickets and reply under them. Admins see every ticket,
reply to any of them and move them through open / in_progress / closed.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import SupportStatus
from ..core.exceptions import ForbiddenException, NotFoundException
from ..core.ulid_helper import is_valid_ulid
from ..models.profile import Profile
from ..models.support import SupportMessage, SupportReply
from ..repositories.factory import RepositoryFactory
from ..repositories.support_repository import SupportMessageRepository, SupportReplyRepository
from ..schemas.support import SupportMessageCreate, SupportReplyCreate
from .base import BaseService

logger = logging.getLogger(__name__)


class SupportService(BaseService):
    def __init__(
        self,
        db: Session,
        message_repository: Optional[SupportMessageRepository] = None,
        reply_repository: Optional[SupportReplyRepository] = None,
    ):
        super().__init__(db)
        self.message_repository = (
            message_repository or RepositoryFactory.create_support_message_repository(db)
        )
        self.reply_repository = (
            reply_repository or RepositoryFactory.create_support_reply_repository(db)
        )

    def _get_visible_message(self, profile: Profile, message_id: str) -> SupportMessage:
        """Admins see any ticket; everyone else only their own."""
        if profile.is_admin:
            if not is_valid_ulid(message_id):
                raise NotFoundException("Support message not found", details={"id": message_id})
            message = self.message_repository.get_by_id(message_id)
            if message is None:
                raise NotFoundException("Support message not found", details={"id": message_id})
            return message
        return self._require_owned(self.message_repository, message_id, profile.id, "Support message")

    def list_own_messages(self, profile: Profile) -> List[SupportMessage]:
        return self.message_repository.list_for_user(profile.id)

    def list_all_messages(self, profile: Profile) -> List[SupportMessage]:
        if not profile.is_admin:
            raise ForbiddenException("Only admins can view all support messages")
        return self.message_repository.list_all_for_admin()

    def get_message(self, profile: Profile, message_id: str) -> SupportMessage:
        return self._get_visible_message(profile, message_id)

    @BaseService.measure_operation("create_support_message")
    def create_message(self, profile: Profile, data: SupportMessageCreate) -> SupportMessage:
        self.log_operation("create_support_message", user_id=profile.id)
        with self.transaction():
            message = self.message_repository.create(
                user_id=profile.id,
                subject=data.subject,
                message=data.message,
                status=SupportStatus.OPEN.value,
            )
        return message

    def list_replies(self, profile: Profile, message_id: str) -> List[SupportReply]:
        message = self._get_visible_message(profile, message_id)
        return self.reply_repository.for_message(message.id)

    @BaseService.measure_operation("add_support_reply")
    def add_reply(
        self, profile: Profile, message_id: str, data: SupportReplyCreate
    ) -> SupportReply:
        message = self._get_visible_message(profile, message_id)
        self.log_operation(
            "add_support_reply", message_id=message.id, user_id=profile.id, admin=profile.is_admin
        )
        with self.transaction():
            reply = self.reply_repository.create(
                message_id=message.id,
                user_id=profile.id,
                is_admin=bool(profile.is_admin),
                body=data.body,
            )
            self.db.expire(message, ["replies"])
        return reply

    @BaseService.measure_operation("update_support_status")
    def update_status(
        self, profile: Profile, message_id: str, status: SupportStatus
    ) -> SupportMessage:
        if not profile.is_admin:
            raise ForbiddenException("Only admins can change a support message status")
        message = self._get_visible_message(profile, message_id)
        self.log_operation("update_support_status", message_id=message.id, status=status.value)
        with self.transaction():
            self.message_repository.update_entity(message, status=status.value)
        return message
