# backend/drivedesk/repositories/support_repository.py
"""Support message and reply repositories."""

import logging
from typing import List

from sqlalchemy import case
from sqlalchemy.orm import Session

from ..core.enums import SupportStatus
from ..models.support import SupportMessage, SupportReply
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SupportMessageRepository(BaseRepository[SupportMessage]):
    def __init__(self, db: Session):
        super().__init__(db, SupportMessage)

    def list_for_user(self, user_id: str, *order_by: object) -> List[SupportMessage]:
        return super().list_for_user(user_id, *(order_by or (SupportMessage.created_at.desc(),)))

    def list_all_for_admin(self) -> List[SupportMessage]:
        """Every ticket: open first, then in progress, then closed; newest first within each."""
        status_rank = case(
            (SupportMessage.status == SupportStatus.OPEN.value, 0),
            (SupportMessage.status == SupportStatus.IN_PROGRESS.value, 1),
            else_=2,
        )
        query = self._build_query().order_by(status_rank, SupportMessage.created_at.desc())
        return self._execute_query(query)


class SupportReplyRepository(BaseRepository[SupportReply]):
    def __init__(self, db: Session):
        super().__init__(db, SupportReply)

    def for_message(self, message_id: str) -> List[SupportReply]:
        query = self._build_query().filter(SupportReply.message_id == message_id)
        return self._execute_query(query.order_by(SupportReply.created_at, SupportReply.id))
