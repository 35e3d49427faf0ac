# backend/drivedesk/repositories/progress_repository.py
"""Progress topic and progress entry repositories."""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload

from ..models.progress import ProgressTopic, StudentProgressEntry
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProgressTopicRepository(BaseRepository[ProgressTopic]):
    def __init__(self, db: Session):
        super().__init__(db, ProgressTopic)

    def find_by_name(self, user_id: str, name: str) -> Optional[ProgressTopic]:
        """Case-insensitive lookup of a topic name within one instructor's syllabus."""
        query = self._build_query().filter(
            ProgressTopic.user_id == user_id,
            func.lower(ProgressTopic.name) == name.strip().lower(),
        )
        results = self._execute_query(query.limit(1))
        return results[0] if results else None


class ProgressEntryRepository(BaseRepository[StudentProgressEntry]):
    def __init__(self, db: Session):
        super().__init__(db, StudentProgressEntry)

    def for_student(self, user_id: str, student_id: str) -> List[StudentProgressEntry]:
        """A student's entries, newest first."""
        query = self._apply_eager_loading(self._build_query()).filter(
            StudentProgressEntry.user_id == user_id,
            StudentProgressEntry.student_id == student_id,
        )
        return self._execute_query(
            query.order_by(
                StudentProgressEntry.entry_date.desc(), StudentProgressEntry.created_at.desc()
            )
        )

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(StudentProgressEntry.topic))
