# backend/drivedesk/repositories/driving_test_repository.py
"""Driving test repository."""

import logging
from typing import List

from sqlalchemy.orm import Query, Session, joinedload

from ..models.driving_test import DrivingTest
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class DrivingTestRepository(BaseRepository[DrivingTest]):
    def __init__(self, db: Session):
        super().__init__(db, DrivingTest)

    def list_newest_first(self, user_id: str) -> List[DrivingTest]:
        return self.list_for_user(user_id, DrivingTest.test_date.desc())

    def for_student(self, user_id: str, student_id: str) -> List[DrivingTest]:
        query = self._apply_eager_loading(self._build_query()).filter(
            DrivingTest.user_id == user_id, DrivingTest.student_id == student_id
        )
        return self._execute_query(query.order_by(DrivingTest.test_date.desc()))

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(DrivingTest.student))
