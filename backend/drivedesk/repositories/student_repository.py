# backend/drivedesk/repositories/student_repository.py
"""Student Repository for DriveDesk."""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.student import Student
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class StudentRepository(BaseRepository[Student]):
    def __init__(self, db: Session):
        super().__init__(db, Student)

    def search(self, user_id: str, name_query: Optional[str] = None) -> List[Student]:
        """Students ordered by name, optionally filtered by a case-insensitive name fragment."""
        query = self._build_query().filter(Student.user_id == user_id)
        if name_query:
            query = query.filter(func.lower(Student.name).like(f"%{name_query.strip().lower()}%"))
        return self._execute_query(query.order_by(Student.name))

    def count_for_user(self, user_id: str) -> int:
        return self.count(user_id=user_id)
