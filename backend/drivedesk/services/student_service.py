# backend/drivedesk/services/student_service.py
"""Student Service for DriveDesk."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.student import Student
from ..repositories.factory import RepositoryFactory
from ..repositories.student_repository import StudentRepository
from ..schemas.student import StudentCreate, StudentUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


class StudentService(BaseService):
    def __init__(self, db: Session, repository: Optional[StudentRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_student_repository(db)

    def list_students(self, user_id: str, search: Optional[str] = None) -> List[Student]:
        return self.repository.search(user_id, search)

    def get_student(self, user_id: str, student_id: str) -> Student:
        return self._require_owned(self.repository, student_id, user_id, "Student")

    @BaseService.measure_operation("create_student")
    def create_student(self, user_id: str, data: StudentCreate) -> Student:
        self.log_operation("create_student", user_id=user_id)
        payload = data.model_dump()
        payload["status"] = data.status.value
        with self.transaction():
            student = self.repository.create(user_id=user_id, **payload)
        return student

    @BaseService.measure_operation("update_student")
    def update_student(self, user_id: str, student_id: str, data: StudentUpdate) -> Student:
        student = self.get_student(user_id, student_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("status") is not None:
            changes["status"] = data.status.value
        else:
            changes.pop("status", None)
        if "name" in changes and changes["name"] is None:
            changes.pop("name")
        with self.transaction():
            self.repository.update_entity(student, **changes)
        return student

    @BaseService.measure_operation("delete_student")
    def delete_student(self, user_id: str, student_id: str) -> None:
        """Delete a student; their bookings stay on the calendar without a student."""
        student = self.get_student(user_id, student_id)
        self.log_operation("delete_student", student_id=student_id)
        with self.transaction():
            self.repository.delete_entity(student)
