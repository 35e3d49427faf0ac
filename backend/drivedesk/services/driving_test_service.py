# backend/drivedesk/services/driving_test_service.py
"""Driving test records and their statistics."""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import StatsTimeframe
from ..models.driving_test import DrivingTest
from ..repositories.driving_test_repository import DrivingTestRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.student_repository import StudentRepository
from ..schemas.driving_test import DrivingTestCreate, DrivingTestUpdate
from .base import BaseService
from .driving_test_stats import DrivingTestStatistics, compute_test_statistics

logger = logging.getLogger(__name__)


class DrivingTestService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[DrivingTestRepository] = None,
        student_repository: Optional[StudentRepository] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_driving_test_repository(db)
        self.student_repository = (
            student_repository or RepositoryFactory.create_student_repository(db)
        )

    def list_tests(self, user_id: str) -> List[DrivingTest]:
        return self.repository.list_newest_first(user_id)

    def list_for_student(self, user_id: str, student_id: str) -> List[DrivingTest]:
        self._require_owned(self.student_repository, student_id, user_id, "Student")
        return self.repository.for_student(user_id, student_id)

    def get_test(self, user_id: str, test_id: str) -> DrivingTest:
        return self._require_owned(self.repository, test_id, user_id, "Driving test")

    @BaseService.measure_operation("create_driving_test")
    def create_test(self, user_id: str, data: DrivingTestCreate) -> DrivingTest:
        self._require_owned(self.student_repository, data.student_id, user_id, "Student")
        self.log_operation("create_driving_test", user_id=user_id, student_id=data.student_id)
        with self.transaction():
            test = self.repository.create(user_id=user_id, **data.model_dump())
        return test

    def update_test(self, user_id: str, test_id: str, data: DrivingTestUpdate) -> DrivingTest:
        test = self.get_test(user_id, test_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "notes"
        }
        if "student_id" in changes:
            self._require_owned(self.student_repository, changes["student_id"], user_id, "Student")
        with self.transaction():
            self.repository.update_entity(test, **changes)
        return test

    def delete_test(self, user_id: str, test_id: str) -> None:
        test = self.get_test(user_id, test_id)
        with self.transaction():
            self.repository.delete_entity(test)

    @BaseService.measure_operation("get_test_statistics")
    def get_statistics(
        self,
        user_id: str,
        timeframe: StatsTimeframe = StatsTimeframe.ALL_TIME,
        today: Optional[date] = None,
    ) -> Optional[DrivingTestStatistics]:
        return compute_test_statistics(self.repository.list_newest_first(user_id), timeframe, today)
