# backend/drivedesk/services/prepaid_hours_service.py
"""
Pre-paid Hours Service for DriveDesk

Packages of lesson hours bought in advance. Remaining hours are drawn down
by the booking service when lessons are completed; this service manages the
packages themselves and the per-student overview.
"""

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import PackageStatusFilter
from ..models.prepaid_hours import PrePaidHours, PrePaidHoursTransaction
from ..repositories.factory import RepositoryFactory
from ..repositories.prepaid_hours_repository import (
    PrePaidHoursRepository,
    PrePaidHoursTransactionRepository,
)
from ..repositories.student_repository import StudentRepository
from ..schemas.prepaid_hours import PrePaidHoursCreate, PrePaidHoursUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass
class StudentPrePaidSummary:
    student_id: str
    student_name: str
    total_remaining_hours: float = 0.0
    is_low: bool = False
    packages: List[PrePaidHours] = field(default_factory=list)


def is_low_balance(remaining: float, threshold: float) -> bool:
    return 0 < remaining <= threshold


def summarize_packages_by_student(
    packages: Iterable[PrePaidHours],
    status_filter: Union[PackageStatusFilter, str] = PackageStatusFilter.ACTIVE,
    search: Optional[str] = None,
    low_threshold: float = 2.0,
) -> List[StudentPrePaidSummary]:
    """
    Total remaining hours per student, fewest remaining first.

    ``active`` keeps students with hours left, ``expired`` those with none.
    """
    mode = PackageStatusFilter(status_filter)
    by_student: Dict[str, StudentPrePaidSummary] = {}

    for package in packages:
        summary = by_student.get(package.student_id)
        if summary is None:
            summary = by_student[package.student_id] = StudentPrePaidSummary(
                student_id=package.student_id, student_name=package.student_name
            )
        summary.total_remaining_hours += package.remaining_hours or 0.0
        summary.packages.append(package)

    summaries = sorted(by_student.values(), key=lambda s: s.total_remaining_hours)
    for summary in summaries:
        summary.is_low = is_low_balance(summary.total_remaining_hours, low_threshold)

    if search:
        term = search.strip().lower()
        summaries = [s for s in summaries if term in s.student_name.lower()]
    if mode is PackageStatusFilter.ACTIVE:
        summaries = [s for s in summaries if s.total_remaining_hours > 0]
    elif mode is PackageStatusFilter.EXPIRED:
        summaries = [s for s in summaries if s.total_remaining_hours <= 0]
    return summaries


class PrePaidHoursService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[PrePaidHoursRepository] = None,
        transaction_repository: Optional[PrePaidHoursTransactionRepository] = None,
        student_repository: Optional[StudentRepository] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_prepaid_hours_repository(db)
        self.transaction_repository = (
            transaction_repository or RepositoryFactory.create_prepaid_transaction_repository(db)
        )
        self.student_repository = (
            student_repository or RepositoryFactory.create_student_repository(db)
        )

    def list_packages(self, user_id: str, student_id: Optional[str] = None) -> List[PrePaidHours]:
        if student_id:
            self._require_owned(self.student_repository, student_id, user_id, "Student")
            return self.repository.for_student_oldest_first(user_id, student_id)
        return self.repository.list_for_user(user_id, PrePaidHours.purchase_date.desc())

    def get_package(self, user_id: str, package_id: str) -> PrePaidHours:
        return self._require_owned(self.repository, package_id, user_id, "Pre-paid hours package")

    def get_transactions(self, user_id: str, package_id: str) -> List[PrePaidHoursTransaction]:
        package = self.get_package(user_id, package_id)
        return self.transaction_repository.for_package(user_id, package.id)

    def get_student_summaries(
        self,
        user_id: str,
        status_filter: PackageStatusFilter = PackageStatusFilter.ACTIVE,
        student_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[StudentPrePaidSummary]:
        packages = self.list_packages(user_id, student_id)
        return summarize_packages_by_student(
            packages,
            status_filter=status_filter,
            search=search,
            low_threshold=settings.low_prepaid_hours_threshold,
        )

    @BaseService.measure_operation("create_prepaid_package")
    def create_package(self, user_id: str, data: PrePaidHoursCreate) -> PrePaidHours:
        self._require_owned(self.student_repository, data.student_id, user_id, "Student")
        self.log_operation(
            "create_prepaid_package", student_id=data.student_id, hours=data.package_hours
        )
        with self.transaction():
            package = self.repository.create(
                user_id=user_id, remaining_hours=data.package_hours, **data.model_dump()
            )
        return package

    def update_package(
        self, user_id: str, package_id: str, data: PrePaidHoursUpdate
    ) -> PrePaidHours:
        """
        Edit a package. Changing ``package_hours`` moves ``remaining_hours`` by
        the same amount, never below zero.
        """
        package = self.get_package(user_id, package_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in ("amount_paid", "notes")
        }
        if "package_hours" in changes:
            delta = changes["package_hours"] - package.package_hours
            changes["remaining_hours"] = max(0.0, (package.remaining_hours or 0.0) + delta)
        with self.transaction():
            self.repository.update_entity(package, **changes)
        return package

    def delete_package(self, user_id: str, package_id: str) -> None:
        package = self.get_package(user_id, package_id)
        self.log_operation("delete_prepaid_package", package_id=package_id)
        with self.transaction():
            self.repository.delete_entity(package)
