# backend/drivedesk/repositories/prepaid_hours_repository.py
"""Pre-paid hour package and transaction repositories."""

import logging
from typing import List

from sqlalchemy.orm import Query, Session, joinedload

from ..models.prepaid_hours import PrePaidHours, PrePaidHoursTransaction
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class PrePaidHoursRepository(BaseRepository[PrePaidHours]):
    def __init__(self, db: Session):
        super().__init__(db, PrePaidHours)

    def for_student_oldest_first(self, user_id: str, student_id: str) -> List[PrePaidHours]:
        """A student's packages in the order they are drawn down."""
        query = self._build_query().filter(
            PrePaidHours.user_id == user_id, PrePaidHours.student_id == student_id
        )
        return self._execute_query(
            query.order_by(PrePaidHours.purchase_date, PrePaidHours.created_at, PrePaidHours.id)
        )

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(PrePaidHours.student))


class PrePaidHoursTransactionRepository(BaseRepository[PrePaidHoursTransaction]):
    def __init__(self, db: Session):
        super().__init__(db, PrePaidHoursTransaction)

    def for_booking(self, booking_id: str) -> List[PrePaidHoursTransaction]:
        return self.find_by(booking_id=booking_id)

    def for_package(self, user_id: str, package_id: str) -> List[PrePaidHoursTransaction]:
        query = (
            self._build_query()
            .options(joinedload(PrePaidHoursTransaction.booking))
            .filter(
                PrePaidHoursTransaction.user_id == user_id,
                PrePaidHoursTransaction.pre_paid_hours_id == package_id,
            )
        )
        return self._execute_query(query.order_by(PrePaidHoursTransaction.transaction_date))
