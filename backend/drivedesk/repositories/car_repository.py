# backend/drivedesk/repositories/car_repository.py
"""Car and mileage-log repositories."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.car import Car, CarMileageEntry
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class CarRepository(BaseRepository[Car]):
    def __init__(self, db: Session):
        super().__init__(db, Car)


class MileageRepository(BaseRepository[CarMileageEntry]):
    def __init__(self, db: Session):
        super().__init__(db, CarMileageEntry)

    def list_newest_first(self, user_id: str, car_id: Optional[str] = None) -> List[CarMileageEntry]:
        query = self._build_query().filter(CarMileageEntry.user_id == user_id)
        if car_id:
            query = query.filter(CarMileageEntry.car_id == car_id)
        return self._execute_query(
            query.order_by(CarMileageEntry.entry_date.desc(), CarMileageEntry.created_at.desc())
        )

    def latest_for_car(self, car_id: str) -> Optional[CarMileageEntry]:
        """Most recent odometer entry for a car, if any."""
        query = (
            self._build_query()
            .filter(CarMileageEntry.car_id == car_id)
            .order_by(CarMileageEntry.entry_date.desc(), CarMileageEntry.end_mileage.desc())
        )
        results = self._execute_query(query.limit(1))
        return results[0] if results else None
