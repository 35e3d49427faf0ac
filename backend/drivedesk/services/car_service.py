# backend/drivedesk/services/car_service.py
"""
Car Service for DriveDesk

Vehicles, the daily mileage log, and derived figures:
- weekly mileage totals (Monday-start weeks, newest first)
- miles remaining until the next service
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..models.car import Car, CarMileageEntry
from ..repositories.car_repository import CarRepository, MileageRepository
from ..repositories.factory import RepositoryFactory
from ..schemas.car import CarCreate, CarUpdate, MileageEntryCreate, MileageEntryUpdate
from ..core.exceptions import ValidationException
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass
class WeeklyMileage:
    week_start: date
    week_end: date
    total_miles: float = 0.0
    entries: List[CarMileageEntry] = field(default_factory=list)


@dataclass
class ServiceStatus:
    car_id: str
    car_name: str
    current_mileage: float
    service_interval_miles: Optional[float]
    miles_until_service: Optional[float]


def _entry_matches(entry: CarMileageEntry, term: str) -> bool:
    """Case-insensitive match over notes, both readings and the date text."""
    haystacks = [
        entry.notes or "",
        f"{entry.start_mileage:g}",
        f"{entry.end_mileage:g}",
        entry.entry_date.isoformat(),
        entry.entry_date.strftime("%d %B %Y"),
    ]
    return any(term in text.lower() for text in haystacks)


def summarize_mileage_by_week(
    entries: Iterable[CarMileageEntry], search: Optional[str] = None
) -> List[WeeklyMileage]:
    """
    Group mileage entries into Monday-start weeks.

    Args:
        entries: Mileage log entries in any order
        search: Optional case-insensitive filter applied before grouping

    Returns:
        One WeeklyMileage per week that has entries, newest week first
    """
    term = search.strip().lower() if search else ""
    weeks: Dict[date, WeeklyMileage] = {}

    for entry in entries:
        if term and not _entry_matches(entry, term):
            continue
        week_start = entry.entry_date - timedelta(days=entry.entry_date.weekday())
        bucket = weeks.get(week_start)
        if bucket is None:
            bucket = weeks[week_start] = WeeklyMileage(
                week_start=week_start, week_end=week_start + timedelta(days=6)
            )
        bucket.total_miles += entry.miles_driven
        bucket.entries.append(entry)

    return [weeks[key] for key in sorted(weeks, reverse=True)]


def miles_until_service(
    current_mileage: float, initial_mileage: float, service_interval: Optional[float]
) -> Optional[float]:
    """Miles left in the current service interval, counted from the acquisition mileage."""
    if not service_interval or service_interval <= 0:
        return None
    driven = max(0.0, current_mileage - initial_mileage)
    return service_interval - (driven % service_interval)


class CarService(BaseService):
    def __init__(
        self,
        db: Session,
        car_repository: Optional[CarRepository] = None,
        mileage_repository: Optional[MileageRepository] = None,
    ):
        super().__init__(db)
        self.car_repository = car_repository or RepositoryFactory.create_car_repository(db)
        self.mileage_repository = (
            mileage_repository or RepositoryFactory.create_mileage_repository(db)
        )

    # Cars

    def list_cars(self, user_id: str) -> List[Car]:
        return self.car_repository.list_for_user(user_id, Car.make, Car.model)

    def get_car(self, user_id: str, car_id: str) -> Car:
        return self._require_owned(self.car_repository, car_id, user_id, "Car")

    @BaseService.measure_operation("create_car")
    def create_car(self, user_id: str, data: CarCreate) -> Car:
        self.log_operation("create_car", user_id=user_id)
        with self.transaction():
            car = self.car_repository.create(user_id=user_id, **data.model_dump())
        return car

    def update_car(self, user_id: str, car_id: str, data: CarUpdate) -> Car:
        car = self.get_car(user_id, car_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in ("service_interval_miles", "car_image_url")
        }
        with self.transaction():
            self.car_repository.update_entity(car, **changes)
        return car

    def delete_car(self, user_id: str, car_id: str) -> None:
        car = self.get_car(user_id, car_id)
        self.log_operation("delete_car", car_id=car_id)
        with self.transaction():
            self.car_repository.delete_entity(car)

    def get_service_status(self, user_id: str, car_id: str) -> ServiceStatus:
        """
        Current odometer reading and miles until the next service.

        The reading comes from the car's latest mileage entry, or its
        acquisition mileage when nothing has been logged.
        """
        car = self.get_car(user_id, car_id)
        latest = self.mileage_repository.latest_for_car(car.id)
        current = latest.end_mileage if latest is not None else car.initial_mileage
        return ServiceStatus(
            car_id=car.id,
            car_name=f"{car.make} {car.model}",
            current_mileage=current,
            service_interval_miles=car.service_interval_miles,
            miles_until_service=miles_until_service(
                current, car.initial_mileage, car.service_interval_miles
            ),
        )

    # Mileage log

    def list_mileage(self, user_id: str, car_id: Optional[str] = None) -> List[CarMileageEntry]:
        if car_id:
            self.get_car(user_id, car_id)
        return self.mileage_repository.list_newest_first(user_id, car_id)

    def get_mileage_entry(self, user_id: str, entry_id: str) -> CarMileageEntry:
        return self._require_owned(self.mileage_repository, entry_id, user_id, "Mileage entry")

    def weekly_summary(
        self, user_id: str, car_id: Optional[str] = None, search: Optional[str] = None
    ) -> List[WeeklyMileage]:
        return summarize_mileage_by_week(self.list_mileage(user_id, car_id), search)

    @BaseService.measure_operation("create_mileage_entry")
    def create_mileage_entry(self, user_id: str, data: MileageEntryCreate) -> CarMileageEntry:
        if data.car_id:
            self.get_car(user_id, data.car_id)
        with self.transaction():
            entry = self.mileage_repository.create(user_id=user_id, **data.model_dump())
        return entry

    def update_mileage_entry(
        self, user_id: str, entry_id: str, data: MileageEntryUpdate
    ) -> CarMileageEntry:
        entry = self.get_mileage_entry(user_id, entry_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in ("car_id", "notes")
        }
        if changes.get("car_id"):
            self.get_car(user_id, changes["car_id"])

        start = changes.get("start_mileage", entry.start_mileage)
        end = changes.get("end_mileage", entry.end_mileage)
        if end < start:
            raise ValidationException(
                "end_mileage must be greater than or equal to start_mileage",
                details={"start_mileage": start, "end_mileage": end},
            )
        with self.transaction():
            self.mileage_repository.update_entity(entry, **changes)
        return entry

    def delete_mileage_entry(self, user_id: str, entry_id: str) -> None:
        entry = self.get_mileage_entry(user_id, entry_id)
        with self.transaction():
            self.mileage_repository.delete_entity(entry)
