# backend/drivedesk/models/car.py
"""Tuition vehicles and the mileage log kept against them."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Car(Base):
    __tablename__ = "cars"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    acquisition_date = Column(Date, nullable=False)
    initial_mileage = Column(Float, nullable=False, default=0)
    service_interval_miles = Column(Float, nullable=True)
    car_image_url = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    mileage_entries = relationship(
        "CarMileageEntry", back_populates="car", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("initial_mileage >= 0", name="ck_cars_initial_mileage"),
    )


class CarMileageEntry(Base):
    """One day's odometer readings."""

    __tablename__ = "car_mileage_entries"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    car_id = Column(String(26), ForeignKey("cars.id", ondelete="CASCADE"), nullable=True)

    entry_date = Column(Date, nullable=False)
    start_mileage = Column(Float, nullable=False)
    end_mileage = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    car = relationship("Car", back_populates="mileage_entries")

    __table_args__ = (
        CheckConstraint("end_mileage >= start_mileage", name="ck_mileage_order"),
        Index("ix_mileage_user_date", "user_id", "entry_date"),
    )

    @property
    def miles_driven(self) -> float:
        return self.end_mileage - self.start_mileage
