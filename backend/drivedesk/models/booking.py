# backend/drivedesk/models/booking.py
"""
Booking model for DriveDesk.

A booking is a block of the instructor's calendar: a lesson with a student, a
driving test, or a personal appointment. Start and end are stored as UTC
instants; the calendar converts them to the instructor's zone for display.
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import BookingStatus, LessonType
from ..database import Base


class Booking(Base):
    """Calendar entry owned by an instructor, optionally linked to a student."""

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("students.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    lesson_type = Column(String(32), nullable=False, default=LessonType.DRIVING_LESSON.value)
    targets_for_next_session = Column(Text, nullable=True)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)

    status = Column(String(20), nullable=False, default=BookingStatus.SCHEDULED.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    student = relationship("Student", back_populates="bookings")
    prepaid_transactions = relationship(
        "PrePaidHoursTransaction", back_populates="booking", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_bookings_time_order"),
        Index("ix_bookings_user_start", "user_id", "start_time"),
    )

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def duration_hours(self) -> float:
        return self.duration.total_seconds() / 3600.0

    @property
    def student_name(self) -> Optional[str]:
        return self.student.name if self.student is not None else None

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.start_time}-{self.end_time} {self.status}>"
