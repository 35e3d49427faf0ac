# backend/drivedesk/models/prepaid_hours.py
"""
Pre-paid lesson hour packages.

A package is bought up front; completing a booking draws its duration down
from the student's packages and leaves a transaction row per package touched,
so the deduction can be reversed if the booking is un-completed.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class PrePaidHours(Base):
    __tablename__ = "pre_paid_hours"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    package_hours = Column(Float, nullable=False)
    remaining_hours = Column(Float, nullable=False)
    amount_paid = Column(Numeric(10, 2), nullable=True)
    purchase_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="prepaid_packages")
    transactions = relationship(
        "PrePaidHoursTransaction",
        back_populates="package",
        cascade="all, delete-orphan",
        order_by="PrePaidHoursTransaction.transaction_date",
    )

    @property
    def student_name(self) -> str:
        return self.student.name if self.student is not None else "Unknown Student"


class PrePaidHoursTransaction(Base):
    __tablename__ = "pre_paid_hours_transactions"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    pre_paid_hours_id = Column(
        String(26), ForeignKey("pre_paid_hours.id", ondelete="CASCADE"), nullable=False
    )
    booking_id = Column(String(26), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)

    hours_deducted = Column(Float, nullable=False)
    transaction_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    package = relationship("PrePaidHours", back_populates="transactions")
    booking = relationship("Booking", back_populates="prepaid_transactions")

    @property
    def booking_title(self) -> Optional[str]:
        return self.booking.title if self.booking is not None else None

    @property
    def booking_start(self) -> Optional[datetime]:
        return self.booking.start_time if self.booking is not None else None
