# backend/drivedesk/models/driving_test.py
"""Recorded outcomes of practical driving tests."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class DrivingTest(Base):
    __tablename__ = "driving_tests"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    test_date = Column(Date, nullable=False, index=True)
    passed = Column(Boolean, nullable=False, default=False)
    driving_faults = Column(Integer, nullable=False, default=0)
    serious_faults = Column(Integer, nullable=False, default=0)
    examiner_action = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="driving_tests")

    __table_args__ = (
        CheckConstraint("driving_faults >= 0", name="ck_driving_tests_driving_faults"),
        CheckConstraint("serious_faults >= 0", name="ck_driving_tests_serious_faults"),
    )

    @property
    def student_name(self) -> str:
        return self.student.name if self.student is not None else "Unknown Student"
