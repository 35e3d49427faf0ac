# backend/drivedesk/models/student.py
"""Student model: learners managed by a single instructor."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import StudentLevel
from ..database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(200), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    driving_license_number = Column(String(32), nullable=True)
    phone_number = Column(String(32), nullable=True)
    full_address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=StudentLevel.BEGINNER.value)
    # Uploaded to the hosted file store by the client; only the URL lives here.
    document_url = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("Profile", back_populates="students")
    bookings = relationship("Booking", back_populates="student")
    driving_tests = relationship(
        "DrivingTest", back_populates="student", cascade="all, delete-orphan"
    )
    progress_entries = relationship(
        "StudentProgressEntry", back_populates="student", cascade="all, delete-orphan"
    )
    prepaid_packages = relationship(
        "PrePaidHours", back_populates="student", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_students_user_name", "user_id", "name"),)

    def __repr__(self) -> str:
        return f"<Student {self.id} {self.name!r}>"
