# backend/drivedesk/models/profile.py
"""
Instructor profile model.

The profile id is the user id issued by the hosted auth provider; the row is
created lazily the first time an authenticated instructor calls the API.
"""

from sqlalchemy import Boolean, Column, DateTime, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Profile(Base):
    """Instructor-level settings used across the dashboard and calendar."""

    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    timezone = Column(String(64), nullable=False, default="Europe/London")
    is_admin = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    students = relationship("Student", back_populates="owner", cascade="all, delete-orphan")

    @property
    def display_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else "Instructor"

    def __repr__(self) -> str:
        return f"<Profile {self.id} tz={self.timezone}>"
