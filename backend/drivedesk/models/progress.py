# backend/drivedesk/models/progress.py
"""Progress topics (syllabus items) and per-student ratings against them."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class ProgressTopic(Base):
    __tablename__ = "progress_topics"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(200), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    entries = relationship(
        "StudentProgressEntry", back_populates="topic", cascade="all, delete-orphan"
    )

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_progress_topic_user_name"),)


class StudentProgressEntry(Base):
    __tablename__ = "student_progress_entries"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    topic_id = Column(
        String(26), ForeignKey("progress_topics.id", ondelete="CASCADE"), nullable=False
    )

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    targets = Column(Text, nullable=True)
    entry_date = Column(Date, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="progress_entries")
    topic = relationship("ProgressTopic", back_populates="entries")

    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_progress_rating"),)

    @property
    def topic_name(self) -> str:
        return self.topic.name if self.topic is not None else ""
