# backend/drivedesk/services/progress_service.py
"""
Progress Service for DriveDesk

Topics are the instructor's own syllabus; entries rate a student 1-5 on a
topic on a given day, with an optional comment and targets for next time.
"""

from dataclasses import dataclass
from datetime import date
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateTopicException
from ..models.progress import ProgressTopic, StudentProgressEntry
from ..repositories.factory import RepositoryFactory
from ..repositories.progress_repository import ProgressEntryRepository, ProgressTopicRepository
from ..repositories.student_repository import StudentRepository
from ..schemas.progress import ProgressEntryCreate, ProgressEntryUpdate, TopicCreate
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass
class TopicAverage:
    topic_id: str
    topic_name: str
    average_rating: float
    entry_count: int


@dataclass
class ProgressSummary:
    student_id: str
    student_name: str
    topics: List[TopicAverage]
    latest_targets: Optional[str]
    latest_targets_date: Optional[date]


def summarize_progress(
    student_id: str, student_name: str, entries: List[StudentProgressEntry]
) -> ProgressSummary:
    """Average rating per topic (by topic name) and the most recent non-empty targets."""
    totals: Dict[str, List[int]] = {}
    names: Dict[str, str] = {}
    for entry in entries:
        totals.setdefault(entry.topic_id, []).append(entry.rating)
        names[entry.topic_id] = entry.topic_name

    topics = sorted(
        (
            TopicAverage(
                topic_id=topic_id,
                topic_name=names[topic_id],
                average_rating=sum(ratings) / len(ratings),
                entry_count=len(ratings),
            )
            for topic_id, ratings in totals.items()
        ),
        key=lambda t: t.topic_name.lower(),
    )

    latest_targets: Optional[str] = None
    latest_date: Optional[date] = None
    for entry in sorted(entries, key=lambda e: e.entry_date, reverse=True):
        if entry.targets and entry.targets.strip():
            latest_targets = entry.targets
            latest_date = entry.entry_date
            break

    return ProgressSummary(
        student_id=student_id,
        student_name=student_name,
        topics=topics,
        latest_targets=latest_targets,
        latest_targets_date=latest_date,
    )


class ProgressService(BaseService):
    def __init__(
        self,
        db: Session,
        topic_repository: Optional[ProgressTopicRepository] = None,
        entry_repository: Optional[ProgressEntryRepository] = None,
        student_repository: Optional[StudentRepository] = None,
    ):
        super().__init__(db)
        self.topic_repository = (
            topic_repository or RepositoryFactory.create_progress_topic_repository(db)
        )
        self.entry_repository = (
            entry_repository or RepositoryFactory.create_progress_entry_repository(db)
        )
        self.student_repository = (
            student_repository or RepositoryFactory.create_student_repository(db)
        )

    # Topics

    def list_topics(self, user_id: str) -> List[ProgressTopic]:
        return self.topic_repository.list_for_user(user_id, ProgressTopic.name)

    def get_topic(self, user_id: str, topic_id: str) -> ProgressTopic:
        return self._require_owned(self.topic_repository, topic_id, user_id, "Topic")

    def _ensure_unique_name(self, user_id: str, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.topic_repository.find_by_name(user_id, name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateTopicException(name)

    @BaseService.measure_operation("create_topic")
    def create_topic(self, user_id: str, data: TopicCreate) -> ProgressTopic:
        self._ensure_unique_name(user_id, data.name)
        with self.transaction():
            topic = self.topic_repository.create(user_id=user_id, name=data.name)
        return topic

    def rename_topic(self, user_id: str, topic_id: str, data: TopicCreate) -> ProgressTopic:
        topic = self.get_topic(user_id, topic_id)
        self._ensure_unique_name(user_id, data.name, exclude_id=topic.id)
        with self.transaction():
            self.topic_repository.update_entity(topic, name=data.name)
        return topic

    def delete_topic(self, user_id: str, topic_id: str) -> None:
        """Delete a topic along with every rating recorded against it."""
        topic = self.get_topic(user_id, topic_id)
        self.log_operation("delete_topic", topic_id=topic_id)
        with self.transaction():
            self.topic_repository.delete_entity(topic)

    # Entries

    def list_entries(self, user_id: str, student_id: str) -> List[StudentProgressEntry]:
        self._require_owned(self.student_repository, student_id, user_id, "Student")
        return self.entry_repository.for_student(user_id, student_id)

    def get_entry(self, user_id: str, entry_id: str) -> StudentProgressEntry:
        return self._require_owned(self.entry_repository, entry_id, user_id, "Progress entry")

    @BaseService.measure_operation("create_progress_entry")
    def create_entry(self, user_id: str, data: ProgressEntryCreate) -> StudentProgressEntry:
        self._require_owned(self.student_repository, data.student_id, user_id, "Student")
        self.get_topic(user_id, data.topic_id)
        with self.transaction():
            entry = self.entry_repository.create(user_id=user_id, **data.model_dump())
        return entry

    def update_entry(
        self, user_id: str, entry_id: str, data: ProgressEntryUpdate
    ) -> StudentProgressEntry:
        entry = self.get_entry(user_id, entry_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in ("comment", "targets")
        }
        if "topic_id" in changes:
            self.get_topic(user_id, changes["topic_id"])
        with self.transaction():
            self.entry_repository.update_entity(entry, **changes)
        return entry

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        entry = self.get_entry(user_id, entry_id)
        with self.transaction():
            self.entry_repository.delete_entity(entry)

    def get_summary(self, user_id: str, student_id: str) -> ProgressSummary:
        student = self._require_owned(self.student_repository, student_id, user_id, "Student")
        entries = self.entry_repository.for_student(user_id, student_id)
        return summarize_progress(student.id, student.name, entries)
