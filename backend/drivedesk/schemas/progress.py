# backend/drivedesk/schemas/progress.py
from datetime import date
from typing import List, Optional

from pydantic import Field

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class TopicCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=200)


class TopicResponse(StandardizedModel):
    id: str
    name: str


class ProgressEntryCreate(StrictRequestModel):
    student_id: str
    topic_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=5000)
    targets: Optional[str] = Field(None, max_length=5000)
    entry_date: date


class ProgressEntryUpdate(StrictRequestModel):
    topic_id: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=5000)
    targets: Optional[str] = Field(None, max_length=5000)
    entry_date: Optional[date] = None


class ProgressEntryResponse(StandardizedModel):
    id: str
    student_id: str
    topic_id: str
    topic_name: str
    rating: int
    comment: Optional[str] = None
    targets: Optional[str] = None
    entry_date: date


class TopicAverage(StandardizedModel):
    topic_id: str
    topic_name: str
    average_rating: float
    entry_count: int


class ProgressSummaryResponse(StandardizedModel):
    student_id: str
    student_name: str
    topics: List[TopicAverage]
    latest_targets: Optional[str] = None
    latest_targets_date: Optional[date] = None
