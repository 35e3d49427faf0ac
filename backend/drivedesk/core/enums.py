# backend/drivedesk/core/enums.py
"""
Core enums for the DriveDesk backend.

Values match what the mobile client stores and displays, so several of them
are human-readable labels rather than upper-case constants.
"""

from enum import Enum


class ViewMode(str, Enum):
    """Calendar view modes offered by the schedule screen."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    AGENDA = "agenda"

    @classmethod
    def parse(cls, value: "str | ViewMode") -> "ViewMode":
        """
        Resolve a view name, falling back to AGENDA for anything unrecognised.

        The agenda policy has the widest fetch window, so an unknown view never
        under-fetches.
        """
        if isinstance(value, ViewMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.AGENDA


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class LessonType(str, Enum):
    DRIVING_LESSON = "Driving lesson"
    DRIVING_TEST = "Driving Test"
    PERSONAL = "Personal"


class LessonLength(int, Enum):
    """Supported lesson lengths in minutes."""

    SIXTY = 60
    NINETY = 90
    ONE_TWENTY = 120


class RepeatFrequency(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"

    @property
    def interval_weeks(self) -> int:
        return 2 if self is RepeatFrequency.FORTNIGHTLY else 1


class StudentLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class StatsTimeframe(str, Enum):
    LAST_6_MONTHS = "last6months"
    LAST_12_MONTHS = "last12months"
    ALL_TIME = "alltime"


class RevenueTimeframe(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class PackageStatusFilter(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    ALL = "all"


class SupportStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
