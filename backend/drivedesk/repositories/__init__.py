# backend/drivedesk/repositories/__init__.py
"""
Repository Pattern Implementation for DriveDesk

This package provides the repository layer for data access,
separating business logic from database queries.

Usage:
    from drivedesk.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_booking_repository(db)
    bookings = repository.get_bookings_in_range(user_id, window_start, window_end)
"""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .car_repository import CarRepository, MileageRepository
from .driving_test_repository import DrivingTestRepository
from .factory import RepositoryFactory
from .prepaid_hours_repository import PrePaidHoursRepository, PrePaidHoursTransactionRepository
from .profile_repository import ProfileRepository
from .progress_repository import ProgressEntryRepository, ProgressTopicRepository
from .resource_repository import ResourceRepository
from .student_repository import StudentRepository
from .support_repository import SupportMessageRepository, SupportReplyRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "CarRepository",
    "DrivingTestRepository",
    "MileageRepository",
    "PrePaidHoursRepository",
    "PrePaidHoursTransactionRepository",
    "ProfileRepository",
    "ProgressEntryRepository",
    "ProgressTopicRepository",
    "RepositoryFactory",
    "ResourceRepository",
    "StudentRepository",
    "SupportMessageRepository",
    "SupportReplyRepository",
]
