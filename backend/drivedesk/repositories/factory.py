# backend/drivedesk/repositories/factory.py
"""
Repository Factory for DriveDesk

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session

from .base_repository import BaseRepository

# Avoid circular imports
if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .car_repository import CarRepository, MileageRepository
    from .driving_test_repository import DrivingTestRepository
    from .prepaid_hours_repository import (
        PrePaidHoursRepository,
        PrePaidHoursTransactionRepository,
    )
    from .profile_repository import ProfileRepository
    from .progress_repository import ProgressEntryRepository, ProgressTopicRepository
    from .resource_repository import ResourceRepository
    from .student_repository import StudentRepository
    from .support_repository import SupportMessageRepository, SupportReplyRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation so services can accept injected
    repositories in tests and fall back to these in production.
    """

    @staticmethod
    def create_base_repository(db: Session, model: Any) -> BaseRepository:
        """Create a generic base repository for any model."""
        return BaseRepository(db, model)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_student_repository(db: Session) -> "StudentRepository":
        from .student_repository import StudentRepository

        return StudentRepository(db)

    @staticmethod
    def create_profile_repository(db: Session) -> "ProfileRepository":
        from .profile_repository import ProfileRepository

        return ProfileRepository(db)

    @staticmethod
    def create_car_repository(db: Session) -> "CarRepository":
        from .car_repository import CarRepository

        return CarRepository(db)

    @staticmethod
    def create_mileage_repository(db: Session) -> "MileageRepository":
        from .car_repository import MileageRepository

        return MileageRepository(db)

    @staticmethod
    def create_progress_topic_repository(db: Session) -> "ProgressTopicRepository":
        from .progress_repository import ProgressTopicRepository

        return ProgressTopicRepository(db)

    @staticmethod
    def create_progress_entry_repository(db: Session) -> "ProgressEntryRepository":
        from .progress_repository import ProgressEntryRepository

        return ProgressEntryRepository(db)

    @staticmethod
    def create_driving_test_repository(db: Session) -> "DrivingTestRepository":
        from .driving_test_repository import DrivingTestRepository

        return DrivingTestRepository(db)

    @staticmethod
    def create_prepaid_hours_repository(db: Session) -> "PrePaidHoursRepository":
        from .prepaid_hours_repository import PrePaidHoursRepository

        return PrePaidHoursRepository(db)

    @staticmethod
    def create_prepaid_transaction_repository(
        db: Session,
    ) -> "PrePaidHoursTransactionRepository":
        from .prepaid_hours_repository import PrePaidHoursTransactionRepository

        return PrePaidHoursTransactionRepository(db)

    @staticmethod
    def create_resource_repository(db: Session) -> "ResourceRepository":
        from .resource_repository import ResourceRepository

        return ResourceRepository(db)

    @staticmethod
    def create_support_message_repository(db: Session) -> "SupportMessageRepository":
        from .support_repository import SupportMessageRepository

        return SupportMessageRepository(db)

    @staticmethod
    def create_support_reply_repository(db: Session) -> "SupportReplyRepository":
        from .support_repository import SupportReplyRepository

        return SupportReplyRepository(db)
