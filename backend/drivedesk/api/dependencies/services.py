# backend/drivedesk/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.booking_service import BookingService
from ...services.calendar_service import CalendarService
from ...services.car_service import CarService
from ...services.dashboard_service import DashboardService
from ...services.driving_test_service import DrivingTestService
from ...services.prepaid_hours_service import PrePaidHoursService
from ...services.profile_service import ProfileService
from ...services.progress_service import ProgressService
from ...services.resource_service import ResourceService
from ...services.student_service import StudentService
from ...services.support_service import SupportService
from .database import get_db


def get_calendar_service(db: Session = Depends(get_db)) -> CalendarService:
    return CalendarService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """
    Get booking service instance.

    Args:
        db: Database session

    Returns:
        BookingService instance
    """
    return BookingService(db)


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(db)


def get_car_service(db: Session = Depends(get_db)) -> CarService:
    return CarService(db)


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(db)


def get_driving_test_service(db: Session = Depends(get_db)) -> DrivingTestService:
    return DrivingTestService(db)


def get_prepaid_hours_service(db: Session = Depends(get_db)) -> PrePaidHoursService:
    return PrePaidHoursService(db)


def get_resource_service(db: Session = Depends(get_db)) -> ResourceService:
    return ResourceService(db)


def get_support_service(db: Session = Depends(get_db)) -> SupportService:
    return SupportService(db)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)
