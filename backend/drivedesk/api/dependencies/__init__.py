# backend/drivedesk/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_profile, get_current_user_id, get_token_subject, require_admin
from .database import get_db
from .services import (
    get_booking_service,
    get_calendar_service,
    get_car_service,
    get_dashboard_service,
    get_driving_test_service,
    get_prepaid_hours_service,
    get_profile_service,
    get_progress_service,
    get_resource_service,
    get_student_service,
    get_support_service,
)

__all__ = [
    # Auth
    "get_current_user_id",
    "get_current_profile",
    "get_token_subject",
    "require_admin",
    # Database
    "get_db",
    # Services
    "get_booking_service",
    "get_calendar_service",
    "get_car_service",
    "get_dashboard_service",
    "get_driving_test_service",
    "get_prepaid_hours_service",
    "get_profile_service",
    "get_progress_service",
    "get_resource_service",
    "get_student_service",
    "get_support_service",
]
