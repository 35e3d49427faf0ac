# backend/drivedesk/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
All new endpoints should be added here.
"""

from . import (
    bookings,
    calendar,
    cars,
    dashboard,
    driving_tests,
    mileage,
    prepaid_hours,
    profile,
    progress,
    prometheus,
    resources,
    students,
    support,
)

__all__ = [
    "bookings",
    "calendar",
    "cars",
    "dashboard",
    "driving_tests",
    "mileage",
    "prepaid_hours",
    "profile",
    "progress",
    "prometheus",
    "resources",
    "students",
    "support",
]
