"""
Database models for DriveDesk.

This module exports all SQLAlchemy models used in the application:
- Instructor profiles
- Students, bookings and driving tests
- Cars and the mileage log
- Progress topics and entries
- Pre-paid hour packages
- Resources and support messaging
"""

from .booking import Booking
from .car import Car, CarMileageEntry
from .driving_test import DrivingTest
from .prepaid_hours import PrePaidHours, PrePaidHoursTransaction
from .profile import Profile
from .progress import ProgressTopic, StudentProgressEntry
from .resource import Resource
from .student import Student
from .support import SupportMessage, SupportReply

__all__ = [
    "Booking",
    "Car",
    "CarMileageEntry",
    "DrivingTest",
    "PrePaidHours",
    "PrePaidHoursTransaction",
    "Profile",
    "ProgressTopic",
    "Resource",
    "Student",
    "StudentProgressEntry",
    "SupportMessage",
    "SupportReply",
]
