"""Unit tests for the per-student pre-paid hours overview."""

from types import SimpleNamespace

import pytest

from drivedesk.core.enums import PackageStatusFilter
from drivedesk.services.prepaid_hours_service import is_low_balance, summarize_packages_by_student


def _package(student_id, name, remaining):
    return SimpleNamespace(student_id=student_id, student_name=name, remaining_hours=remaining)


PACKAGES = [
    _package("s1", "Alex", 3.0),
    _package("s1", "Alex", 2.0),
    _package("s2", "Bea", 1.5),
    _package("s3", "Cal", 0.0),
]


def test_active_orders_by_remaining_hours():
    summaries = summarize_packages_by_student(PACKAGES, PackageStatusFilter.ACTIVE)

    assert [s.student_id for s in summaries] == ["s2", "s1"]
    assert summaries[1].total_remaining_hours == pytest.approx(5.0)
    assert len(summaries[1].packages) == 2


def test_low_balance_flag():
    summaries = summarize_packages_by_student(PACKAGES, "active", low_threshold=2.0)
    flags = {s.student_id: s.is_low for s in summaries}
    assert flags == {"s2": True, "s1": False}


def test_expired_keeps_students_with_no_hours():
    summaries = summarize_packages_by_student(PACKAGES, PackageStatusFilter.EXPIRED)
    assert [s.student_id for s in summaries] == ["s3"]
    assert summaries[0].is_low is False


def test_all_with_search():
    summaries = summarize_packages_by_student(PACKAGES, PackageStatusFilter.ALL, search=" be ")
    assert [s.student_name for s in summaries] == ["Bea"]


@pytest.mark.parametrize(
    "remaining,expected", [(0.0, False), (0.5, True), (2.0, True), (2.5, False)]
)
def test_is_low_balance(remaining, expected):
    assert is_low_balance(remaining, 2.0) is expected
