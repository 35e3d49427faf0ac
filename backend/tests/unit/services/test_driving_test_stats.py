"""Unit tests for driving test statistics."""

from datetime import date
from types import SimpleNamespace

import pytest

from drivedesk.core.enums import StatsTimeframe
from drivedesk.services.driving_test_stats import compute_test_statistics, timeframe_cutoff

TODAY = date(2025, 6, 15)


def _test(student_id, name, test_date, passed, driving=0, serious=0, examiner=False):
    return SimpleNamespace(
        student_id=student_id,
        student_name=name,
        test_date=test_date,
        passed=passed,
        driving_faults=driving,
        serious_faults=serious,
        examiner_action=examiner,
    )


def test_no_tests_returns_none():
    assert compute_test_statistics([], StatsTimeframe.ALL_TIME, TODAY) is None


def test_aggregates_rates_and_averages():
    tests = [
        _test("s1", "Alex", date(2025, 5, 1), True, driving=4),
        _test("s1", "Alex", date(2025, 3, 1), False, driving=8, serious=1, examiner=True),
        _test("s2", "Bea", date(2025, 4, 1), True, driving=3),
        _test("s3", "Cal", date(2025, 2, 1), False, driving=5, serious=1),
    ]

    stats = compute_test_statistics(tests, StatsTimeframe.ALL_TIME, TODAY)

    assert stats.total == 4
    assert stats.pass_rate == pytest.approx(50.0)
    assert stats.avg_driving_faults == pytest.approx(5.0)
    assert stats.avg_serious_faults == pytest.approx(0.5)
    assert stats.examiner_action_rate == pytest.approx(25.0)
    assert [s.student_id for s in stats.student_stats] == ["s1", "s2", "s3"]
    alex = stats.student_stats[0]
    assert (alex.total_tests, alex.pass_count) == (2, 1)
    assert alex.avg_driving_faults == pytest.approx(6.0)


def test_timeframe_excludes_older_tests():
    tests = [
        _test("s1", "Alex", date(2025, 5, 1), True),
        _test("s2", "Bea", date(2024, 11, 1), False),
    ]

    stats = compute_test_statistics(tests, StatsTimeframe.LAST_6_MONTHS, TODAY)

    assert stats.total == 1
    assert stats.pass_rate == pytest.approx(100.0)


def test_cutoff_day_itself_is_excluded():
    cutoff = timeframe_cutoff(StatsTimeframe.LAST_6_MONTHS, TODAY)
    assert cutoff == date(2024, 12, 15)
    tests = [_test("s1", "Alex", cutoff, True)]
    assert compute_test_statistics(tests, StatsTimeframe.LAST_6_MONTHS, TODAY) is None


def test_all_time_has_no_cutoff():
    assert timeframe_cutoff(StatsTimeframe.ALL_TIME, TODAY) is None
    assert timeframe_cutoff(StatsTimeframe.LAST_12_MONTHS, TODAY) == date(2024, 6, 15)


def test_accepts_timeframe_value_string():
    tests = [_test("s1", "Alex", date(2025, 5, 1), True)]
    stats = compute_test_statistics(tests, StatsTimeframe.LAST_12_MONTHS.value, TODAY)
    assert stats.timeframe == StatsTimeframe.LAST_12_MONTHS.value
