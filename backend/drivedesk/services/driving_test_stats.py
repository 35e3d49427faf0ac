# backend/drivedesk/services/driving_test_stats.py
"""Pass-rate and fault statistics over recorded driving tests."""

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Dict, Iterable, List, Optional, Union

from ..core.enums import StatsTimeframe
from .calendar_viewport import add_months

logger = logging.getLogger(__name__)


@dataclass
class StudentDrivingTestStats:
    student_id: str
    student_name: str
    total_tests: int = 0
    pass_count: int = 0
    avg_driving_faults: float = 0.0
    avg_serious_faults: float = 0.0


@dataclass
class DrivingTestStatistics:
    timeframe: str
    total: int
    pass_rate: float
    avg_driving_faults: float
    avg_serious_faults: float
    examiner_action_rate: float
    student_stats: List[StudentDrivingTestStats] = field(default_factory=list)


def timeframe_cutoff(timeframe: StatsTimeframe, today: date) -> Optional[date]:
    if timeframe is StatsTimeframe.LAST_6_MONTHS:
        return add_months(today, -6)
    if timeframe is StatsTimeframe.LAST_12_MONTHS:
        return add_months(today, -12)
    return None


def compute_test_statistics(
    tests: Iterable[object],
    timeframe: Union[StatsTimeframe, str] = StatsTimeframe.ALL_TIME,
    today: Optional[date] = None,
) -> Optional[DrivingTestStatistics]:
    """
    Aggregate driving-test outcomes.

    Only tests dated strictly after the timeframe cutoff count. Rates are
    percentages. Per-student rows are ordered by number of tests, most first.

    Returns:
        DrivingTestStatistics, or None when no test falls inside the timeframe
    """
    frame = StatsTimeframe(timeframe)
    cutoff = timeframe_cutoff(frame, today or date.today())
    selected = [t for t in tests if cutoff is None or t.test_date > cutoff]
    if not selected:
        return None

    total = len(selected)
    passed = sum(1 for t in selected if t.passed)
    driving = sum(t.driving_faults for t in selected)
    serious = sum(t.serious_faults for t in selected)
    examiner = sum(1 for t in selected if t.examiner_action)

    per_student: Dict[str, StudentDrivingTestStats] = {}
    for t in selected:
        stats = per_student.get(t.student_id)
        if stats is None:
            stats = per_student[t.student_id] = StudentDrivingTestStats(
                student_id=t.student_id,
                student_name=getattr(t, "student_name", None) or "Unknown Student",
            )
        stats.total_tests += 1
        stats.pass_count += 1 if t.passed else 0
        stats.avg_driving_faults += t.driving_faults
        stats.avg_serious_faults += t.serious_faults

    for stats in per_student.values():
        stats.avg_driving_faults /= stats.total_tests
        stats.avg_serious_faults /= stats.total_tests

    # sorted() is stable, so ties keep first-seen order
    student_stats = sorted(per_student.values(), key=lambda s: s.total_tests, reverse=True)

    return DrivingTestStatistics(
        timeframe=frame.value,
        total=total,
        pass_rate=passed / total * 100,
        avg_driving_faults=driving / total,
        avg_serious_faults=serious / total,
        examiner_action_rate=examiner / total * 100,
        student_stats=student_stats,
    )
