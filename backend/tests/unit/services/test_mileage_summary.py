"""Unit tests for weekly mileage grouping and service intervals."""

from datetime import date
from types import SimpleNamespace

import pytest

from drivedesk.services.car_service import miles_until_service, summarize_mileage_by_week


def _entry(entry_date, start, end, notes=None):
    return SimpleNamespace(
        entry_date=entry_date,
        start_mileage=start,
        end_mileage=end,
        notes=notes,
        miles_driven=end - start,
    )


class TestSummarizeMileageByWeek:
    def test_groups_monday_start_weeks_newest_first(self):
        entries = [
            _entry(date(2025, 1, 6), 1000, 1040),  # Monday
            _entry(date(2025, 1, 12), 1040, 1100),  # Sunday, same week
            _entry(date(2025, 1, 13), 1100, 1125),  # next Monday
        ]

        weeks = summarize_mileage_by_week(entries)

        assert [w.week_start for w in weeks] == [date(2025, 1, 13), date(2025, 1, 6)]
        assert weeks[1].week_end == date(2025, 1, 12)
        assert weeks[1].total_miles == pytest.approx(100)
        assert len(weeks[1].entries) == 2
        assert weeks[0].total_miles == pytest.approx(25)

    def test_search_filters_before_grouping(self):
        entries = [
            _entry(date(2025, 1, 6), 1000, 1040, notes="Motorway lesson"),
            _entry(date(2025, 1, 7), 1040, 1050, notes="Town driving"),
        ]

        weeks = summarize_mileage_by_week(entries, search="MOTORWAY")

        assert len(weeks) == 1
        assert weeks[0].total_miles == pytest.approx(40)

    def test_search_matches_readings_and_dates(self):
        entries = [_entry(date(2025, 3, 4), 2500, 2530)]
        assert summarize_mileage_by_week(entries, search="2530")
        assert summarize_mileage_by_week(entries, search="march")
        assert summarize_mileage_by_week(entries, search="2025-03-04")
        assert summarize_mileage_by_week(entries, search="zzz") == []

    def test_empty_log(self):
        assert summarize_mileage_by_week([]) == []


class TestMilesUntilService:
    def test_counts_from_acquisition_mileage(self):
        assert miles_until_service(12_500, 10_000, 6_000) == pytest.approx(3_500)

    def test_wraps_after_each_service(self):
        assert miles_until_service(17_000, 10_000, 6_000) == pytest.approx(5_000)

    @pytest.mark.parametrize("interval", [None, 0, -100])
    def test_no_interval_means_unknown(self, interval):
        assert miles_until_service(5_000, 0, interval) is None

    def test_reading_below_initial_is_clamped(self):
        assert miles_until_service(900, 1_000, 500) == pytest.approx(500)
