"""Unit tests for the calendar viewport and fetch-window calculations."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytest
import pytz

from drivedesk.core.enums import ViewMode
from drivedesk.services.calendar_viewport import (
    FetchWindow,
    add_months,
    compute_fetch_window,
    compute_viewport,
    displayed_range,
    events_in_week,
    viewport_source_window,
    week_bounds,
)


@dataclass
class Event:
    start_time: datetime
    end_time: datetime


MONDAY = date(2024, 6, 10)


class TestComputeViewport:
    def test_widens_for_early_and_late_bookings(self):
        events = [
            Event(datetime(2024, 6, 10, 7, 30), datetime(2024, 6, 10, 8, 30)),
            Event(datetime(2024, 6, 12, 19, 0), datetime(2024, 6, 12, 20, 0)),
        ]

        viewport = compute_viewport(MONDAY, ViewMode.WEEK, events)

        assert viewport.min_time == datetime(2024, 6, 10, 7, 0)
        assert viewport.max_time == datetime(2024, 6, 10, 20, 0)
        assert (viewport.min_hour, viewport.max_hour) == (7, 20)

    def test_no_bookings_gives_default_window(self):
        viewport = compute_viewport(MONDAY, "week", [])
        assert (viewport.min_hour, viewport.max_hour) == (9, 18)
        assert viewport.min_time.date() == MONDAY

    def test_end_with_minutes_rounds_up(self):
        events = [Event(datetime(2024, 6, 11, 18, 0), datetime(2024, 6, 11, 19, 30))]
        assert compute_viewport(MONDAY, "week", events).max_hour == 20

    def test_end_exactly_on_hour_keeps_that_hour(self):
        events = [Event(datetime(2024, 6, 11, 18, 0), datetime(2024, 6, 11, 19, 0))]
        assert compute_viewport(MONDAY, "week", events).max_hour == 19

    def test_end_just_past_default_max_rounds_up(self):
        events = [Event(datetime(2024, 6, 11, 17, 0), datetime(2024, 6, 11, 18, 15))]
        assert compute_viewport(MONDAY, "week", events).max_hour == 19

    def test_bookings_inside_default_window_do_not_narrow_it(self):
        events = [Event(datetime(2024, 6, 11, 11, 0), datetime(2024, 6, 11, 12, 0))]
        viewport = compute_viewport(MONDAY, "week", events)
        assert (viewport.min_hour, viewport.max_hour) == (9, 18)

    def test_late_evening_end_reaches_midnight(self):
        events = [Event(datetime(2024, 6, 11, 22, 0), datetime(2024, 6, 11, 23, 30))]
        viewport = compute_viewport(MONDAY, "week", events)
        assert viewport.max_hour == 24
        assert viewport.max_time == datetime(2024, 6, 11, 0, 0)

    def test_day_view_uses_whole_week_of_bookings(self):
        # Booking is on Friday but the day view is on Monday
        events = [Event(datetime(2024, 6, 14, 6, 0), datetime(2024, 6, 14, 7, 0))]
        viewport = compute_viewport(MONDAY, ViewMode.DAY, events)
        assert viewport.min_hour == 6
        assert viewport.min_time.date() == MONDAY

    def test_bookings_in_other_weeks_are_ignored(self):
        events = [Event(datetime(2024, 6, 17, 6, 0), datetime(2024, 6, 17, 21, 0))]
        viewport = compute_viewport(MONDAY, "week", events)
        assert (viewport.min_hour, viewport.max_hour) == (9, 18)

    @pytest.mark.parametrize("view_mode", ["month", "agenda", "timeline"])
    def test_views_without_time_axis_use_defaults(self, view_mode):
        events = [Event(datetime(2024, 6, 10, 6, 0), datetime(2024, 6, 10, 22, 30))]
        viewport = compute_viewport(MONDAY, view_mode, events)
        assert (viewport.min_hour, viewport.max_hour) == (9, 18)

    def test_booking_with_start_after_end_is_skipped(self):
        events = [Event(datetime(2024, 6, 11, 21, 0), datetime(2024, 6, 11, 6, 0))]
        viewport = compute_viewport(MONDAY, "week", events)
        assert (viewport.min_hour, viewport.max_hour) == (9, 18)

    def test_custom_default_window(self):
        viewport = compute_viewport(
            MONDAY, "week", [], default_min_hour=8, default_max_hour=17
        )
        assert (viewport.min_hour, viewport.max_hour) == (8, 17)

    def test_aware_times_are_read_in_given_zone(self):
        london = pytz.timezone("Europe/London")
        # 06:00 UTC is 07:00 in London during BST
        events = [
            Event(
                datetime(2024, 6, 11, 6, 0, tzinfo=pytz.utc),
                datetime(2024, 6, 11, 7, 0, tzinfo=pytz.utc),
            )
        ]
        assert compute_viewport(MONDAY, "week", events, tz=london).min_hour == 7

    def test_accepts_datetime_anchor(self):
        viewport = compute_viewport(datetime(2024, 6, 12, 15, 45), "week", [])
        assert viewport.min_time == datetime(2024, 6, 12, 9, 0)

    def test_repeated_calls_give_identical_viewports(self):
        events = [
            Event(datetime(2024, 6, 11, 6, 45), datetime(2024, 6, 11, 8, 0)),
            Event(datetime(2024, 6, 14, 18, 0), datetime(2024, 6, 14, 19, 15)),
        ]

        first = compute_viewport(MONDAY, ViewMode.WEEK, events)
        second = compute_viewport(MONDAY, ViewMode.WEEK, events)

        assert first == second
        assert (first.min_hour, first.max_hour) == (6, 20)

    @pytest.mark.parametrize("view_mode", [ViewMode.DAY, ViewMode.WEEK])
    @pytest.mark.parametrize(
        "start, end",
        [
            (datetime(2024, 6, 10, 6, 15), datetime(2024, 6, 10, 7, 0)),
            (datetime(2024, 6, 15, 5, 30), datetime(2024, 6, 15, 6, 30)),
            (datetime(2024, 6, 16, 21, 0), datetime(2024, 6, 16, 22, 45)),
            (datetime(2024, 6, 12, 17, 30), datetime(2024, 6, 12, 23, 30)),
            (datetime(2024, 6, 13, 7, 0), datetime(2024, 6, 13, 19, 0)),
        ],
    )
    def test_early_or_late_booking_never_narrows_the_window(self, view_mode, start, end):
        base = [
            Event(datetime(2024, 6, 10, 10, 0), datetime(2024, 6, 10, 11, 0)),
            Event(datetime(2024, 6, 12, 14, 0), datetime(2024, 6, 12, 15, 30)),
        ]
        before = compute_viewport(MONDAY, view_mode, base)

        after = compute_viewport(MONDAY, view_mode, base + [Event(start, end)])

        assert after.min_time <= after.max_time
        assert after.min_hour <= 9
        assert after.max_hour >= 18
        assert after.min_time <= before.min_time
        assert after.max_time >= before.max_time
        assert after.min_hour <= start.hour


class TestEventsInWeek:
    def test_week_edges_are_inclusive(self):
        week_start, week_end = week_bounds(MONDAY)
        events = [
            Event(week_start - timedelta(hours=1), week_start),
            Event(week_end, week_end + timedelta(hours=1)),
        ]
        assert len(events_in_week(MONDAY, events)) == 2

    def test_event_spanning_the_week_counts(self):
        events = [Event(datetime(2024, 6, 1, 9, 0), datetime(2024, 6, 30, 9, 0))]
        assert len(events_in_week(MONDAY, events)) == 1


class TestComputeFetchWindow:
    def test_day(self):
        window = compute_fetch_window(MONDAY, "day")
        assert window.start == datetime(2024, 6, 10, 0, 0)
        assert window.end == datetime(2024, 6, 10, 23, 59, 59, 999999)

    def test_week_starts_on_monday(self):
        window = compute_fetch_window(date(2024, 6, 13), ViewMode.WEEK)
        assert window.start == datetime(2024, 6, 10)
        assert window.end.date() == date(2024, 6, 16)

    def test_month(self):
        window = compute_fetch_window(date(2024, 6, 15), "month")
        assert window.start == datetime(2024, 6, 1)
        assert window.end == datetime(2024, 6, 30, 23, 59, 59, 999999)

    def test_agenda_covers_two_following_months(self):
        window = compute_fetch_window(date(2024, 6, 15), "agenda")
        assert window.start == datetime(2024, 6, 1)
        assert window.end.date() == date(2024, 8, 31)

    def test_unknown_view_behaves_like_agenda(self):
        assert compute_fetch_window(MONDAY, "unknown") == compute_fetch_window(MONDAY, "agenda")

    def test_agenda_crosses_year_end(self):
        window = compute_fetch_window(date(2024, 11, 30), "agenda", agenda_lookahead_months=2)
        assert window.end.date() == date(2025, 1, 31)

    def test_window_contains_displayed_range(self):
        for mode in ("day", "week", "month", "agenda"):
            window = compute_fetch_window(date(2024, 2, 29), mode)
            start, end = displayed_range(date(2024, 2, 29), mode)
            assert window.covers(start, end), mode


class TestHelpers:
    def test_add_months_clamps_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_fetch_window_overlap(self):
        window = FetchWindow(datetime(2024, 6, 10), datetime(2024, 6, 10, 23, 59))
        assert window.overlaps(datetime(2024, 6, 9, 23), datetime(2024, 6, 10, 1))
        assert not window.overlaps(datetime(2024, 6, 11), datetime(2024, 6, 11, 1))

    def test_viewport_source_window_is_the_week_for_day_and_week(self):
        for mode in ("day", "week"):
            window = viewport_source_window(date(2024, 6, 12), mode)
            assert window == FetchWindow(*week_bounds(date(2024, 6, 12)))
            assert window.covers(*displayed_range(date(2024, 6, 12), mode))

    def test_month_and_agenda_have_no_viewport_source(self):
        assert viewport_source_window(MONDAY, "month") is None
        assert viewport_source_window(MONDAY, "agenda") is None
