"""Tests for the relative-time description."""

import pytest

from ts_convert.relative import describe

NOW = 1705104000000
SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


class TestDescribe:
    def test_same_instant_is_past(self):
        assert describe(NOW, NOW) == "0 seconds ago"

    def test_singular_second(self):
        assert describe(NOW + SECOND, NOW) == "1 second in the future"
        assert describe(NOW - SECOND, NOW) == "1 second ago"

    def test_sub_second_difference_floors_to_zero(self):
        assert describe(NOW + 999, NOW) == "0 seconds in the future"

    def test_seconds_cutoff(self):
        assert describe(NOW - 89 * SECOND - 999, NOW) == "89 seconds ago"
        assert describe(NOW - 90 * SECOND, NOW) == "1 minute ago"

    def test_minutes_only(self):
        assert describe(NOW + 45 * MINUTE, NOW) == "45 minutes in the future"

    def test_seconds_are_dropped_above_cutoff(self):
        assert describe(NOW - 5 * MINUTE - 59 * SECOND, NOW) == "5 minutes ago"

    def test_hours_and_minutes(self):
        assert describe(NOW - 3 * HOUR - 12 * MINUTE, NOW) == "3 hours, 12 minutes ago"

    def test_whole_hours(self):
        assert describe(NOW - 2 * HOUR, NOW) == "2 hours ago"

    def test_singular_hour_and_minute(self):
        assert describe(NOW + HOUR + MINUTE, NOW) == "1 hour, 1 minute in the future"

    def test_days_and_hours_drop_minutes(self):
        moment = NOW - 2 * DAY - 3 * HOUR - 4 * MINUTE
        assert describe(moment, NOW) == "2 days, 3 hours ago"

    def test_days_and_minutes_when_no_hours(self):
        assert describe(NOW - DAY - 30 * MINUTE, NOW) == "1 day, 30 minutes ago"

    def test_whole_day(self):
        assert describe(NOW + DAY, NOW) == "1 day in the future"

    @pytest.mark.parametrize("delta", [1, 10 * SECOND, 5 * HOUR, 400 * DAY])
    def test_direction_is_symmetric(self, delta: int):
        future = describe(NOW + delta, NOW)
        past = describe(NOW - delta, NOW)
        assert future.endswith(" in the future")
        assert past.endswith(" ago")
        assert future.removesuffix(" in the future") == past.removesuffix(" ago")
