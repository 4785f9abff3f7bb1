"""Tests for timezone validation and local time formatting."""

import re
from datetime import datetime

import pytest
import pytz

from core.exceptions import InvalidTimezoneError
from core.timezones import format_local_time, local_now, resolve_timezone

SUMMER = datetime(2024, 7, 1, 12, 0, tzinfo=pytz.utc)
WINTER = datetime(2024, 1, 15, 12, 0, tzinfo=pytz.utc)


class TestResolveTimezone:
    def test_valid_zone(self):
        assert resolve_timezone("Europe/London") == "Europe/London"

    def test_case_insensitive_returns_canonical(self):
        assert resolve_timezone("america/new_york") == "America/New_York"

    @pytest.mark.parametrize("name", ["Foo/Bar", "Mars/Olympus_Mons", "not a zone", ""])
    def test_invalid_zone(self, name):
        with pytest.raises(InvalidTimezoneError) as exc_info:
            resolve_timezone(name)
        assert exc_info.value.timezone == name


class TestFormatLocalTime:
    def test_london_follows_dst(self):
        assert format_local_time("Europe/London", SUMMER) == "13:00"
        assert format_local_time("Europe/London", WINTER) == "12:00"

    def test_half_hour_offset(self):
        assert format_local_time("Asia/Kolkata", WINTER) == "17:30"

    def test_zero_padded_24_hour(self):
        early = datetime(2024, 1, 15, 3, 5, tzinfo=pytz.utc)
        assert format_local_time("UTC", early) == "03:05"
        assert format_local_time("America/Los_Angeles", early) == "19:05"

    def test_naive_now_is_treated_as_utc(self):
        assert format_local_time("Asia/Tokyo", datetime(2024, 1, 15, 12, 0)) == "21:00"

    def test_defaults_to_current_time(self):
        assert re.fullmatch(r"\d{2}:\d{2}", format_local_time("Europe/Berlin"))

    def test_local_now_is_aware(self):
        assert local_now("Europe/Paris", WINTER).utcoffset().total_seconds() == 3600
