"""Tests for timezone resolution, detection and formatting."""

import logging
import zoneinfo
from datetime import datetime, timedelta

import pytest

from ts_convert import timezone as tz_module
from ts_convert.aliases import ALIASES
from ts_convert.errors import AmbiguousTimezoneError, InvalidDateError, UnknownTimezoneError
from ts_convert.timezone import (
    MAX_CANDIDATES,
    _zone_from_localtime,
    detect_local_timezone,
    format_local_time,
    known_timezones,
    list_timezones,
    normalize_name,
    resolve_timezone,
    timezone_offset,
)

# ---------------------------------------------------------------------------
# Alias table
# ---------------------------------------------------------------------------


class TestAliases:
    def test_every_alias_points_to_a_known_zone(self):
        unknown = {key: value for key, value in ALIASES.items() if value not in known_timezones()}
        assert unknown == {}

    def test_keys_are_normalized(self):
        assert all(normalize_name(key) == key for key in ALIASES)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ALIASES["nowhere"] = "UTC"  # type: ignore[index]


# ---------------------------------------------------------------------------
# normalize_name
# ---------------------------------------------------------------------------


class TestNormalizeName:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("New_York", "new york"),
            ("  New-York ", "new york"),
            ("salt__lake   city", "salt lake city"),
            ("America/Los_Angeles", "america/los angeles"),
        ],
    )
    def test_normalize(self, raw: str, expected: str):
        assert normalize_name(raw) == expected


# ---------------------------------------------------------------------------
# resolve_timezone
# ---------------------------------------------------------------------------


class TestResolveTimezone:
    def test_city_alias(self):
        assert resolve_timezone("denver") == "America/Denver"

    @pytest.mark.parametrize("raw", ["New York", "new_york", "NEW-YORK", "  nyc  "])
    def test_alias_normalization(self, raw: str):
        assert resolve_timezone(raw) == "America/New_York"

    def test_country_alias(self):
        assert resolve_timezone("Japan") == "Asia/Tokyo"

    def test_alias_beats_valid_identifier(self):
        # "EST" is itself a zone, but the alias table wins
        assert "EST" in known_timezones()
        assert resolve_timezone("EST") == "America/New_York"

    def test_identifier_returned_unchanged(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.DEBUG, logger="ts_convert.timezone")
        assert resolve_timezone("America/Denver") == "America/Denver"
        assert "exact identifier" in caplog.text

    def test_identifier_with_offset(self):
        assert resolve_timezone("Etc/GMT+5") == "Etc/GMT+5"

    def test_fuzzy_single_match(self):
        assert resolve_timezone("reykjavik") == "Atlantic/Reykjavik"

    def test_fuzzy_is_case_insensitive(self):
        assert resolve_timezone("Vladivostok") == "Asia/Vladivostok"

    def test_fuzzy_words_in_any_order(self):
        assert resolve_timezone("moresby port") == "Pacific/Port_Moresby"

    def test_fuzzy_match_that_is_an_alias_is_remapped(self):
        # "hs" only matches the HST identifier, whose alias is Honolulu
        assert "HST" in known_timezones()
        assert resolve_timezone("hs") == "Pacific/Honolulu"

    def test_fuzzy_narrowed_by_exact_segment(self):
        # Also matches America/Bahia_Banderas
        assert resolve_timezone("bahia") == "America/Bahia"

    def test_ambiguous(self):
        with pytest.raises(AmbiguousTimezoneError) as exc_info:
            resolve_timezone("san")
        err = exc_info.value
        assert 2 <= len(err.candidates) <= MAX_CANDIDATES
        assert err.candidates == sorted(err.candidates)
        assert all("san" in normalize_name(name) for name in err.candidates)
        assert "Ambiguous timezone 'san'" in str(err)

    def test_ambiguous_reports_remaining_count(self):
        with pytest.raises(AmbiguousTimezoneError) as exc_info:
            resolve_timezone("america")
        err = exc_info.value
        assert len(err.candidates) == MAX_CANDIDATES
        assert err.remaining > 0
        assert f"(and {err.remaining} more)" in str(err)

    @pytest.mark.parametrize("raw", ["xyzzy", "Mars/Olympus_Mons", "", "   "])
    def test_unknown(self, raw: str):
        with pytest.raises(UnknownTimezoneError):
            resolve_timezone(raw)

    @pytest.mark.parametrize(
        "raw",
        ["denver", "EST", "America/Denver", "reykjavik", "bahia", "new york", "utc", "Zulu", "tokyo"],
    )
    def test_idempotent(self, raw: str):
        resolved = resolve_timezone(raw)
        assert resolve_timezone(resolved) == resolved

    def test_resolved_names_load(self):
        for raw in ("denver", "gmt", "india", "moresby port"):
            zoneinfo.ZoneInfo(resolve_timezone(raw))


# ---------------------------------------------------------------------------
# detect_local_timezone
# ---------------------------------------------------------------------------


class TestDetectLocalTimezone:
    def test_from_tz_variable(self, host_tz):
        host_tz("America/Denver")
        assert detect_local_timezone() == "America/Denver"

    def test_tz_variable_with_colon_prefix(self, host_tz):
        host_tz(":Europe/Paris")
        assert detect_local_timezone() == "Europe/Paris"

    def test_falls_back_to_localtime_link(self, host_tz, monkeypatch: pytest.MonkeyPatch):
        host_tz("Not/A_Zone")
        monkeypatch.setattr(tz_module, "_zone_from_localtime", lambda: "Asia/Tokyo")
        assert detect_local_timezone() == "Asia/Tokyo"

    def test_falls_back_to_utc(self, host_tz, monkeypatch: pytest.MonkeyPatch):
        host_tz("Not/A_Zone")
        monkeypatch.setattr(tz_module, "_zone_from_localtime", lambda: None)
        assert detect_local_timezone() == "UTC"

    def test_zone_from_localtime_symlink(self, tmp_path):
        target = tmp_path / "zoneinfo" / "Europe" / "Paris"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"TZif")
        link = tmp_path / "localtime"
        link.symlink_to(target)
        assert _zone_from_localtime(str(link)) == "Europe/Paris"

    def test_zone_from_localtime_plain_file(self, tmp_path):
        plain = tmp_path / "localtime"
        plain.write_bytes(b"TZif")
        assert _zone_from_localtime(str(plain)) is None


# ---------------------------------------------------------------------------
# Offsets and formatting
# ---------------------------------------------------------------------------


class TestTimezoneOffset:
    def test_standard_time(self):
        zone = zoneinfo.ZoneInfo("America/New_York")
        assert timezone_offset(zone, datetime(2024, 1, 13, 9)) == timedelta(hours=-5)

    def test_daylight_time(self):
        zone = zoneinfo.ZoneInfo("America/New_York")
        assert timezone_offset(zone, datetime(2024, 7, 4, 9)) == timedelta(hours=-4)

    def test_half_hour_zone(self):
        zone = zoneinfo.ZoneInfo("Asia/Kolkata")
        assert timezone_offset(zone, datetime(2024, 1, 13)) == timedelta(hours=5, minutes=30)


class TestFormatLocalTime:
    def test_utc(self, utc):
        assert format_local_time(1705123456000, utc) == "Jan 13, 2024, 05:24:16 AM UTC"

    def test_previous_day_in_denver(self, denver):
        assert format_local_time(1705123456000, denver) == "Jan 12, 2024, 10:24:16 PM MST"


class TestFormatLocalTimeRange:
    def test_overflow_is_invalid_date(self):
        with pytest.raises(InvalidDateError):
            format_local_time(253402297199000, zoneinfo.ZoneInfo("Asia/Tokyo"))


class TestListTimezones:
    def test_sorted_and_complete(self):
        names = list_timezones()
        assert names == sorted(names)
        assert "America/Denver" in names
        assert "UTC" in names
