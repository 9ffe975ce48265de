"""Shared fixtures for tests."""

import zoneinfo

import pytest

# 2024-01-13T00:00:00Z, the reference "now" used throughout the tests.
NOW_MS = 1705104000000

# Epoch milliseconds for a few fixed instants used by several test modules.
JAN_13_0524_UTC_MS = 1705123456000  # 2024-01-13T05:24:16Z
JAN_13_1030_UTC_MS = 1705141800000  # 2024-01-13T10:30:00Z

HOUR_MS = 3600 * 1000
DAY_MS = 24 * HOUR_MS


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def utc() -> zoneinfo.ZoneInfo:
    return zoneinfo.ZoneInfo("UTC")


@pytest.fixture
def denver() -> zoneinfo.ZoneInfo:
    return zoneinfo.ZoneInfo("America/Denver")


@pytest.fixture
def host_tz(monkeypatch: pytest.MonkeyPatch):
    """Pin the detected host timezone through the TZ variable."""

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)

    return _set
