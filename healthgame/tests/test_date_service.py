"""
Tests for DateService.

Tests cover:
1. Today in the reference timezone
2. Timezone resolution fallback
"""
from datetime import date, datetime, timezone
from unittest.mock import patch
from zoneinfo import ZoneInfo

from healthgame.services.date_service import DateService


class TestGetToday:
    """Tests for get_today"""

    def test_uses_requested_timezone(self):
        """23:30 UTC is already the next day in Tokyo"""
        instant = datetime(2026, 1, 30, 23, 30, tzinfo=timezone.utc)

        with patch('healthgame.services.date_service.datetime') as mock_dt:
            mock_dt.now.side_effect = lambda tz=None: instant.astimezone(tz)
            assert DateService.get_today("UTC") == date(2026, 1, 30)
            assert DateService.get_today("Asia/Tokyo") == date(2026, 1, 31)

    def test_returns_date_not_datetime(self):
        assert type(DateService.get_today("UTC")) is date


class TestGetTimezone:
    """Tests for get_timezone"""

    def test_utc_shortcut(self):
        assert DateService.get_timezone("utc") is timezone.utc

    def test_named_zone(self):
        assert DateService.get_timezone("Europe/Berlin") == ZoneInfo("Europe/Berlin")

    def test_unknown_zone_falls_back_to_utc(self):
        assert DateService.get_timezone("Mars/Olympus_Mons") is timezone.utc
