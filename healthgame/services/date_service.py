"""
Date calculation service.
Resolves the current calendar day in the reference timezone.
"""
from datetime import datetime, date, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from healthgame.constants import REFERENCE_TIMEZONE

logger = logging.getLogger("healthgame.dates")


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def get_timezone(tz_name: Optional[str] = None) -> tzinfo:
        """
        Resolve a timezone name, falling back to UTC for unknown names.

        Args:
            tz_name: IANA timezone name (defaults to HEALTHGAME_TIMEZONE)

        Returns:
            tzinfo instance
        """
        name = tz_name or REFERENCE_TIMEZONE
        if name.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{name}', using UTC")
            return timezone.utc

    @staticmethod
    def get_today(tz_name: Optional[str] = None) -> date:
        """
        Get the current calendar day in the reference timezone.

        Core services never call this themselves; routes and jobs resolve
        "today" here and pass it down explicitly.
        """
        now = datetime.now(DateService.get_timezone(tz_name))
        return now.date()

