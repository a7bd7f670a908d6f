"""
Health log service.
Create-or-replace of a user's daily log and read access by day and range.
"""
import logging
from datetime import date
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from healthgame.models import DailyHealthLog
from healthgame.repositories.health_log_repository import HealthLogRepository
from healthgame.schemas import HealthLogSync
from healthgame.exceptions import HealthLogNotFoundException, ValidationException

logger = logging.getLogger("healthgame.health")

# Nested request sections -> flat column names
_NESTED_FIELDS = {
    "sleep": {"duration": "sleep_duration", "quality": "sleep_quality"},
    "nutrition": {"calories_consumed": "calories_consumed", "water_intake": "water_intake"},
    "mood": {"mood_level": "mood_level", "stress_level": "stress_level"},
}

# Columns with a default that a null in the payload must not overwrite
_NON_NULLABLE_FIELDS = {"steps", "distance", "calories_burned", "source"}


class HealthService:
    """Service for daily health logs"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = HealthLogRepository()

    @staticmethod
    def _flatten(data: HealthLogSync) -> dict:
        """
        Map the fields the client actually sent onto column names.

        A nested section replaces the whole stored section: inner fields left
        out of the section are cleared. Null activity totals are ignored so
        the stored value (or its default) is kept.
        """
        sent = data.model_dump(exclude_unset=True, exclude={"date"})
        values = {}
        for key, value in sent.items():
            if key in _NESTED_FIELDS:
                section = value or {}
                for inner_key, column in _NESTED_FIELDS[key].items():
                    values[column] = section.get(inner_key)
            elif value is None and key in _NON_NULLABLE_FIELDS:
                continue
            else:
                values[key] = value
        return values

    def upsert_log(self, user_id: int, data: HealthLogSync) -> DailyHealthLog:
        """
        Create the (user, date) log or overwrite the fields sent on the existing one.

        Args:
            user_id: Log owner
            data: Validated request payload

        Returns:
            The stored log
        """
        values = self._flatten(data)
        log = self.repo.get_by_user_and_date(self.db, user_id, data.date)

        if log:
            for column, value in values.items():
                setattr(log, column, value)
            log = self.repo.update(self.db, log)
            logger.info(f"Updated health log for user {user_id} on {data.date}")
            return log

        try:
            log = self.repo.create(self.db, DailyHealthLog(user_id=user_id, date=data.date, **values))
        except IntegrityError:
            # Concurrent insert for the same day; apply our values on top of it
            self.db.rollback()
            log = self.repo.get_by_user_and_date(self.db, user_id, data.date)
            if log is None:
                raise
            for column, value in values.items():
                setattr(log, column, value)
            log = self.repo.update(self.db, log)

        logger.info(f"Created health log for user {user_id} on {data.date}")
        return log

    def get_log(self, user_id: int, log_date: date) -> DailyHealthLog:
        """
        Get the log for a single day.

        Raises:
            HealthLogNotFoundException: If no log exists for that day
        """
        log = self.repo.get_by_user_and_date(self.db, user_id, log_date)
        if not log:
            raise HealthLogNotFoundException(user_id, log_date)
        return log

    def get_logs_in_range(self, user_id: int, start: date, end: date) -> List[DailyHealthLog]:
        """
        Get logs from start to end inclusive, oldest first.

        Raises:
            ValidationException: If start is after end
        """
        if start > end:
            raise ValidationException("start", "must not be after end")
        return self.repo.get_range(self.db, user_id, start, end)
