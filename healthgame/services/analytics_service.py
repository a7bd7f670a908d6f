"""
Analytics service.
Summaries over a user's most recent health logs and a day-by-day history
merged with the workouts logged on those days.
"""
import math
from typing import Dict, List, Tuple
from sqlalchemy.orm import Session

from healthgame.models import DailyHealthLog
from healthgame.repositories.health_log_repository import HealthLogRepository
from healthgame.repositories.workout_repository import WorkoutRepository
from healthgame.exceptions import ValidationException
from healthgame.constants import (
    ANALYTICS_WEEKLY_LOGS,
    ANALYTICS_MONTHLY_LOGS,
    HISTORY_MAX_DAYS,
)


class AnalyticsService:
    """Service for activity summaries and history"""

    def __init__(self, db: Session):
        self.db = db
        self.health_repo = HealthLogRepository()
        self.workout_repo = WorkoutRepository()

    @staticmethod
    def summarize(logs: List[DailyHealthLog]) -> Dict:
        """
        Totals and averages over a set of logs.

        Steps and calories burned are summed (missing values count as 0).
        Heart rate and sleep are averaged over the logs that report them;
        heart rate is rounded half up to a whole bpm, sleep to one decimal.
        """
        heart_rates = [log.heart_rate_avg for log in logs if log.heart_rate_avg is not None]
        sleeps = [log.sleep_duration for log in logs if log.sleep_duration is not None]

        avg_heart_rate = sum(heart_rates) / len(heart_rates) if heart_rates else 0
        avg_sleep = sum(sleeps) / len(sleeps) if sleeps else 0

        return {
            "total_steps": sum(log.steps or 0 for log in logs),
            "total_calories_burned": sum(log.calories_burned or 0 for log in logs),
            "avg_heart_rate": int(math.floor(avg_heart_rate + 0.5)),
            "avg_sleep": round(avg_sleep, 1),
        }

    def _recent(self, user_id: int, limit: int) -> Tuple[Dict, List[DailyHealthLog]]:
        # Newest `limit` logs, returned oldest first for charting
        logs = self.health_repo.get_latest(self.db, user_id, limit)
        logs.reverse()
        return self.summarize(logs), logs

    def weekly(self, user_id: int) -> Tuple[Dict, List[DailyHealthLog]]:
        """Summary over the last 7 logged days"""
        return self._recent(user_id, ANALYTICS_WEEKLY_LOGS)

    def monthly(self, user_id: int) -> Tuple[Dict, List[DailyHealthLog]]:
        """Summary over the last 30 logged days"""
        return self._recent(user_id, ANALYTICS_MONTHLY_LOGS)

    def history(self, user_id: int, days: int) -> List[Dict]:
        """
        The user's last `days` logs, newest first, each with the workouts
        logged on the same day.

        Raises:
            ValidationException: If days is outside 1..HISTORY_MAX_DAYS
        """
        if days < 1 or days > HISTORY_MAX_DAYS:
            raise ValidationException("days", f"must be between 1 and {HISTORY_MAX_DAYS}")

        logs = self.health_repo.get_latest(self.db, user_id, days)
        workouts = self.workout_repo.get_on_dates(self.db, user_id, [log.date for log in logs])

        workouts_by_day = {}
        for workout in workouts:
            workouts_by_day.setdefault(workout.date, []).append({
                "type": workout.type,
                "duration": workout.duration,
                "calories_burned": workout.calories_burned or 0,
            })

        return [
            {
                "date": log.date,
                "steps": log.steps or 0,
                "distance": round(log.distance or 0.0, 2),
                "calories": log.calories_burned or 0,
                "workouts": workouts_by_day.get(log.date, []),
            }
            for log in logs
        ]
