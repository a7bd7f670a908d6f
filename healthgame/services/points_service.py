"""
Points calculation service.
Maps one day's health log to a point award using fixed tiered rules.
Pure: reads nothing but the log it is given.
"""
from healthgame.models import DailyHealthLog
from healthgame.schemas import PointsBreakdown
from healthgame.constants import (
    POINTS_BASE,
    STEPS_TIER_1_THRESHOLD,
    STEPS_TIER_1_POINTS,
    STEPS_TIER_2_THRESHOLD,
    STEPS_TIER_2_POINTS,
    CALORIES_BURNED_THRESHOLD,
    CALORIES_BURNED_POINTS,
    SLEEP_HOURS_THRESHOLD,
    SLEEP_POINTS,
    POINTS_PER_LEVEL,
)


class PointsService:
    """Service for daily points calculation"""

    @staticmethod
    def calculate_breakdown(log: DailyHealthLog) -> PointsBreakdown:
        """
        Calculate per-rule points for a day's health log.

        Rules (each evaluated independently):
        - Base participation: +10 whenever a log exists
        - Steps >= 8000: +20, steps >= 12000: another +10
        - Calories burned >= 400: +20
        - Sleep duration >= 7 hours: +20

        Missing values count as not meeting the threshold.

        Args:
            log: Health log for the day

        Returns:
            PointsBreakdown (total is between 10 and 80)
        """
        steps = log.steps or 0
        calories_burned = log.calories_burned or 0
        sleep_duration = log.sleep_duration or 0

        steps_points = 0
        if steps >= STEPS_TIER_1_THRESHOLD:
            steps_points += STEPS_TIER_1_POINTS
        if steps >= STEPS_TIER_2_THRESHOLD:
            steps_points += STEPS_TIER_2_POINTS

        calories_points = CALORIES_BURNED_POINTS if calories_burned >= CALORIES_BURNED_THRESHOLD else 0
        sleep_points = SLEEP_POINTS if sleep_duration >= SLEEP_HOURS_THRESHOLD else 0

        return PointsBreakdown(
            base=POINTS_BASE,
            steps=steps_points,
            calories=calories_points,
            sleep=sleep_points,
        )

    @staticmethod
    def compute_daily_points(log: DailyHealthLog) -> int:
        """Total award for a day's health log"""
        return PointsService.calculate_breakdown(log).total

    @staticmethod
    def calculate_level(points: int) -> int:
        """Level derived from lifetime points: one level per 100 points, starting at 1"""
        return max(points, 0) // POINTS_PER_LEVEL + 1
