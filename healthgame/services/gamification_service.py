"""
Gamification service.
Reconciles the daily points award into a user's profile, serves the
leaderboard, and handles reset and day rollover.
"""
import logging
from datetime import date
from typing import List, Tuple
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from healthgame.models import GamificationProfile
from healthgame.repositories.gamification_repository import GamificationProfileRepository
from healthgame.repositories.health_log_repository import HealthLogRepository
from healthgame.services.points_service import PointsService
from healthgame.schemas import SyncResult
from healthgame.exceptions import GamificationSyncException, DatabaseException
from healthgame.constants import (
    SYNC_MAX_ATTEMPTS,
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_MAX_LIMIT,
)

logger = logging.getLogger("healthgame.gamification")


class GamificationService:
    """Service for gamification profile management"""

    def __init__(self, db: Session):
        self.db = db
        self.profile_repo = GamificationProfileRepository()
        self.health_repo = HealthLogRepository()
        self.points_service = PointsService()

    def get_or_create_profile(self, user_id: int) -> Tuple[GamificationProfile, bool]:
        """
        Get the user's profile, creating a zeroed one if none exists.

        Returns:
            (profile, created) - created is True only when this call inserted it
        """
        profile = self.profile_repo.get_by_user(self.db, user_id)
        if profile:
            return profile, False

        try:
            profile = self.profile_repo.create(self.db, user_id)
        except IntegrityError:
            # Lost a race with a concurrent create for the same user
            self.db.rollback()
            profile = self.profile_repo.get_by_user(self.db, user_id)
            if profile is None:
                raise
            return profile, False

        logger.info(f"Created gamification profile for user {user_id}")
        return profile, True

    def sync(self, user_id: int, today: date) -> SyncResult:
        """
        Recompute today's award and fold it into the profile.

        Repeated syncs on the same day replace the day's award instead of
        adding to it. Concurrent writers are detected by the profile's
        version column; the whole read-compute-write is retried.

        Args:
            user_id: Profile owner
            today: Current calendar day in the reference timezone

        Returns:
            SyncResult (has_activity=False when there is no log for today)

        Raises:
            GamificationSyncException: If the profile could not be persisted
        """
        for attempt in range(1, SYNC_MAX_ATTEMPTS + 1):
            try:
                return self._sync_once(user_id, today)
            except StaleDataError:
                self.db.rollback()
                logger.warning(
                    f"Concurrent profile update for user {user_id}, "
                    f"retrying sync ({attempt}/{SYNC_MAX_ATTEMPTS})"
                )
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Sync failed for user {user_id}: {e}")
                raise GamificationSyncException(user_id, str(e)) from e

        logger.error(f"Sync for user {user_id} gave up after {SYNC_MAX_ATTEMPTS} conflicts")
        raise GamificationSyncException(user_id, "too many concurrent updates")

    def _sync_once(self, user_id: int, today: date) -> SyncResult:
        profile, _ = self.get_or_create_profile(user_id)

        log = self.health_repo.get_by_user_and_date(self.db, user_id, today)
        if not log:
            logger.info(f"No health log for user {user_id} on {today}, nothing to sync")
            return SyncResult(has_activity=False)

        if profile.last_updated_date == today:
            self._undo_daily_award(profile)

        breakdown = self.points_service.calculate_breakdown(log)
        award = breakdown.total

        profile.daily_points = award
        profile.points += award
        profile.last_updated_date = today
        profile.level = self.points_service.calculate_level(profile.points)

        self.profile_repo.save(self.db, profile)

        logger.info(
            f"Synced user {user_id} for {today}: award={award} "
            f"(base={breakdown.base}, steps={breakdown.steps}, "
            f"calories={breakdown.calories}, sleep={breakdown.sleep}) "
            f"total={profile.points} level={profile.level}"
        )
        return SyncResult(
            has_activity=True,
            daily_points=profile.daily_points,
            total_points=profile.points,
            level=profile.level,
        )

    @staticmethod
    def _undo_daily_award(profile: GamificationProfile) -> None:
        """Remove the award already applied for last_updated_date"""
        previous = profile.daily_points or 0
        if previous > profile.points:
            logger.warning(
                f"Profile for user {profile.user_id} out of sync: "
                f"daily_points={previous} > points={profile.points}, clamping to 0"
            )
            profile.points = 0
        else:
            profile.points -= previous

    def top_today(self, today: date, limit: int = LEADERBOARD_DEFAULT_LIMIT) -> List[dict]:
        """
        Rank profiles by points awarded today.

        Only profiles synced today with a positive award are listed.
        Ties are broken by user id.
        """
        limit = max(1, min(limit, LEADERBOARD_MAX_LIMIT))
        rows = self.profile_repo.get_top_by_daily_points(self.db, limit, today)
        return [
            {
                "user_id": profile.user_id,
                "display_name": name,
                "daily_points": profile.daily_points,
            }
            for profile, name in rows
        ]

    def reset(self, user_id: int) -> bool:
        """
        Zero a user's points, daily points and badges and set level to 1.

        Returns:
            False if the user has no profile (nothing to reset)
        """
        profile = self.profile_repo.get_by_user(self.db, user_id)
        if not profile:
            logger.info(f"Reset requested for user {user_id} without a profile")
            return False

        profile.points = 0
        profile.daily_points = 0
        profile.level = 1
        profile.badges = []

        try:
            self.profile_repo.save(self.db, profile)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Reset failed for user {user_id}: {e}")
            raise DatabaseException("reset", str(e)) from e

        logger.info(f"Reset gamification profile for user {user_id}")
        return True

    def rollover_daily_points(self, today: date) -> int:
        """
        Zero daily points left over from previous days.

        A profile updated concurrently is skipped; its owner just synced.

        Returns:
            Number of profiles rolled over
        """
        rolled = 0
        for profile in self.profile_repo.get_stale(self.db, today):
            user_id = profile.user_id
            profile.daily_points = 0
            try:
                self.profile_repo.save(self.db, profile)
                rolled += 1
            except StaleDataError:
                self.db.rollback()
                logger.info(f"Skipped rollover for user {user_id}: updated concurrently")

        logger.info(f"Rolled over daily points for {rolled} profile(s) before {today}")
        return rolled
