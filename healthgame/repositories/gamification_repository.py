"""
Gamification repository - Data access layer for GamificationProfile.
Handles all database queries related to profiles and the leaderboard.
"""
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from healthgame.models import GamificationProfile, User


class GamificationProfileRepository:
    """Repository for GamificationProfile data access"""

    @staticmethod
    def get_by_user(db: Session, user_id: int) -> Optional[GamificationProfile]:
        """Get profile for a user (None if never created)"""
        return db.query(GamificationProfile).filter(
            GamificationProfile.user_id == user_id
        ).first()

    @staticmethod
    def create(db: Session, user_id: int) -> GamificationProfile:
        """Create a zeroed profile for a user"""
        profile = GamificationProfile(
            user_id=user_id,
            points=0,
            daily_points=0,
            last_updated_date=None,
            level=1,
            badges=[],
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def save(db: Session, profile: GamificationProfile) -> GamificationProfile:
        """
        Persist pending changes on a profile.

        Raises StaleDataError if another session updated the row since it was loaded.
        """
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def get_top_by_daily_points(
        db: Session,
        limit: int,
        on_date: date
    ) -> List[Tuple[GamificationProfile, Optional[str]]]:
        """
        Get profiles with points awarded on the given date, highest first.

        Returns (profile, user name) pairs ordered by daily_points desc, user_id asc.
        """
        return db.query(GamificationProfile, User.name).outerjoin(
            User, User.id == GamificationProfile.user_id
        ).filter(
            GamificationProfile.last_updated_date == on_date,
            GamificationProfile.daily_points > 0
        ).order_by(
            GamificationProfile.daily_points.desc(),
            GamificationProfile.user_id.asc()
        ).limit(limit).all()

    @staticmethod
    def get_stale(db: Session, before_date: date) -> List[GamificationProfile]:
        """Get profiles still carrying daily points from a day before before_date"""
        return db.query(GamificationProfile).filter(
            GamificationProfile.last_updated_date < before_date,
            GamificationProfile.daily_points != 0
        ).all()
