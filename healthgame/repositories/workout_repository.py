"""
Workout repository - Data access layer for Workout.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from healthgame.models import Workout


class WorkoutRepository:
    """Repository for Workout data access"""

    @staticmethod
    def get_by_id(db: Session, user_id: int, workout_id: int) -> Optional[Workout]:
        """Get a workout owned by the user"""
        return db.query(Workout).filter(
            Workout.id == workout_id,
            Workout.user_id == user_id
        ).first()

    @staticmethod
    def get_all(db: Session, user_id: int) -> List[Workout]:
        """Get all of a user's workouts, most recent day first"""
        return db.query(Workout).filter(
            Workout.user_id == user_id
        ).order_by(Workout.date.desc(), Workout.id.desc()).all()

    @staticmethod
    def get_on_dates(db: Session, user_id: int, dates: List[date]) -> List[Workout]:
        """Get workouts falling on any of the given days"""
        if not dates:
            return []
        return db.query(Workout).filter(
            Workout.user_id == user_id,
            Workout.date.in_(dates)
        ).order_by(Workout.date, Workout.id).all()

    @staticmethod
    def create(db: Session, workout: Workout) -> Workout:
        db.add(workout)
        db.commit()
        db.refresh(workout)
        return workout

    @staticmethod
    def delete(db: Session, workout: Workout) -> None:
        db.delete(workout)
        db.commit()
