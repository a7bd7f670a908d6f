"""
Workout service.
Manual or imported workout entries per user.
"""
import logging
from typing import List
from sqlalchemy.orm import Session

from healthgame.models import Workout
from healthgame.repositories.workout_repository import WorkoutRepository
from healthgame.schemas import WorkoutCreate
from healthgame.exceptions import WorkoutNotFoundException

logger = logging.getLogger("healthgame.workouts")


class WorkoutService:
    """Service for workouts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkoutRepository()

    def add_workout(self, user_id: int, data: WorkoutCreate) -> Workout:
        values = data.model_dump(exclude_none=True)
        workout = self.repo.create(self.db, Workout(user_id=user_id, **values))
        logger.info(f"Added {workout.type} workout on {workout.date} for user {user_id}")
        return workout

    def list_workouts(self, user_id: int) -> List[Workout]:
        return self.repo.get_all(self.db, user_id)

    def delete_workout(self, user_id: int, workout_id: int):
        """
        Raises:
            WorkoutNotFoundException: If the workout is missing or owned by someone else
        """
        workout = self.repo.get_by_id(self.db, user_id, workout_id)
        if not workout:
            raise WorkoutNotFoundException(workout_id)
        self.repo.delete(self.db, workout)
        logger.info(f"Deleted workout {workout_id} for user {user_id}")
