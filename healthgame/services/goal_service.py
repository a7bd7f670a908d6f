"""
Goal service.
Per-user CRUD for activity goals (steps, weight, sleep, calories).
"""
import logging
from typing import List
from sqlalchemy.orm import Session

from healthgame.models import Goal
from healthgame.repositories.goal_repository import GoalRepository
from healthgame.schemas import GoalCreate, GoalUpdate
from healthgame.exceptions import GoalNotFoundException, ValidationException

logger = logging.getLogger("healthgame.goals")


class GoalService:
    """Service for user goals"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = GoalRepository()

    @staticmethod
    def _check_dates(goal: Goal):
        if goal.start_date and goal.end_date and goal.start_date > goal.end_date:
            raise ValidationException("startDate", "must not be after endDate")

    def list_goals(self, user_id: int) -> List[Goal]:
        return self.repo.get_all(self.db, user_id)

    def create_goal(self, user_id: int, data: GoalCreate) -> Goal:
        """
        Create a goal for the user.

        Raises:
            ValidationException: If start_date is after end_date
        """
        goal = Goal(user_id=user_id, **data.model_dump())
        self._check_dates(goal)
        goal = self.repo.create(self.db, goal)
        logger.info(f"Created {goal.type} goal {goal.id} for user {user_id}")
        return goal

    def update_goal(self, user_id: int, goal_id: int, data: GoalUpdate) -> Goal:
        """
        Apply the fields sent to one of the user's goals.

        Raises:
            GoalNotFoundException: If the goal is missing or owned by someone else
            ValidationException: If the update leaves start_date after end_date
        """
        goal = self.repo.get_by_id(self.db, user_id, goal_id)
        if not goal:
            raise GoalNotFoundException(goal_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(goal, key, value)

        try:
            self._check_dates(goal)
        except ValidationException:
            self.db.rollback()
            raise

        return self.repo.update(self.db, goal)

    def delete_goal(self, user_id: int, goal_id: int):
        """
        Raises:
            GoalNotFoundException: If the goal is missing or owned by someone else
        """
        goal = self.repo.get_by_id(self.db, user_id, goal_id)
        if not goal:
            raise GoalNotFoundException(goal_id)
        self.repo.delete(self.db, goal)
        logger.info(f"Deleted goal {goal_id} for user {user_id}")
