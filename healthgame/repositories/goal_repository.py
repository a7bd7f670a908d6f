"""
Goal repository - Data access layer for Goal.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from healthgame.models import Goal


class GoalRepository:
    """Repository for Goal data access"""

    @staticmethod
    def get_by_id(db: Session, user_id: int, goal_id: int) -> Optional[Goal]:
        """Get a goal owned by the user"""
        return db.query(Goal).filter(Goal.id == goal_id, Goal.user_id == user_id).first()

    @staticmethod
    def get_all(db: Session, user_id: int) -> List[Goal]:
        """Get all of a user's goals, newest first"""
        return db.query(Goal).filter(
            Goal.user_id == user_id
        ).order_by(Goal.created_at.desc(), Goal.id.desc()).all()

    @staticmethod
    def create(db: Session, goal: Goal) -> Goal:
        db.add(goal)
        db.commit()
        db.refresh(goal)
        return goal

    @staticmethod
    def update(db: Session, goal: Goal) -> Goal:
        db.commit()
        db.refresh(goal)
        return goal

    @staticmethod
    def delete(db: Session, goal: Goal) -> None:
        db.delete(goal)
        db.commit()
