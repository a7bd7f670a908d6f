"""
Health log repository - Data access layer for DailyHealthLog.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from healthgame.models import DailyHealthLog


class HealthLogRepository:
    """Repository for DailyHealthLog data access"""

    @staticmethod
    def get_by_user_and_date(db: Session, user_id: int, log_date: date) -> Optional[DailyHealthLog]:
        """Get the log for one user and calendar day"""
        return db.query(DailyHealthLog).filter(
            DailyHealthLog.user_id == user_id,
            DailyHealthLog.date == log_date
        ).first()

    @staticmethod
    def get_range(db: Session, user_id: int, start: date, end: date) -> List[DailyHealthLog]:
        """Get logs between start and end (inclusive), oldest first"""
        return db.query(DailyHealthLog).filter(
            DailyHealthLog.user_id == user_id,
            DailyHealthLog.date >= start,
            DailyHealthLog.date <= end
        ).order_by(DailyHealthLog.date).all()

    @staticmethod
    def create(db: Session, log: DailyHealthLog) -> DailyHealthLog:
        """Create new health log"""
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def update(db: Session, log: DailyHealthLog) -> DailyHealthLog:
        """Update existing health log"""
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def get_latest(db: Session, user_id: int, limit: int) -> List[DailyHealthLog]:
        """Get the user's most recent logs, newest first"""
        return db.query(DailyHealthLog).filter(
            DailyHealthLog.user_id == user_id
        ).order_by(DailyHealthLog.date.desc()).limit(limit).all()
