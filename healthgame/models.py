from sqlalchemy import (
    Column, Integer, String, DateTime, Float, Date, JSON, ForeignKey, UniqueConstraint
)
from datetime import datetime
from healthgame.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)  # stored lowercase
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class DailyHealthLog(Base):
    __tablename__ = "daily_health_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_health_log_user_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    # Activity
    steps = Column(Integer, default=0)
    distance = Column(Float, default=0.0)  # km
    calories_burned = Column(Integer, default=0)
    heart_rate_avg = Column(Float, nullable=True)

    # Sleep
    sleep_duration = Column(Float, nullable=True)  # hours
    sleep_quality = Column(String, nullable=True)  # poor, average, good

    # Nutrition
    calories_consumed = Column(Integer, nullable=True)
    water_intake = Column(Float, nullable=True)  # liters

    # Mood (1-5)
    mood_level = Column(Integer, nullable=True)
    stress_level = Column(Integer, nullable=True)

    source = Column(String, default="manual")  # manual, google_fit

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class GamificationProfile(Base):
    __tablename__ = "gamification_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    points = Column(Integer, nullable=False, default=0)        # Lifetime total
    daily_points = Column(Integer, nullable=False, default=0)  # Award for last_updated_date
    last_updated_date = Column(Date, nullable=True)
    level = Column(Integer, nullable=False, default=1)
    badges = Column(JSON, nullable=False, default=list)

    # Optimistic concurrency: UPDATE ... WHERE version = <seen>
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __mapper_args__ = {"version_id_col": version}


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String, nullable=False)  # steps, weight, sleep, calories
    target_value = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False, default=0)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="active")  # active, completed

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String, nullable=False)  # running, gym, yoga, ...
    duration = Column(Integer, nullable=True)  # minutes
    calories_burned = Column(Integer, nullable=True)
    date = Column(Date, nullable=False, index=True)
    source = Column(String, default="manual")  # manual, google_fit

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
