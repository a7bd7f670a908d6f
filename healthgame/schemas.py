from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, date
from typing import List, Optional


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# User / auth schemas
class UserRegister(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(CamelModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserResponse


# Health log schemas
class SleepData(CamelModel):
    duration: Optional[float] = Field(None, ge=0, le=24)  # hours
    quality: Optional[str] = Field(None, pattern="^(poor|average|good)$")


class NutritionData(CamelModel):
    calories_consumed: Optional[int] = Field(None, ge=0)
    water_intake: Optional[float] = Field(None, ge=0)  # liters


class MoodData(CamelModel):
    mood_level: Optional[int] = Field(None, ge=1, le=5)
    stress_level: Optional[int] = Field(None, ge=1, le=5)


class HealthLogSync(CamelModel):
    date: date
    steps: Optional[int] = Field(None, ge=0)
    distance: Optional[float] = Field(None, ge=0)  # km
    calories_burned: Optional[int] = Field(None, ge=0)
    heart_rate_avg: Optional[float] = Field(None, ge=0, le=300)
    sleep: Optional[SleepData] = None
    nutrition: Optional[NutritionData] = None
    mood: Optional[MoodData] = None
    source: Optional[str] = Field(None, pattern="^(manual|google_fit)$")


class HealthLogResponse(CamelModel):
    id: int
    user_id: int
    date: date
    steps: int = 0
    distance: float = 0.0
    calories_burned: int = 0
    heart_rate_avg: Optional[float] = None
    sleep: SleepData
    nutrition: NutritionData
    mood: MoodData
    source: str = "manual"
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, log) -> "HealthLogResponse":
        """Build the nested response shape from a flat DailyHealthLog row"""
        return cls(
            id=log.id,
            user_id=log.user_id,
            date=log.date,
            steps=log.steps or 0,
            distance=log.distance or 0.0,
            calories_burned=log.calories_burned or 0,
            heart_rate_avg=log.heart_rate_avg,
            sleep=SleepData(duration=log.sleep_duration, quality=log.sleep_quality),
            nutrition=NutritionData(
                calories_consumed=log.calories_consumed,
                water_intake=log.water_intake,
            ),
            mood=MoodData(mood_level=log.mood_level, stress_level=log.stress_level),
            source=log.source or "manual",
            updated_at=log.updated_at,
        )


class HealthSyncResponse(CamelModel):
    message: str
    data: HealthLogResponse


# Gamification schemas
class PointsBreakdown(BaseModel):
    """Per-rule result of the daily points policy"""
    base: int = 0
    steps: int = 0
    calories: int = 0
    sleep: int = 0

    @property
    def total(self) -> int:
        return self.base + self.steps + self.calories + self.sleep


class SyncResult(BaseModel):
    """Outcome of one sync; daily_points is None when there was no activity"""
    has_activity: bool
    daily_points: Optional[int] = None
    total_points: Optional[int] = None
    level: Optional[int] = None


class GamificationProfileResponse(CamelModel):
    user_id: int
    points: int = 0
    daily_points: int = 0
    last_updated_date: Optional[date] = None
    level: int = 1
    badges: List[str] = []


class SyncResponse(CamelModel):
    message: str
    daily_points: Optional[int] = None
    total_points: Optional[int] = None
    level: Optional[int] = None


class LeaderboardEntry(CamelModel):
    user_id: int
    display_name: Optional[str] = None
    daily_points: int


class MessageResponse(CamelModel):
    message: str


# Goal schemas
class GoalCreate(CamelModel):
    type: str = Field(..., pattern="^(steps|weight|sleep|calories)$")
    target_value: float = Field(..., gt=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class GoalUpdate(CamelModel):
    type: Optional[str] = Field(None, pattern="^(steps|weight|sleep|calories)$")
    target_value: Optional[float] = Field(None, gt=0)
    current_value: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[str] = Field(None, pattern="^(active|completed)$")


class GoalResponse(CamelModel):
    id: int
    type: str
    target_value: float
    current_value: float = 0
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = "active"
    created_at: Optional[datetime] = None


class GoalSavedResponse(CamelModel):
    message: str
    data: GoalResponse


# Workout schemas
class WorkoutCreate(CamelModel):
    type: str = Field(..., min_length=1, max_length=50)
    date: date
    duration: Optional[int] = Field(None, ge=0)  # minutes
    calories_burned: Optional[int] = Field(None, ge=0)
    source: Optional[str] = Field(None, pattern="^(manual|google_fit)$")


class WorkoutResponse(CamelModel):
    id: int
    type: str
    date: date
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    source: str = "manual"
    created_at: Optional[datetime] = None


class WorkoutSavedResponse(CamelModel):
    message: str
    data: WorkoutResponse


# Analytics / history schemas
class AnalyticsSummary(CamelModel):
    total_steps: int = 0
    total_calories_burned: int = 0
    avg_heart_rate: int = 0
    avg_sleep: float = 0.0


class AnalyticsResponse(CamelModel):
    summary: AnalyticsSummary
    daily_data: List[HealthLogResponse]


class HistoryWorkout(CamelModel):
    type: str
    duration: Optional[int] = None
    calories_burned: int = 0


class HistoryDay(CamelModel):
    date: date
    steps: int = 0
    distance: float = 0.0  # km
    calories: int = 0
    workouts: List[HistoryWorkout] = []


class HistoryResponse(CamelModel):
    history: List[HistoryDay]
