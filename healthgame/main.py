from fastapi import FastAPI, Depends, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
from datetime import date
import logging
import os
from pathlib import Path

from healthgame.database import engine, get_db, Base
from healthgame import models  # noqa: F401  Import all models to register them with Base
from healthgame.schemas import (
    UserRegister, UserLogin, UserResponse, AuthResponse,
    HealthLogSync, HealthLogResponse, HealthSyncResponse,
    GamificationProfileResponse, SyncResponse, LeaderboardEntry, MessageResponse,
    GoalCreate, GoalUpdate, GoalResponse, GoalSavedResponse,
    WorkoutCreate, WorkoutResponse, WorkoutSavedResponse,
    AnalyticsResponse, HistoryResponse,
)
from healthgame.auth import get_current_user_id
from healthgame.services.auth_service import AuthService
from healthgame.services.date_service import DateService
from healthgame.services.health_service import HealthService
from healthgame.services.gamification_service import GamificationService
from healthgame.services.goal_service import GoalService
from healthgame.services.workout_service import WorkoutService
from healthgame.services.analytics_service import AnalyticsService
from healthgame.services.scheduler_service import start_scheduler, stop_scheduler
from healthgame.exceptions import (
    HealthGameException,
    UserAlreadyExistsException,
    InvalidCredentialsException,
    UserNotFoundException,
    HealthLogNotFoundException,
    ValidationException,
    GamificationSyncException,
    DatabaseException,
    GoalNotFoundException,
    WorkoutNotFoundException,
)
from healthgame.constants import (
    DEFAULT_LOG_DIRECTORY_PROD,
    DEFAULT_LOG_DIRECTORY_DEV,
    CORS_ALLOWED_ORIGINS,
    RESET_ENABLED,
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_MAX_LIMIT,
    SYNC_NO_ACTIVITY_MESSAGE,
    SYNC_SUCCESS_MESSAGE,
    HISTORY_DEFAULT_DAYS,
    HISTORY_MAX_DAYS,
)

LOG_DIR = os.getenv("HEALTHGAME_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("HEALTHGAME_LOG_FILE", "app.log")

# Create log directory if it doesn't exist (for development)
try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger("healthgame")

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="HealthGame API",
    description="Personal health tracking with daily points, levels and a leaderboard",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info(f"HealthGame API started. Logging to: {log_path}")
    start_scheduler()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down HealthGame API")
    stop_scheduler()


@app.exception_handler(HealthGameException)
async def healthgame_exception_handler(request: Request, exc: HealthGameException):
    logger.error(f"Unhandled application error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


def get_today() -> date:
    """Current calendar day in the reference timezone"""
    return DateService.get_today()


# Health check (no auth required)
@app.get("/")
async def root():
    return {"message": "HealthGame API", "status": "active"}


# ===== AUTH ENDPOINTS =====

@app.post("/api/auth/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """Create an account and log it in"""
    service = AuthService(db)
    try:
        user = service.register(payload.name, payload.email, payload.password)
    except UserAlreadyExistsException:
        raise HTTPException(status_code=400, detail="User already exists")
    return {
        "message": "User registered successfully",
        "token": service.create_token(user.id),
        "user": UserResponse.model_validate(user),
    }


@app.post("/api/auth/login", response_model=AuthResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    """Exchange email/password for a bearer token"""
    service = AuthService(db)
    try:
        user = service.authenticate(payload.email, payload.password)
    except InvalidCredentialsException:
        raise HTTPException(status_code=400, detail="Invalid credentials")
    return {
        "message": "Login successful",
        "token": service.create_token(user.id),
        "user": UserResponse.model_validate(user),
    }


@app.get("/api/auth/me", response_model=UserResponse)
def get_me(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get the authenticated user"""
    try:
        return AuthService(db).get_user(user_id)
    except UserNotFoundException:
        raise HTTPException(status_code=404, detail="User not found")


# ===== HEALTH LOG ENDPOINTS =====

@app.post("/api/health/sync", response_model=HealthSyncResponse)
def sync_daily_health(
    payload: HealthLogSync,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create or update the health log for a day"""
    log = HealthService(db).upsert_log(user_id, payload)
    return {
        "message": "Daily health synced successfully",
        "data": HealthLogResponse.from_model(log),
    }


@app.get("/api/health/day/{log_date}", response_model=HealthLogResponse)
def get_health_by_date(
    log_date: date,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get the health log for one day"""
    try:
        log = HealthService(db).get_log(user_id, log_date)
    except HealthLogNotFoundException:
        raise HTTPException(status_code=404, detail="No health data found")
    return HealthLogResponse.from_model(log)


@app.get("/api/health/range", response_model=List[HealthLogResponse])
def get_health_by_range(
    start: date = Query(...),
    end: date = Query(...),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get health logs between two dates (inclusive)"""
    try:
        logs = HealthService(db).get_logs_in_range(user_id, start, end)
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [HealthLogResponse.from_model(log) for log in logs]


# ===== GAMIFICATION ENDPOINTS =====

@app.get("/api/gamification/profile", response_model=GamificationProfileResponse)
def get_gamification_profile(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get the caller's gamification profile (created on first access)"""
    profile, _ = GamificationService(db).get_or_create_profile(user_id)
    return profile


@app.post(
    "/api/gamification/sync",
    response_model=SyncResponse,
    response_model_exclude_none=True
)
def sync_gamification(
    user_id: int = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db)
):
    """Recompute today's points from today's health log"""
    try:
        result = GamificationService(db).sync(user_id, today)
    except GamificationSyncException:
        raise HTTPException(status_code=503, detail="Gamification sync failed")

    if not result.has_activity:
        return {"message": SYNC_NO_ACTIVITY_MESSAGE}

    return {
        "message": SYNC_SUCCESS_MESSAGE,
        "daily_points": result.daily_points,
        "total_points": result.total_points,
        "level": result.level,
    }


@app.get("/api/gamification/leaderboard/today", response_model=List[LeaderboardEntry])
def get_today_leaderboard(
    limit: int = Query(LEADERBOARD_DEFAULT_LIMIT, ge=1, le=LEADERBOARD_MAX_LIMIT),
    _: int = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db)
):
    """Top users by points awarded today"""
    return GamificationService(db).top_today(today, limit)


@app.post("/api/gamification/reset", response_model=MessageResponse)
def reset_gamification(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Reset the caller's points and level (development only)"""
    if not RESET_ENABLED:
        raise HTTPException(status_code=403, detail="Reset is disabled")
    try:
        GamificationService(db).reset(user_id)
    except DatabaseException:
        raise HTTPException(status_code=500, detail="Reset failed")
    return {"message": "Gamification reset"}


# ===== ANALYTICS / HISTORY ENDPOINTS =====

@app.get("/api/analytics/weekly", response_model=AnalyticsResponse)
def get_weekly_analytics(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Totals and averages over the last 7 logged days"""
    summary, logs = AnalyticsService(db).weekly(user_id)
    return {"summary": summary, "daily_data": [HealthLogResponse.from_model(log) for log in logs]}


@app.get("/api/analytics/monthly", response_model=AnalyticsResponse)
def get_monthly_analytics(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Totals and averages over the last 30 logged days"""
    summary, logs = AnalyticsService(db).monthly(user_id)
    return {"summary": summary, "daily_data": [HealthLogResponse.from_model(log) for log in logs]}


@app.get("/api/history", response_model=HistoryResponse)
def get_health_history(
    days: int = Query(HISTORY_DEFAULT_DAYS, ge=1, le=HISTORY_MAX_DAYS),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Recent days with their activity totals and workouts"""
    return {"history": AnalyticsService(db).history(user_id, days)}


# ===== GOAL ENDPOINTS =====

@app.get("/api/goals", response_model=List[GoalResponse])
def get_goals(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get the caller's goals, newest first"""
    return GoalService(db).list_goals(user_id)


@app.post("/api/goals", response_model=GoalSavedResponse, status_code=status.HTTP_201_CREATED)
def create_goal(
    payload: GoalCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create a goal"""
    try:
        goal = GoalService(db).create_goal(user_id, payload)
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Goal created successfully", "data": GoalResponse.model_validate(goal)}


@app.put("/api/goals/{goal_id}", response_model=GoalSavedResponse)
def update_goal(
    goal_id: int,
    payload: GoalUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Update a goal's target, progress or status"""
    try:
        goal = GoalService(db).update_goal(user_id, goal_id, payload)
    except GoalNotFoundException:
        raise HTTPException(status_code=404, detail="Goal not found")
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Goal updated successfully", "data": GoalResponse.model_validate(goal)}


@app.delete("/api/goals/{goal_id}", response_model=MessageResponse)
def delete_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete a goal"""
    try:
        GoalService(db).delete_goal(user_id, goal_id)
    except GoalNotFoundException:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"message": "Goal deleted successfully"}


# ===== WORKOUT ENDPOINTS =====

@app.get("/api/workouts", response_model=List[WorkoutResponse])
def get_workouts(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get the caller's workouts, most recent first"""
    return WorkoutService(db).list_workouts(user_id)


@app.post("/api/workouts", response_model=WorkoutSavedResponse, status_code=status.HTTP_201_CREATED)
def add_workout(
    payload: WorkoutCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Log a workout"""
    workout = WorkoutService(db).add_workout(user_id, payload)
    return {"message": "Workout added successfully", "data": WorkoutResponse.model_validate(workout)}


@app.delete("/api/workouts/{workout_id}", response_model=MessageResponse)
def delete_workout(
    workout_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete a workout"""
    try:
        WorkoutService(db).delete_workout(user_id, workout_id)
    except WorkoutNotFoundException:
        raise HTTPException(status_code=404, detail="Workout not found")
    return {"message": "Workout deleted successfully"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("healthgame.main:app", host="0.0.0.0", port=8000, reload=False)
