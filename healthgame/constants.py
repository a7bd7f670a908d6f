"""
Application constants and environment-driven configuration.
"""
import os

# Database
DATABASE_URL = os.getenv("HEALTHGAME_DATABASE_URL", "sqlite:///./healthgame.db")

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/healthgame"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"

# CORS
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "HEALTHGAME_CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
    ).split(",")
    if origin.strip()
]

# Auth
JWT_SECRET = os.getenv("HEALTHGAME_JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_DAYS = int(os.getenv("HEALTHGAME_JWT_EXPIRES_DAYS", "7"))
BCRYPT_ROUNDS = int(os.getenv("HEALTHGAME_BCRYPT_ROUNDS", "10"))

# Reference timezone for "today"
REFERENCE_TIMEZONE = os.getenv("HEALTHGAME_TIMEZONE", "UTC")

# Feature switches
RESET_ENABLED = os.getenv("HEALTHGAME_ENABLE_RESET", "true").lower() in ("1", "true", "yes")
ROLLOVER_ENABLED = os.getenv("HEALTHGAME_ROLLOVER_ENABLED", "true").lower() in ("1", "true", "yes")
ROLLOVER_HOUR = 0
ROLLOVER_MINUTE = 5

# Points policy
POINTS_BASE = 10
STEPS_TIER_1_THRESHOLD = 8000
STEPS_TIER_1_POINTS = 20
STEPS_TIER_2_THRESHOLD = 12000
STEPS_TIER_2_POINTS = 10
CALORIES_BURNED_THRESHOLD = 400
CALORIES_BURNED_POINTS = 20
SLEEP_HOURS_THRESHOLD = 7
SLEEP_POINTS = 20
MAX_DAILY_POINTS = (
    POINTS_BASE + STEPS_TIER_1_POINTS + STEPS_TIER_2_POINTS
    + CALORIES_BURNED_POINTS + SLEEP_POINTS
)

# Levels
POINTS_PER_LEVEL = 100

# Sync
SYNC_MAX_ATTEMPTS = 3
SYNC_NO_ACTIVITY_MESSAGE = "no activity"
SYNC_SUCCESS_MESSAGE = "Gamification synced"

# Leaderboard
LEADERBOARD_DEFAULT_LIMIT = 10
LEADERBOARD_MAX_LIMIT = 100

# Analytics / history
ANALYTICS_WEEKLY_LOGS = 7
ANALYTICS_MONTHLY_LOGS = 30
HISTORY_DEFAULT_DAYS = 30
HISTORY_MAX_DAYS = 365
