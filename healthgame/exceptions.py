"""
Custom exceptions for the healthgame application.
Provides specific exception types for better error handling and recovery.
"""


class HealthGameException(Exception):
    """Base exception for healthgame application"""
    pass


class UserNotFoundException(HealthGameException):
    """Raised when a user is not found"""
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User with ID {user_id} not found")


class UserAlreadyExistsException(HealthGameException):
    """Raised when registering an email that is already taken"""
    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists")


class InvalidCredentialsException(HealthGameException):
    """Raised when login email/password do not match"""
    def __init__(self):
        super().__init__("Invalid credentials")


class InvalidTokenException(HealthGameException):
    """Raised when a bearer token is malformed, forged or expired"""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid token: {reason}")


class HealthLogNotFoundException(HealthGameException):
    """Raised when no health log exists for a user and date"""
    def __init__(self, user_id: int, log_date):
        self.user_id = user_id
        self.log_date = log_date
        super().__init__(f"No health data found for {log_date}")


class GamificationSyncException(HealthGameException):
    """Raised when a sync could not be persisted; profile state is unchanged"""
    def __init__(self, user_id: int, details: str):
        self.user_id = user_id
        self.details = details
        super().__init__(f"Gamification sync failed for user {user_id}: {details}")


class DatabaseException(HealthGameException):
    """Raised when database operations fail"""
    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"Database {operation} failed: {details}")


class ValidationException(HealthGameException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")


class GoalNotFoundException(HealthGameException):
    """Raised when a goal does not exist or belongs to another user"""
    def __init__(self, goal_id: int):
        self.goal_id = goal_id
        super().__init__(f"Goal with ID {goal_id} not found")


class WorkoutNotFoundException(HealthGameException):
    """Raised when a workout does not exist or belongs to another user"""
    def __init__(self, workout_id: int):
        self.workout_id = workout_id
        super().__init__(f"Workout with ID {workout_id} not found")
