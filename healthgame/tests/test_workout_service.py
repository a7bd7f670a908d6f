"""
Tests for WorkoutService.
"""
import pytest

from healthgame.services.workout_service import WorkoutService
from healthgame.schemas import WorkoutCreate
from healthgame.exceptions import WorkoutNotFoundException


class TestWorkouts:
    """Tests for add, list and delete"""

    def test_add_defaults_source_to_manual(self, db_session, user, today):
        workout = WorkoutService(db_session).add_workout(
            user.id, WorkoutCreate(type="running", date=today, duration=30, caloriesBurned=250)
        )

        assert workout.id is not None
        assert workout.duration == 30
        assert workout.calories_burned == 250
        assert workout.source == "manual"

    def test_list_is_per_user_most_recent_first(self, db_session, user, other_user, today, yesterday):
        service = WorkoutService(db_session)
        service.add_workout(user.id, WorkoutCreate(type="yoga", date=yesterday))
        service.add_workout(user.id, WorkoutCreate(type="gym", date=today))
        service.add_workout(other_user.id, WorkoutCreate(type="running", date=today))

        workouts = service.list_workouts(user.id)

        assert [(w.type, w.date) for w in workouts] == [("gym", today), ("yoga", yesterday)]

    def test_delete(self, db_session, user, today):
        service = WorkoutService(db_session)
        workout = service.add_workout(user.id, WorkoutCreate(type="gym", date=today))

        service.delete_workout(user.id, workout.id)

        assert service.list_workouts(user.id) == []

    def test_delete_other_users_workout_raises(self, db_session, user, other_user, today):
        service = WorkoutService(db_session)
        workout = service.add_workout(other_user.id, WorkoutCreate(type="gym", date=today))

        with pytest.raises(WorkoutNotFoundException):
            service.delete_workout(user.id, workout.id)
        assert len(service.list_workouts(other_user.id)) == 1
