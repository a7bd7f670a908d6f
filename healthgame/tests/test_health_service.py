"""
Tests for HealthService.

Tests cover:
1. Create-or-replace semantics keyed by (user, date)
2. Nested sleep / nutrition / mood mapping (a sent section replaces the stored one)
3. Null activity totals never overwrite stored values
4. Day and range reads
"""
import pytest
from datetime import timedelta

from healthgame.services.health_service import HealthService
from healthgame.schemas import HealthLogSync, HealthLogResponse
from healthgame.models import DailyHealthLog
from healthgame.exceptions import HealthLogNotFoundException, ValidationException


class TestUpsertLog:
    """Tests for upsert_log"""

    def test_creates_log_with_nested_fields(self, db_session, user, today):
        payload = HealthLogSync(
            date=today,
            steps=9000,
            caloriesBurned=420,
            sleep={"duration": 7.5, "quality": "good"},
            mood={"moodLevel": 4},
        )

        log = HealthService(db_session).upsert_log(user.id, payload)

        assert log.steps == 9000
        assert log.calories_burned == 420
        assert log.sleep_duration == 7.5
        assert log.sleep_quality == "good"
        assert log.mood_level == 4
        assert log.stress_level is None
        assert log.source == "manual"

    def test_second_sync_same_day_replaces_fields(self, db_session, user, today):
        """One log per (user, date): re-sync updates instead of duplicating"""
        service = HealthService(db_session)
        service.upsert_log(user.id, HealthLogSync(date=today, steps=3000, calories_burned=200))
        service.upsert_log(user.id, HealthLogSync(date=today, steps=11000))

        logs = db_session.query(DailyHealthLog).filter(DailyHealthLog.user_id == user.id).all()
        assert len(logs) == 1
        assert logs[0].steps == 11000
        assert logs[0].calories_burned == 200  # not sent, kept

    def test_nested_section_replaces_stored_section(self, db_session, user, today):
        """Sending a section overwrites the whole section, unsent inner fields are cleared"""
        service = HealthService(db_session)
        service.upsert_log(user.id, HealthLogSync(date=today, sleep={"duration": 6, "quality": "poor"}))
        log = service.upsert_log(user.id, HealthLogSync(date=today, sleep={"duration": 8}))

        assert log.sleep_duration == 8
        assert log.sleep_quality is None

    def test_unsent_section_is_kept(self, db_session, user, today):
        service = HealthService(db_session)
        service.upsert_log(user.id, HealthLogSync(date=today, mood={"moodLevel": 2, "stressLevel": 4}))
        log = service.upsert_log(user.id, HealthLogSync(date=today, steps=100))

        assert log.mood_level == 2
        assert log.stress_level == 4

    def test_null_section_clears_it(self, db_session, user, today):
        service = HealthService(db_session)
        service.upsert_log(user.id, HealthLogSync(date=today, nutrition={"caloriesConsumed": 1800, "waterIntake": 2}))
        log = service.upsert_log(user.id, HealthLogSync(date=today, nutrition=None))

        assert log.calories_consumed is None
        assert log.water_intake is None

    def test_null_activity_totals_keep_stored_values(self, db_session, user, today):
        service = HealthService(db_session)
        service.upsert_log(user.id, HealthLogSync(date=today, steps=9000, caloriesBurned=300, distance=6.5))
        log = service.upsert_log(
            user.id,
            HealthLogSync(date=today, steps=None, caloriesBurned=None, distance=None, source=None)
        )

        assert log.steps == 9000
        assert log.calories_burned == 300
        assert log.distance == 6.5
        assert log.source == "manual"

    def test_null_activity_totals_on_new_log_use_defaults(self, db_session, user, today):
        log = HealthService(db_session).upsert_log(
            user.id, HealthLogSync(date=today, steps=None, caloriesBurned=None)
        )

        assert log.steps == 0
        assert log.calories_burned == 0
        assert log.distance == 0.0

    def test_logs_are_per_user(self, db_session, user, other_user, today):
        service = HealthService(db_session)
        service.upsert_log(user.id, HealthLogSync(date=today, steps=1))
        service.upsert_log(other_user.id, HealthLogSync(date=today, steps=2))

        assert service.get_log(user.id, today).steps == 1
        assert service.get_log(other_user.id, today).steps == 2


class TestReads:
    """Tests for get_log and get_logs_in_range"""

    def test_get_log_missing_raises(self, db_session, user, today):
        with pytest.raises(HealthLogNotFoundException):
            HealthService(db_session).get_log(user.id, today)

    def test_range_is_inclusive_and_ordered(self, db_session, user, make_log, today):
        for offset in (0, 3, 1, 5):
            make_log(user.id, today - timedelta(days=offset), steps=offset)

        logs = HealthService(db_session).get_logs_in_range(
            user.id, today - timedelta(days=3), today
        )

        assert [log.steps for log in logs] == [3, 1, 0]

    def test_range_start_after_end_rejected(self, db_session, user, today):
        with pytest.raises(ValidationException):
            HealthService(db_session).get_logs_in_range(user.id, today, today - timedelta(days=1))


class TestResponseShape:
    """HealthLogResponse nests the flat columns"""

    def test_from_model_nests_sections(self, db_session, user, make_log, today):
        log = make_log(user.id, today, steps=500, sleep_duration=6.5, water_intake=2.0)

        body = HealthLogResponse.from_model(log).model_dump(by_alias=True)

        assert body["steps"] == 500
        assert body["sleep"]["duration"] == 6.5
        assert body["nutrition"]["waterIntake"] == 2.0
        assert body["caloriesBurned"] == 0
