"""
Tests for the daily rollover job.
"""
import asyncio
from unittest.mock import patch

from healthgame.models import GamificationProfile
from healthgame.services import scheduler_service


class TestDailyRollover:

    def test_job_zeroes_stale_daily_points(self, session_factory, db_session, user, make_profile, today, yesterday):
        make_profile(user.id, points=130, daily_points=30, last_updated_date=yesterday)

        with patch.object(scheduler_service, "SessionLocal", session_factory), \
                patch.object(scheduler_service.DateService, "get_today", return_value=today):
            asyncio.run(scheduler_service.run_daily_rollover())

        db_session.expire_all()
        profile = db_session.query(GamificationProfile).filter_by(user_id=user.id).one()
        assert profile.daily_points == 0
        assert profile.points == 130

    def test_job_errors_are_logged_not_raised(self, caplog):
        with patch.object(scheduler_service, "SessionLocal") as session_local, \
                patch.object(scheduler_service, "GamificationService") as service:
            service.return_value.rollover_daily_points.side_effect = RuntimeError("boom")
            asyncio.run(scheduler_service.run_daily_rollover())

        assert "Scheduler Error (Rollover): boom" in caplog.text
        session_local.return_value.close.assert_called_once()


class TestStartScheduler:

    def test_disabled_rollover_does_not_start(self):
        with patch.object(scheduler_service, "ROLLOVER_ENABLED", False), \
                patch.object(scheduler_service, "scheduler") as scheduler:
            scheduler_service.start_scheduler()

        scheduler.start.assert_not_called()

    def test_enabled_rollover_registers_job(self):
        with patch.object(scheduler_service, "ROLLOVER_ENABLED", True), \
                patch.object(scheduler_service, "scheduler") as scheduler:
            scheduler.running = False
            scheduler_service.start_scheduler()

        scheduler.add_job.assert_called_once()
        assert scheduler.add_job.call_args.kwargs["id"] == "daily_rollover"
        scheduler.start.assert_called_once()
