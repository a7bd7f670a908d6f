"""
Background scheduler for day rollover.
Handles:
- Zeroing daily points left over from previous days
"""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from healthgame.database import SessionLocal
from healthgame.services.date_service import DateService
from healthgame.services.gamification_service import GamificationService
from healthgame.constants import ROLLOVER_ENABLED, ROLLOVER_HOUR, ROLLOVER_MINUTE

logger = logging.getLogger("healthgame.scheduler")

# Create scheduler instance
scheduler = AsyncIOScheduler(timezone=DateService.get_timezone())


async def run_daily_rollover():
    """Job: zero stale daily points after midnight in the reference timezone"""
    db = SessionLocal()
    try:
        today = DateService.get_today()
        rolled = GamificationService(db).rollover_daily_points(today)
        logger.info(f"Daily rollover for {today} done: {rolled} profile(s)")
    except Exception as e:
        logger.error(f"Scheduler Error (Rollover): {e}")
    finally:
        db.close()


def start_scheduler():
    """Start the scheduler"""
    if not ROLLOVER_ENABLED:
        logger.info("Daily rollover disabled, scheduler not started")
        return

    if not scheduler.running:
        scheduler.add_job(
            run_daily_rollover,
            CronTrigger(hour=ROLLOVER_HOUR, minute=ROLLOVER_MINUTE, timezone=DateService.get_timezone()),
            id='daily_rollover',
            replace_existing=True
        )

        scheduler.start()
        logger.info("APScheduler started")
        logger.info(f"Scheduled jobs: {[job.id for job in scheduler.get_jobs()]}")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("APScheduler stopped")
