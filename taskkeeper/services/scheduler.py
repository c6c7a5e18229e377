# taskkeeper/services/scheduler.py
"""
Scheduler for periodic housekeeping
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from taskkeeper.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Drops expired sessions on a fixed interval"""

    def __init__(self, sessions: SessionStore, interval_minutes: int = 15):
        self.sessions = sessions
        self.interval_minutes = interval_minutes
        self.scheduler = AsyncIOScheduler()
        self.is_running = False

    def start(self):
        """Start the scheduler"""
        if not self.is_running:
            self.scheduler.add_job(
                self.sweep,
                trigger=IntervalTrigger(minutes=self.interval_minutes),
                id='purge_expired_sessions',
                name='Purge Expired Sessions',
                replace_existing=True
            )
            self.scheduler.start()
            self.is_running = True
            logger.info(f"Session sweeper started (every {self.interval_minutes} min)")

    def stop(self):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown(wait=False)
            self.is_running = False
            logger.info("Session sweeper stopped")

    async def sweep(self) -> int:
        try:
            return self.sessions.purge_expired()
        except Exception as e:
            logger.error(f"Error purging expired sessions: {e}")
            return 0

    def get_status(self) -> dict:
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            })
        return {"is_running": self.is_running, "active_sessions": len(self.sessions), "jobs": jobs}
