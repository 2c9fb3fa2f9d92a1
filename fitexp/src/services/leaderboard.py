import logging
from datetime import datetime, timedelta, timezone

from database.workout_repository import WorkoutRepository
from models.workout import AthleteExpSummary, LeaderboardEntry
from services.rolling_totals import calendar_week_total, week_bounds, weekly_leaderboard

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Read side of logged workouts: weekly leaderboard and per-athlete totals."""

    def __init__(self, workout_repo: WorkoutRepository, tz: str = "UTC"):
        self.workout_repo = workout_repo
        self.tz = tz

    async def this_week(self, now: datetime | None = None) -> list[LeaderboardEntry]:
        """Calendar week EXP of every athlete, highest first."""
        now = now or datetime.now(timezone.utc)
        start, end = week_bounds(now, self.tz)

        # find() bounds are exclusive, widen by a microsecond to keep Monday 00:00
        records = await self.workout_repo.find(start - timedelta(microseconds=1), end)
        logger.debug(f"Leaderboard for week of {start.date()}: {len(records)} workouts")
        return weekly_leaderboard(records, now, self.tz)

    async def athlete_summary(self, discord_id: str, now: datetime | None = None) -> AthleteExpSummary:
        """30 day and calendar week EXP of one athlete."""
        now = now or datetime.now(timezone.utc)
        start, end = week_bounds(now, self.tz)

        history = await self.workout_repo.thirty_day_history(discord_id, now)
        week = await self.workout_repo.find(
            start - timedelta(microseconds=1),
            end,
            {"discord_id": discord_id}
        )

        return AthleteExpSummary(
            discord_id=discord_id,
            thirty_day_exp=sum(record.total_exp for record in history),
            week_exp=calendar_week_total(week, now, self.tz)
        )
