"""
EXP totals over logged workouts.

Two windows are used and they are kept apart on purpose:
- thirty_day_total: the "exp this week" footer of a freshly posted workout
- calendar_week_total: weekly summaries and the leaderboard
"""
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from models.workout import HeartRateExp, LeaderboardEntry, TimeExp, WorkoutRecord, exp_total

THIRTY_DAYS = timedelta(days=30)


def thirty_day_total(
    history: Iterable[WorkoutRecord],
    activity_id: int,
    exp: HeartRateExp | TimeExp,
    now: datetime | None = None,
) -> float:
    """
    EXP of the last 30 days including a workout that is being synced.

    Logged workouts for `activity_id` are skipped so a resync doesn't count
    the activity twice; its freshly calculated `exp` is added exactly once.

    Args:
        history: Logged workouts of the owner
        activity_id: Strava activity ID currently being synced
        exp: Freshly calculated EXP for that activity
        now: End of the window, defaults to the current time

    Returns:
        Total EXP
    """
    now = now or datetime.now(timezone.utc)
    start = now - THIRTY_DAYS

    previous = sum(
        record.total_exp
        for record in history
        if record.activity_id != activity_id and start < record.timestamp <= now
    )
    return previous + exp_total(exp)


def week_bounds(now: datetime | None = None, tz: tzinfo | str = "UTC") -> tuple[datetime, datetime]:
    """Start (Monday 00:00) and end (next Monday 00:00) of the ISO week containing `now`."""
    if isinstance(tz, str):
        tz = ZoneInfo(tz)

    local_now = (now or datetime.now(timezone.utc)).astimezone(tz)
    monday = local_now.date() - timedelta(days=local_now.weekday())
    start = datetime.combine(monday, time.min, tzinfo=tz)
    end = datetime.combine(monday + timedelta(days=7), time.min, tzinfo=tz)
    return start, end


def in_week(record: WorkoutRecord, bounds: tuple[datetime, datetime]) -> bool:
    start, end = bounds
    return start <= record.timestamp < end


def calendar_week_total(
    records: Iterable[WorkoutRecord],
    now: datetime | None = None,
    tz: tzinfo | str = "UTC",
) -> float:
    """EXP of all workouts that started in the current calendar week."""
    bounds = week_bounds(now, tz)
    return sum(record.total_exp for record in records if in_week(record, bounds))


def weekly_leaderboard(
    records: Iterable[WorkoutRecord],
    now: datetime | None = None,
    tz: tzinfo | str = "UTC",
) -> list[LeaderboardEntry]:
    """Calendar week EXP per owner, highest first."""
    bounds = week_bounds(now, tz)
    by_owner: dict[str, list[WorkoutRecord]] = defaultdict(list)

    for record in records:
        if in_week(record, bounds):
            by_owner[record.discord_id].append(record)

    entries = [
        LeaderboardEntry(
            discord_id=discord_id,
            exp=sum(record.total_exp for record in owner_records),
            workouts=len(owner_records),
        )
        for discord_id, owner_records in by_owner.items()
    ]
    return sorted(entries, key=lambda entry: entry.exp, reverse=True)
