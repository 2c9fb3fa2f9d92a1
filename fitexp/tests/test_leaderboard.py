from datetime import datetime, timedelta, timezone

import pytest

from models.workout import HeartRateExp, TimeExp
from services.leaderboard import LeaderboardService

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)
MONDAY = datetime(2024, 5, 13, tzinfo=timezone.utc)


@pytest.fixture
async def logged_workouts(workout_repo, record_factory):
    await workout_repo.insert(record_factory(discord_id="a", activity_id=1, timestamp=MONDAY, exp=TimeExp(minutes=30)))
    await workout_repo.insert(record_factory(discord_id="a", activity_id=2, timestamp=NOW - timedelta(days=6), exp=TimeExp(minutes=40)))
    await workout_repo.insert(record_factory(discord_id="b", activity_id=3, exp=HeartRateExp(moderate=10, vigorous=100)))


async def test_weekly_leaderboard(workout_repo, logged_workouts):
    service = LeaderboardService(workout_repo, tz="UTC")

    entries = await service.this_week(NOW)

    assert [(entry.discord_id, entry.exp) for entry in entries] == [("b", 110), ("a", 30)]


async def test_athlete_summary_keeps_windows_apart(workout_repo, logged_workouts):
    service = LeaderboardService(workout_repo, tz="UTC")

    summary = await service.athlete_summary("a", NOW)

    assert summary.thirty_day_exp == 70
    assert summary.week_exp == 30
