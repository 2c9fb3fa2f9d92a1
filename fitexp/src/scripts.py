"""CLI scripts for development and operations."""
import asyncio
import sys
import uvicorn

from auth.oauth import StravaOAuthService
from clients.discord.client import DiscordClient
from config import settings
from database.athlete_repository import AthleteRepository
from database.mongodb import db_manager
from database.workout_repository import WorkoutRepository
from exceptions import FitExpError
from logging_config import configure_logging
from services.workout_sync import SyncResult, WorkoutSyncService


def dev_server():
    """Run development server with auto-reload."""
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )


async def _sync(athlete_id: int, activity_id: int) -> SyncResult:
    await db_manager.connect()
    try:
        athlete_repo = AthleteRepository(db_manager.db)
        service = WorkoutSyncService(
            athlete_repo,
            WorkoutRepository(db_manager.db),
            StravaOAuthService(athlete_repo),
            DiscordClient(settings.discord_bot_token, settings.discord_guild_id),
            channel_id=settings.discord_strava_channel_id
        )
        return await service.post_workout(athlete_id, activity_id)
    finally:
        await db_manager.disconnect()


def sync_workout():
    """Score and post one activity without going through the webhook."""
    if len(sys.argv) < 3:
        print("Usage:")
        print("  sync-workout <strava_athlete_id> <activity_id>")
        sys.exit(1)

    try:
        athlete_id, activity_id = int(sys.argv[1]), int(sys.argv[2])
    except ValueError:
        print("Error: athlete and activity IDs must be numbers")
        sys.exit(1)

    configure_logging()

    try:
        result = asyncio.run(_sync(athlete_id, activity_id))
    except FitExpError as e:
        print(f"\n❌ Sync failed: {e}")
        sys.exit(1)

    action = "Posted" if result.created else "Updated"
    print(f"\n✅ {action} activity {result.activity_id} (message {result.message_id})")
    print(f"📈 Gained {result.total_exp:.2f} exp ({result.exp.type})")
    print(f"📊 {result.thirty_day_exp:.2f} exp in the last 30 days")


if __name__ == "__main__":
    dev_server()
