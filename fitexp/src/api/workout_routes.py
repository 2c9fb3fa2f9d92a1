import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.asynchronous.database import AsyncDatabase

from auth.dependencies import get_athlete_repository, get_discord_client, get_oauth_service
from auth.oauth import StravaOAuthService
from clients.discord.client import DiscordClient
from config import settings
from database.athlete_repository import AthleteRepository
from database.mongodb import get_db
from database.workout_repository import WorkoutRepository
from models.athlete import MaxHeartRateRequest
from models.workout import AthleteExpSummary, LeaderboardEntry
from services.leaderboard import LeaderboardService
from services.workout_sync import SyncResult, WorkoutSyncService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["workouts"])


async def get_workout_repository(db: AsyncDatabase = Depends(get_db)) -> WorkoutRepository:
    """Dependency to get workout repository."""
    return WorkoutRepository(db)


async def get_workout_sync_service(
    athlete_repo: AthleteRepository = Depends(get_athlete_repository),
    workout_repo: WorkoutRepository = Depends(get_workout_repository),
    oauth_service: StravaOAuthService = Depends(get_oauth_service),
    discord_client: DiscordClient = Depends(get_discord_client)
) -> WorkoutSyncService:
    """Dependency to get workout sync service."""
    return WorkoutSyncService(
        athlete_repo,
        workout_repo,
        oauth_service,
        discord_client,
        channel_id=settings.discord_strava_channel_id
    )


async def get_leaderboard_service(
    workout_repo: WorkoutRepository = Depends(get_workout_repository)
) -> LeaderboardService:
    """Dependency to get leaderboard service."""
    return LeaderboardService(workout_repo, tz=settings.timezone)


@router.post("/athletes/{athlete_id}/activities/{activity_id}/sync", response_model=SyncResult)
async def sync_activity(
    athlete_id: int,
    activity_id: int,
    sync_service: WorkoutSyncService = Depends(get_workout_sync_service)
) -> SyncResult:
    """
    Score and post a single activity right away.

    Same as what the Strava webhook triggers, but waits for the result.
    Failures are turned into error responses by the app's exception handler.
    """
    logger.info(f"POST /athletes/{athlete_id}/activities/{activity_id}/sync called")

    return await sync_service.post_workout(athlete_id, activity_id)


@router.put("/athletes/{athlete_id}/max-heart-rate")
async def set_max_heart_rate(
    athlete_id: int,
    request: MaxHeartRateRequest,
    athlete_repo: AthleteRepository = Depends(get_athlete_repository)
):
    """
    Set the max heart rate used for heart rate based EXP.

    Send null to go back to moving time based EXP.
    """
    found = await athlete_repo.set_max_heart_rate(athlete_id, request.max_heart_rate)
    if not found:
        raise HTTPException(status_code=404, detail="Athlete not found")

    return {"athlete_id": athlete_id, "max_heart_rate": request.max_heart_rate}


@router.get("/athletes/{discord_id}/exp", response_model=AthleteExpSummary)
async def get_athlete_exp(
    discord_id: str,
    leaderboard_service: LeaderboardService = Depends(get_leaderboard_service)
) -> AthleteExpSummary:
    """30 day and calendar week EXP of a Discord user."""
    return await leaderboard_service.athlete_summary(discord_id)


@router.get("/leaderboard/week", response_model=list[LeaderboardEntry])
async def get_weekly_leaderboard(
    leaderboard_service: LeaderboardService = Depends(get_leaderboard_service)
) -> list[LeaderboardEntry]:
    """EXP gained by everyone this calendar week, highest first."""
    return await leaderboard_service.this_week()
