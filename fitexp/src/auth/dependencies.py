from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from auth.oauth import StravaOAuthService
from config import settings
from clients.discord.client import DiscordClient
from database.athlete_repository import AthleteRepository
from database.mongodb import get_db


async def get_athlete_repository(db: AsyncDatabase = Depends(get_db)) -> AthleteRepository:
    """Dependency to get athlete repository."""
    return AthleteRepository(db)


async def get_oauth_service(
    athlete_repo: AthleteRepository = Depends(get_athlete_repository)
) -> StravaOAuthService:
    """Dependency to get OAuth service."""
    return StravaOAuthService(athlete_repo)


async def get_discord_client() -> DiscordClient:
    """Dependency to get the Discord client workouts are posted with."""
    return DiscordClient(settings.discord_bot_token, settings.discord_guild_id)
