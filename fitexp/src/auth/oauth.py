import asyncio
import logging
import time
from urllib.parse import urlencode
import requests

from config import settings
from exceptions import UnauthorizedError
from models.athlete import Athlete, StravaTokens
from database.athlete_repository import AthleteRepository

logger = logging.getLogger(__name__)


class StravaOAuthService:
    """Service for handling Strava OAuth flow and token management."""

    AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
    TOKEN_URL = "https://www.strava.com/oauth/token"

    def __init__(self, athlete_repo: AthleteRepository):
        self.athlete_repo = athlete_repo

    def get_authorization_url(self, state: str | None = None) -> str:
        """Generate Strava authorization URL; `state` carries the Discord user ID."""
        params = {
            "client_id": settings.strava_client_id,
            "redirect_uri": settings.strava_redirect_uri,
            "response_type": "code",
            "scope": "read,activity:read_all,profile:read_all",
            "approval_prompt": "auto"
        }

        if state:
            params["state"] = state

        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code_for_tokens(self, code: str, discord_id: str) -> tuple[Athlete, StravaTokens]:
        """Exchange authorization code for tokens and link the athlete to a Discord user."""
        data = {
            "client_id": settings.strava_client_id,
            "client_secret": settings.strava_client_secret,
            "code": code,
            "grant_type": "authorization_code"
        }

        response = await asyncio.to_thread(requests.post, self.TOKEN_URL, data=data)

        # If error, log the response details
        if not response.ok:
            logger.error(f"Strava token exchange failed ({response.status_code}): {response.text}")
            response.raise_for_status()

        token_data = response.json()

        # Extract athlete info from response, keeping settings of an already linked athlete
        athlete_data = token_data.get("athlete", {})
        athlete = await self.athlete_repo.get_athlete(athlete_data["id"])
        if athlete:
            athlete.discord_id = discord_id
            athlete.gender = athlete_data.get("sex") or athlete.gender
        else:
            athlete = Athlete(
                athlete_id=athlete_data["id"],
                discord_id=discord_id,
                gender=athlete_data.get("sex") or None
            )

        tokens = StravaTokens(
            athlete_id=athlete.athlete_id,
            access_token=token_data["access_token"],
            refresh_token=token_data["refresh_token"],
            expires_at=token_data["expires_at"],
            token_type=token_data.get("token_type", "Bearer")
        )

        # Save to database
        await self.athlete_repo.create_or_update_athlete(athlete)
        await self.athlete_repo.save_tokens(tokens)
        logger.info(f"Linked Strava athlete {athlete.athlete_id} to Discord user {discord_id}")

        return athlete, tokens

    async def refresh_access_token(self, tokens: StravaTokens) -> StravaTokens:
        """Refresh the access token using the refresh token."""
        data = {
            "client_id": settings.strava_client_id,
            "client_secret": settings.strava_client_secret,
            "refresh_token": tokens.refresh_token,
            "grant_type": "refresh_token"
        }

        try:
            response = await asyncio.to_thread(requests.post, self.TOKEN_URL, data=data)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise UnauthorizedError(
                f"Could not refresh Strava token: {e}",
                athlete_id=tokens.athlete_id
            ) from e

        token_data = response.json()

        # Update tokens
        tokens.access_token = token_data["access_token"]
        tokens.refresh_token = token_data["refresh_token"]
        tokens.expires_at = token_data["expires_at"]

        # Save updated tokens
        await self.athlete_repo.save_tokens(tokens)
        logger.debug(f"Refreshed Strava token for athlete {tokens.athlete_id}")

        return tokens

    async def get_valid_tokens(self, athlete_id: int) -> StravaTokens:
        """
        Get valid tokens, refreshing if necessary.

        Raises:
            UnauthorizedError: If the athlete never authorized or the refresh fails
        """
        tokens = await self.athlete_repo.get_tokens(athlete_id)
        if not tokens or not tokens.refresh_token:
            raise UnauthorizedError(
                f"User is not authorized (strava ID: {athlete_id})",
                athlete_id=athlete_id
            )

        # Check if token is expired or will expire in the next 5 minutes
        current_time = int(time.time())
        if tokens.expires_at <= current_time + 300:
            tokens = await self.refresh_access_token(tokens)

        return tokens
