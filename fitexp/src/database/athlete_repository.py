from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pymongo.asynchronous.database import AsyncDatabase

from exceptions import DecodeError, UnauthorizedError
from models.athlete import Athlete, StravaTokens

M = TypeVar("M", bound=BaseModel)


class AthleteRepository:
    """Strava athletes, the Discord members they belong to, and their tokens."""

    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.athletes_collection = db["athletes"]
        self.tokens_collection = db["strava_tokens"]

    async def get_athlete(self, athlete_id: int) -> Athlete | None:
        doc = await self.athletes_collection.find_one({"athlete_id": athlete_id})
        return self._decode(Athlete, doc) if doc else None

    async def get_linked_athlete(self, athlete_id: int) -> Athlete:
        """
        Athlete whose workouts can be posted, i.e. one linked to a Discord member.

        Raises:
            UnauthorizedError: If the athlete never went through /auth/strava or has no Discord link
        """
        athlete = await self.get_athlete(athlete_id)
        if not athlete or not athlete.discord_id:
            raise UnauthorizedError(
                f"Could not post workout: User is not authorized (strava ID: {athlete_id})",
                athlete_id=athlete_id
            )
        return athlete

    async def create_or_update_athlete(self, athlete: Athlete) -> Athlete:
        """Link (or relink) an athlete; max heart rate set earlier survives a relink."""
        athlete.updated_at = datetime.now(timezone.utc)

        await self.athletes_collection.update_one(
            {"athlete_id": athlete.athlete_id},
            {"$set": athlete.model_dump()},
            upsert=True
        )
        return athlete

    async def set_max_heart_rate(self, athlete_id: int, max_heart_rate: int | None) -> bool:
        """Set or clear the max heart rate used for heart rate based EXP."""
        result = await self.athletes_collection.update_one(
            {"athlete_id": athlete_id},
            {"$set": {
                "max_heart_rate": max_heart_rate,
                "updated_at": datetime.now(timezone.utc)
            }}
        )
        return result.matched_count > 0

    async def get_tokens(self, athlete_id: int) -> StravaTokens | None:
        doc = await self.tokens_collection.find_one({"athlete_id": athlete_id})
        return self._decode(StravaTokens, doc) if doc else None

    async def save_tokens(self, tokens: StravaTokens) -> StravaTokens:
        tokens.updated_at = datetime.now(timezone.utc)

        await self.tokens_collection.update_one(
            {"athlete_id": tokens.athlete_id},
            {"$set": tokens.model_dump()},
            upsert=True
        )
        return tokens

    def _decode(self, model: type[M], doc: dict[str, Any]) -> M:
        doc.pop("_id", None)
        try:
            return model(**doc)
        except ValidationError as e:
            raise DecodeError(
                f"Stored {model.__name__} for athlete {doc.get('athlete_id')} is malformed",
                original_error=e
            ) from e
