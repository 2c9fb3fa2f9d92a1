import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError
from pymongo.asynchronous.database import AsyncDatabase

from exceptions import DecodeError, InvalidArgumentsError
from models.workout import WorkoutRecord

logger = logging.getLogger(__name__)

HISTORY_DAYS = 30


class WorkoutRepository:
    """Repository for scored workouts, one document per (discord_id, activity_id)."""

    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.collection = db["workouts"]

    async def find_existing(self, discord_id: str, activity_id: int) -> WorkoutRecord | None:
        """
        Get the workout logged for an activity.

        Args:
            discord_id: Discord user ID of the owner
            activity_id: Strava activity ID

        Returns:
            WorkoutRecord or None if the activity was never synced
        """
        doc = await self.collection.find_one({
            "discord_id": discord_id,
            "activity_id": activity_id
        })

        if doc:
            return self._decode(doc)

        return None

    async def insert(self, record: WorkoutRecord) -> WorkoutRecord:
        """
        Log a newly synced workout.

        Raises:
            InvalidArgumentsError: If the owner or the activity is missing
        """
        if not record.discord_id:
            raise InvalidArgumentsError("Trying to log a workout but no user is provided", field="discord_id")
        if not record.activity_id or record.activity_id < 0:
            raise InvalidArgumentsError("Trying to save workout without mapping to an activity", field="activity_id")

        await self.collection.insert_one(record.model_dump())
        logger.info(f"Logged workout {record.activity_id} for {record.discord_id}")
        return record

    async def update(self, record: WorkoutRecord) -> bool:
        """
        Overwrite the name, type and EXP of a logged workout.

        The message ID and the original timestamp are left untouched.

        Returns:
            True if a logged workout was found
        """
        result = await self.collection.update_one(
            {
                "discord_id": record.discord_id,
                "activity_id": record.activity_id
            },
            {
                "$set": {
                    "activity_name": record.activity_name,
                    "activity_type": record.activity_type,
                    "exp": record.exp.model_dump(),
                    "updated_at": datetime.now(timezone.utc)
                }
            }
        )

        if result.matched_count == 0:
            logger.warning(f"No logged workout {record.activity_id} for {record.discord_id} to update")
        return result.matched_count > 0

    async def find(
        self,
        start: datetime,
        end: datetime,
        query: dict[str, Any] | None = None
    ) -> list[WorkoutRecord]:
        """
        Get workouts that started between two points in time (exclusive).

        Args:
            start: Lower bound of the workout timestamp
            end: Upper bound of the workout timestamp
            query: Additional filter, e.g. {"discord_id": ...}

        Returns:
            List of WorkoutRecord objects
        """
        cursor = self.collection.find({
            **(query or {}),
            "timestamp": {
                "$gt": start,
                "$lt": end
            }
        })

        records = []
        async for doc in cursor:
            records.append(self._decode(doc))

        return records

    async def thirty_day_history(self, discord_id: str, now: datetime | None = None) -> list[WorkoutRecord]:
        """Workouts of one owner in (now - 30 days, now]."""
        now = now or datetime.now(timezone.utc)
        return await self.find(
            now - timedelta(days=HISTORY_DAYS),
            now + timedelta(microseconds=1),
            {"discord_id": discord_id}
        )

    def _decode(self, doc: dict[str, Any]) -> WorkoutRecord:
        # Remove MongoDB _id field before creating model
        doc.pop("_id", None)
        try:
            return WorkoutRecord.model_validate(doc)
        except ValidationError as e:
            raise DecodeError(
                f"Stored workout {doc.get('activity_id')} could not be decoded",
                original_error=e
            ) from e
