import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import AsyncIterator, Hashable

from pydantic import BaseModel

from analysis.exp import calculate_exp
from auth.oauth import StravaOAuthService
from clients.discord.client import DiscordClient
from clients.strava.client import StravaClient
from database.athlete_repository import AthleteRepository
from database.workout_repository import WorkoutRepository
from models.strava_activity import StravaStream
from models.workout import Exp, WorkoutRecord, exp_total
from services.rolling_totals import thirty_day_total
from services.workout_post import build_workout_post

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    """Stages of a single workout sync."""
    FETCHING = "fetching"
    SCORING = "scoring"
    RESOLVING = "resolving"
    NOTIFYING = "notifying"
    DONE = "done"
    FAILED = "failed"


class SyncResult(BaseModel):
    """Outcome of posting a workout."""
    athlete_id: int
    discord_id: str
    activity_id: int
    state: SyncState
    exp: Exp
    total_exp: float
    thirty_day_exp: float
    message_id: str
    created: bool


class KeyedLocks:
    """asyncio locks created on demand per key and dropped once unused."""

    def __init__(self):
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._holders: dict[Hashable, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                self._locks.pop(key, None)


# Shared by every service instance in the process
sync_locks = KeyedLocks()


class WorkoutSyncService:
    """
    Posts Strava activities to Discord with the EXP they earned.

    For every sync this will:

    1. Calculate the amount of EXP gained from the activity
    2. Save the workout as a log
    3. Post it to the Strava channel

    If the workout has been posted before, the previous message is edited
    and the logged workout is updated instead.
    """

    def __init__(
        self,
        athlete_repo: AthleteRepository,
        workout_repo: WorkoutRepository,
        oauth_service: StravaOAuthService,
        discord_client: DiscordClient,
        channel_id: str,
        strava_client_factory: Callable[[str], StravaClient] = StravaClient,
        clock: Callable[[], datetime] | None = None,
        locks: KeyedLocks = sync_locks
    ):
        self.athlete_repo = athlete_repo
        self.workout_repo = workout_repo
        self.oauth_service = oauth_service
        self.discord_client = discord_client
        self.channel_id = channel_id
        self.strava_client_factory = strava_client_factory
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.locks = locks

    async def post_workout(self, athlete_id: int, activity_id: int) -> SyncResult:
        """
        Score an activity and post (or re-post) it.

        Syncing the same activity any number of times leaves one logged
        workout and one message.

        Args:
            athlete_id: Strava athlete ID owning the activity
            activity_id: Strava activity ID

        Returns:
            SyncResult of the finished sync

        Raises:
            UnauthorizedError: If the athlete isn't linked or has no credential
            UpstreamUnavailableError: If the activity, member or message calls fail
        """
        async with self.locks.hold((athlete_id, activity_id)):
            return await self._post_workout(athlete_id, activity_id)

    async def _post_workout(self, athlete_id: int, activity_id: int) -> SyncResult:
        now = self.clock()
        state = self._enter(SyncState.FETCHING, activity_id)

        try:
            athlete = await self.athlete_repo.get_linked_athlete(athlete_id)
            tokens = await self.oauth_service.get_valid_tokens(athlete_id)
            strava = self.strava_client_factory(tokens.access_token)

            member, history, activity, streams = await asyncio.gather(
                asyncio.to_thread(self.discord_client.find_member, athlete.discord_id),
                self.workout_repo.thirty_day_history(athlete.discord_id, now),
                asyncio.to_thread(strava.get_activity, activity_id),
                self._fetch_streams(strava, activity_id)
            )
        except Exception as e:
            state = self._enter(SyncState.FAILED, activity_id)
            logger.error(f"Fetching activity {activity_id} for athlete {athlete_id} failed: {e}")
            raise

        state = self._enter(SyncState.SCORING, activity_id)
        exp = calculate_exp(athlete.max_heart_rate, activity, streams)
        weekly_exp = thirty_day_total(history, activity.id, exp, now)
        content = build_workout_post(activity, member, athlete.gender, exp, weekly_exp)

        state = self._enter(SyncState.RESOLVING, activity_id)
        previously_recorded = await self.workout_repo.find_existing(athlete.discord_id, activity.id)

        if previously_recorded:
            message = await asyncio.to_thread(
                self.discord_client.edit_message,
                self.channel_id,
                previously_recorded.message_id,
                content
            )
            await self.workout_repo.update(previously_recorded.model_copy(update={
                "activity_name": activity.name,
                "activity_type": activity.type,
                "exp": exp
            }))
        else:
            message = await asyncio.to_thread(self.discord_client.broadcast, self.channel_id, content)
            await self.workout_repo.insert(WorkoutRecord(
                discord_id=athlete.discord_id,
                activity_id=activity.id,
                activity_name=activity.name,
                activity_type=activity.type,
                timestamp=activity.start_date,
                message_id=message.id,
                exp=exp
            ))

        state = self._enter(SyncState.NOTIFYING, activity_id)
        state = self._enter(SyncState.DONE, activity_id)
        logger.info(
            f"Synced activity {activity.id} for {athlete.discord_id}: "
            f"{exp_total(exp):.2f} exp ({exp.type}), {'created' if not previously_recorded else 'updated'}"
        )

        return SyncResult(
            athlete_id=athlete_id,
            discord_id=athlete.discord_id,
            activity_id=activity.id,
            state=state,
            exp=exp,
            total_exp=exp_total(exp),
            thirty_day_exp=weekly_exp,
            message_id=message.id,
            created=previously_recorded is None
        )

    async def _fetch_streams(self, strava: StravaClient, activity_id: int) -> dict[str, StravaStream]:
        """Streams are optional: without them the activity is scored by moving time."""
        try:
            return await asyncio.to_thread(strava.get_activity_streams, activity_id)
        except Exception as e:
            logger.warning(f"Could not fetch streams for activity {activity_id}, using moving time: {e}", exc_info=True)
            return {}

    def _enter(self, state: SyncState, activity_id: int) -> SyncState:
        logger.debug(f"Activity {activity_id}: {state.value}")
        return state
