import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from pydantic import BaseModel

from api.workout_routes import get_workout_sync_service
from config import settings
from services.workout_sync import WorkoutSyncService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/strava/webhook", tags=["strava"])


class StravaWebhookEvent(BaseModel):
    """Push subscription event sent by Strava."""
    object_type: str
    object_id: int
    aspect_type: str
    owner_id: int
    subscription_id: int | None = None
    event_time: int | None = None
    updates: dict[str, str | bool] | None = None


async def run_sync(sync_service: WorkoutSyncService, athlete_id: int, activity_id: int) -> None:
    """Run a sync after the webhook has been acknowledged."""
    try:
        await sync_service.post_workout(athlete_id, activity_id)
    except Exception as e:
        logger.error(f"Sync of activity {activity_id} for athlete {athlete_id} failed: {e}", exc_info=True)


@router.get("")
async def webhook_verification(
    hub_mode: str = Query(..., alias="hub.mode"),
    hub_challenge: str = Query(..., alias="hub.challenge"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token")
):
    """
    Handle Strava webhook subscription verification.

    Strava calls this endpoint once when the subscription is created and
    expects the challenge echoed back.
    """
    if hub_mode != "subscribe":
        logger.warning(f"Invalid hub.mode: {hub_mode}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid hub.mode. Must be 'subscribe'."
        )

    expected_token = settings.strava_webhook_verify_token
    if expected_token and hub_verify_token != expected_token:
        logger.warning("Invalid hub.verify_token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid hub.verify_token"
        )

    logger.info("Webhook verification successful")
    return {"hub.challenge": hub_challenge}


@router.post("")
async def webhook_event(
    event: StravaWebhookEvent,
    background_tasks: BackgroundTasks,
    sync_service: WorkoutSyncService = Depends(get_workout_sync_service)
):
    """
    Handle Strava webhook events.

    New and edited activities are (re)posted in the background, Strava only
    waits two seconds for the acknowledgement. Deleted activities are ignored,
    logged workouts are kept.
    """
    logger.info(
        f"Webhook event: object_type={event.object_type}, aspect_type={event.aspect_type}, "
        f"owner_id={event.owner_id}, object_id={event.object_id}"
    )

    if event.object_type != "activity" or event.aspect_type not in ("create", "update"):
        return {"status": "ignored"}

    background_tasks.add_task(run_sync, sync_service, event.owner_id, event.object_id)
    return {"status": "accepted"}
