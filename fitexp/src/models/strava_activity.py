from datetime import datetime
from enum import Enum
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, Enum):
    """Strava activity types that get special treatment in posts."""
    RIDE = "Ride"
    RUN = "Run"
    YOGA = "Yoga"
    CROSSFIT = "Crossfit"
    HIKE = "Hike"
    WALK = "Walk"
    WEIGHT_TRAINING = "WeightTraining"
    ROCK_CLIMBING = "RockClimbing"
    WORKOUT = "Workout"

    @classmethod
    def parse(cls, value: str) -> "ActivityType | None":
        """Map a raw Strava type to a known ActivityType, None for anything else."""
        try:
            return cls(value)
        except ValueError:
            return None


class StravaActivity(BaseModel):
    """Activity as returned by the Strava `GET /activities/{id}` endpoint."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Strava activity ID")
    athlete_id: int = Field(..., description="Strava athlete ID of the owner")
    start_date: datetime = Field(..., description="When the activity was started (UTC)")
    moving_time: int = Field(0, description="Time actually spent moving, in seconds")
    elapsed_time: int = Field(0, description="Total time recorded, in seconds")
    distance: float = Field(0.0, description="Distance traveled, in meters")
    total_elevation_gain: float = Field(0.0, description="Elevation gain, in meters")
    has_heartrate: bool = False
    average_heartrate: float | None = None
    max_heartrate: float | None = None
    type: str = Field(..., description="Raw Strava activity type (Run, Ride, ...)")
    name: str = ""
    description: str | None = None
    private: bool = False
    average_speed: float = Field(0.0, description="Average speed, in meters/second")

    @property
    def activity_type(self) -> ActivityType | None:
        return ActivityType.parse(self.type)

    @classmethod
    def from_strava(cls, data: dict[str, Any]) -> "StravaActivity":
        """Build an activity from the raw API payload."""
        athlete = data.get("athlete") or {}
        return cls(
            id=data["id"],
            athlete_id=athlete.get("id", data.get("athlete_id", 0)),
            start_date=data["start_date"],
            moving_time=data.get("moving_time", 0),
            elapsed_time=data.get("elapsed_time", 0),
            distance=data.get("distance") or 0.0,
            total_elevation_gain=data.get("total_elevation_gain") or 0.0,
            has_heartrate=data.get("has_heartrate", False),
            average_heartrate=data.get("average_heartrate"),
            max_heartrate=data.get("max_heartrate"),
            type=data.get("type", "Workout"),
            name=data.get("name", ""),
            description=data.get("description"),
            private=data.get("private", False),
            average_speed=data.get("average_speed") or 0.0,
        )


class StravaStream(BaseModel):
    """A single stream from `GET /activities/{id}/streams`."""

    type: str = Field(..., description="Stream type (heartrate, time, distance, ...)")
    data: list[float] = Field(default_factory=list, description="Samples recorded in the activity")
    series_type: Literal["distance", "time"] = "time"
    original_size: int = 0
    resolution: str = "high"
