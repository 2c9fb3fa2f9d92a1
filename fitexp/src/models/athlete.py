from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, Field


class Athlete(BaseModel):
    """A Discord member linked to their Strava account."""

    athlete_id: int = Field(..., description="Strava athlete ID")
    discord_id: str = Field(..., description="Discord user ID that workouts are posted for")
    gender: Literal["M", "F"] | None = Field(None, description="Strava sex, used to pick post emojis")
    max_heart_rate: int | None = Field(None, description="Max heart rate, enables heart rate based EXP")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StravaTokens(BaseModel):
    """Strava OAuth tokens model - stored separately from athlete data."""

    athlete_id: int = Field(..., description="Strava athlete ID")
    access_token: str
    refresh_token: str
    expires_at: int  # Unix timestamp
    token_type: str = "Bearer"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MaxHeartRateRequest(BaseModel):
    """Request model for setting an athlete's max heart rate."""
    max_heart_rate: int | None = Field(None, ge=100, le=250, description="Max heart rate, null to disable")
