"""
EXP results and the workout records they are persisted in.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal
from pydantic import BaseModel, Field, field_validator


class HeartRateExp(BaseModel):
    """EXP earned from time spent in heart rate zones.

    `vigorous` is stored already weighted (2 exp per vigorous second).
    """
    type: Literal["hr"] = "hr"
    moderate: float = 0.0
    vigorous: float = 0.0


class TimeExp(BaseModel):
    """EXP earned from moving time when no heart rate data is available."""
    type: Literal["time"] = "time"
    minutes: float = 0.0


Exp = Annotated[HeartRateExp | TimeExp, Field(discriminator="type")]


def exp_total(exp: HeartRateExp | TimeExp) -> float:
    """Reduce either EXP variant to the amount of EXP gained."""
    match exp:
        case HeartRateExp(moderate=moderate, vigorous=vigorous):
            return moderate + vigorous
        case TimeExp(minutes=minutes):
            return minutes
        case _:
            raise TypeError(f"Unknown exp variant: {type(exp).__name__}")


class WorkoutRecord(BaseModel):
    """A scored activity, stored once per (discord_id, activity_id)."""

    discord_id: str = Field(..., description="Discord user ID of the owner")
    activity_id: int = Field(..., description="Strava activity ID")
    activity_name: str = ""
    activity_type: str = ""
    timestamp: datetime = Field(..., description="Start of the activity")
    message_id: str = Field(..., description="ID of the Discord message the workout was posted as")
    exp: Exp
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator('timestamp', mode='after')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Documents read without a tz aware client come back naive
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def total_exp(self) -> float:
        return exp_total(self.exp)


class AthleteExpSummary(BaseModel):
    """Rolling EXP totals for a single owner."""
    discord_id: str
    thirty_day_exp: float = 0.0
    week_exp: float = 0.0


class LeaderboardEntry(BaseModel):
    discord_id: str
    exp: float
    workouts: int
