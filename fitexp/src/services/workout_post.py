"""
Discord embed for a synced workout.
"""
from typing import Any

from clients.discord.client import Member
from models.strava_activity import ActivityType, StravaActivity
from models.workout import HeartRateExp, TimeExp, exp_total


JUST_DID = {
    ActivityType.RIDE: "just went for a ride",
    ActivityType.RUN: "just went for a run",
    ActivityType.YOGA: "just did some yoga",
    ActivityType.HIKE: "just went on a hike",
    ActivityType.WALK: "just went on a walk",
    ActivityType.WORKOUT: "just did a workout",
    ActivityType.CROSSFIT: "just did crossfit",
    ActivityType.ROCK_CLIMBING: "just went rock climbing",
    ActivityType.WEIGHT_TRAINING: "just lifted some weights",
}

EMOJI = {
    ActivityType.RIDE: ("🚴‍♂️", "🚴‍♀️"),
    ActivityType.RUN: ("🏃‍♂️", "🏃‍♀️"),
    ActivityType.YOGA: ("🧘‍♂️", "🧘‍♀️"),
    ActivityType.HIKE: ("⛰️", "⛰️"),
    ActivityType.WALK: ("🚶‍♂️", "🚶‍♀️"),
    ActivityType.CROSSFIT: ("🏋️‍♂️", "🏋️‍♀️"),
    ActivityType.WEIGHT_TRAINING: ("🏋️‍♂️", "🏋️‍♀️"),
    ActivityType.ROCK_CLIMBING: ("🧗‍♂️", "🧗‍♀️"),
}


def format_exp(amount: float) -> str:
    if amount >= 1000:
        return f"{amount / 1000:.2f}k"
    return f"{amount:.2f}"


def format_duration(seconds: int) -> str:
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def format_pace(meters_per_second: float) -> str:
    """Minutes per mile."""
    if meters_per_second <= 0:
        return "-"
    total = int(round(26.8224 / meters_per_second * 60))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def just_did(activity: StravaActivity) -> str:
    return JUST_DID.get(activity.activity_type, f"just recorded a {activity.type}")


def activity_emoji(activity: StravaActivity, gender: str | None) -> str:
    male, female = EMOJI.get(activity.activity_type, ("🤸‍♂️", "🤸‍♀️"))
    return female if gender == "F" else male


def gained_text(exp: HeartRateExp | TimeExp) -> str:
    """Footer text with the EXP gained from this workout."""
    total = f"Gained {format_exp(exp_total(exp))}"
    match exp:
        case HeartRateExp(moderate=moderate, vigorous=vigorous):
            return f"{total} exp ({format_exp(moderate)}+ {format_exp(vigorous)}++)"
        case TimeExp():
            return total
        case _:
            raise TypeError(f"Unknown exp variant: {type(exp).__name__}")


def activity_stats(activity: StravaActivity) -> list[dict[str, Any]]:
    """Stats worth showing for the kind of activity, heart rate otherwise."""
    def field(name: str, value: str) -> dict[str, Any]:
        return {"name": name, "value": value, "inline": True}

    fields = [field("Elapsed", format_duration(activity.elapsed_time))]

    heart_rate = []
    if activity.has_heartrate and activity.average_heartrate and activity.max_heartrate:
        heart_rate = [
            field("Avg HR", str(int(activity.average_heartrate))),
            field("Max HR", str(int(activity.max_heartrate))),
        ]

    has_gps = activity.distance > 0
    distance = field("Distance", f"{activity.distance * 0.000621371192:.2f}mi")
    elevation = field("Elevation", f"{activity.total_elevation_gain * 3.2808399:.0f}ft")

    match activity.activity_type:
        case ActivityType.RUN:
            fields += [distance, field("Pace", format_pace(activity.average_speed))] if has_gps else heart_rate
        case ActivityType.HIKE | ActivityType.RIDE:
            fields += [distance, elevation] if has_gps else heart_rate
        case ActivityType.WALK:
            fields += ([distance] if has_gps else []) + heart_rate[:1]
        case _:
            fields += heart_rate

    return fields


def build_workout_post(
    activity: StravaActivity,
    member: Member,
    gender: str | None,
    exp: HeartRateExp | TimeExp,
    weekly_exp: float,
) -> dict[str, Any]:
    """Message payload posted to (or edited in) the Strava channel."""
    embed = {
        "color": member.color,
        "author": {"name": f"{activity_emoji(activity, gender)} {member.display_name} {just_did(activity)}"},
        "description": activity.description or "",
        "fields": activity_stats(activity),
        "footer": {"text": f"{gained_text(exp)} | {format_exp(weekly_exp)} exp this week"},
    }
    if member.avatar_url:
        embed["thumbnail"] = {"url": member.avatar_url}

    return {"embeds": [embed]}
