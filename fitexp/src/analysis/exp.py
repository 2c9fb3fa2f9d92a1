"""
EXP calculation for a single activity.

If the athlete has a max heart rate set and the activity was recorded with a
heart rate compatible device, every second in the moderate zone (50% of max
HR) earns 1 exp and every second in the vigorous zone (75% of max HR) earns 2.
Without heart rate data the activity earns 1 exp per minute of moving time.
"""
import logging

from analysis.streams import align_streams, stream_data
from analysis.zones import HeartRateZone, ZoneThresholds, classify_series
from models.strava_activity import StravaActivity, StravaStream
from models.workout import HeartRateExp, TimeExp

logger = logging.getLogger(__name__)

VIGOROUS_WEIGHT = 2


def calculate_exp(
    max_heart_rate: float | None,
    activity: StravaActivity,
    streams: dict[str, StravaStream],
) -> HeartRateExp | TimeExp:
    """
    Calculate the amount of EXP gained from a workout.

    Args:
        max_heart_rate: The athlete's max heart rate, None if not set
        activity: Activity data from Strava
        streams: Streams keyed by type; only `heartrate` and `time` are used

    Returns:
        HeartRateExp when heart rate scoring is possible, TimeExp otherwise
    """
    heart_rate = stream_data(streams, "heartrate")
    time = stream_data(streams, "time")

    if max_heart_rate and heart_rate and time:
        return heart_rate_exp(max_heart_rate, heart_rate, time)

    logger.debug(f"Using moving time for activity {activity.id} (max HR set: {bool(max_heart_rate)})")
    return TimeExp(minutes=activity.moving_time / 60)


def heart_rate_exp(max_heart_rate: float, heart_rate: list[float], time: list[float]) -> HeartRateExp:
    """Score aligned heart rate/time samples against the athlete's zones."""
    thresholds = ZoneThresholds.from_max_heart_rate(max_heart_rate)
    intervals = align_streams(heart_rate, time)

    if intervals.empty:
        return HeartRateExp(moderate=0.0, vigorous=0.0)

    zones = classify_series(intervals["heart_rate"], thresholds)
    moderate_seconds = float(intervals.loc[zones == HeartRateZone.MODERATE, "seconds"].sum())
    vigorous_seconds = float(intervals.loc[zones == HeartRateZone.VIGOROUS, "seconds"].sum())

    return HeartRateExp(
        moderate=moderate_seconds,
        vigorous=vigorous_seconds * VIGOROUS_WEIGHT,
    )
