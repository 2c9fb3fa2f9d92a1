"""
Workout scoring.

Turns Strava heart rate/time streams into EXP:
- Stream alignment into (heart rate, duration) intervals
- Heart rate zone classification
- Heart rate or moving time based EXP
"""

from analysis.exp import calculate_exp, heart_rate_exp
from analysis.streams import align_streams, stream_data
from analysis.zones import HeartRateZone, ZoneThresholds, classify_heart_rate, classify_series
from models.workout import exp_total

__all__ = [
    # Scoring
    'calculate_exp',
    'heart_rate_exp',
    'exp_total',

    # Streams
    'align_streams',
    'stream_data',

    # Zones
    'HeartRateZone',
    'ZoneThresholds',
    'classify_heart_rate',
    'classify_series',
]
