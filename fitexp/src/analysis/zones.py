"""
Heart rate zones relative to an athlete's max heart rate.
"""
from dataclasses import dataclass
from enum import Enum

import pandas as pd


MODERATE_RATIO = 0.5
VIGOROUS_RATIO = 0.75


class HeartRateZone(str, Enum):
    BELOW = "below"
    MODERATE = "moderate"
    VIGOROUS = "vigorous"


@dataclass(frozen=True)
class ZoneThresholds:
    moderate: float
    vigorous: float

    @classmethod
    def from_max_heart_rate(cls, max_heart_rate: float) -> "ZoneThresholds":
        return cls(
            moderate=max_heart_rate * MODERATE_RATIO,
            vigorous=max_heart_rate * VIGOROUS_RATIO,
        )


def classify_heart_rate(bpm: float, thresholds: ZoneThresholds) -> HeartRateZone:
    """Classify a single sample; a vigorous sample is never also moderate."""
    if bpm >= thresholds.vigorous:
        return HeartRateZone.VIGOROUS
    if bpm >= thresholds.moderate:
        return HeartRateZone.MODERATE
    return HeartRateZone.BELOW


def classify_series(heart_rate: pd.Series, thresholds: ZoneThresholds) -> pd.Series:
    """Vectorised `classify_heart_rate` over a series of samples."""
    zones = pd.Series(HeartRateZone.BELOW, index=heart_rate.index, dtype=object)
    zones[heart_rate >= thresholds.moderate] = HeartRateZone.MODERATE
    zones[heart_rate >= thresholds.vigorous] = HeartRateZone.VIGOROUS
    return zones
