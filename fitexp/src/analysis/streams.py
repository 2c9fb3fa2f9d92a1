"""
Pairing of independently sampled Strava streams into timed intervals.
"""
from collections.abc import Sequence

import pandas as pd

from models.strava_activity import StravaStream


INTERVAL_COLUMNS = ["heart_rate", "seconds"]


def stream_data(streams: dict[str, StravaStream], stream_type: str) -> list[float]:
    """Samples of one stream type, or an empty list when it wasn't recorded."""
    stream = streams.get(stream_type)
    return list(stream.data) if stream else []


def align_streams(heart_rate: Sequence[float], time: Sequence[float]) -> pd.DataFrame:
    """
    Pair heart rate samples with the time until the next sample.

    Sample i of both streams is assumed to be recorded at the same moment. The
    result has one row per index in [0, n-1) where n is the length of the
    shorter stream; `seconds` is time[i+1] - time[i]. The last sample has no
    successor and contributes no duration, so it is dropped. Gaps in the
    recording pass through unchanged.

    Args:
        heart_rate: Heart rate samples (bpm)
        time: Elapsed time of each sample (seconds from start)

    Returns:
        DataFrame with `heart_rate` and `seconds` columns, empty if either
        stream is empty
    """
    n = min(len(heart_rate), len(time))
    if n < 2:
        return pd.DataFrame(columns=INTERVAL_COLUMNS, dtype=float)

    hr = pd.Series(heart_rate[:n], dtype=float)
    elapsed = pd.Series(time[:n], dtype=float)
    seconds = elapsed.diff().shift(-1)

    intervals = pd.DataFrame({"heart_rate": hr, "seconds": seconds})
    return intervals.iloc[:-1].reset_index(drop=True)
