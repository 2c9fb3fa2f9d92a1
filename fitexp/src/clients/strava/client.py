"""
Strava API client for the activity data needed to score workouts.
Uses direct API calls with an athlete's access token.
"""
import logging
from typing import Any

import requests

from exceptions import UpstreamUnavailableError
from models.strava_activity import StravaActivity, StravaStream

logger = logging.getLogger(__name__)


class StravaClient:
    """Strava API client authenticated as a single athlete."""

    BASE_URL = "https://www.strava.com/api/v3"
    STREAM_TYPES = ["heartrate", "time"]

    def __init__(self, access_token: str):
        if not access_token:
            raise ValueError("A Strava access token is required")

        self.access_token = access_token
        self.headers = {
            'Authorization': f'Bearer {self.access_token}',
            'Content-Type': 'application/json'
        }

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.BASE_URL}{path}"
        try:
            response = requests.get(url, headers=self.headers, params=params)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise UpstreamUnavailableError(f"Strava request to {path} failed: {e}", original_error=e) from e

    def get_activity(self, activity_id: int) -> StravaActivity:
        """
        Get a detailed activity.

        Args:
            activity_id: Strava activity ID

        Returns:
            StravaActivity

        Raises:
            UpstreamUnavailableError: If the activity could not be fetched
        """
        data = self._get(f"/activities/{activity_id}")
        return StravaActivity.from_strava(data)

    def get_activity_streams(self, activity_id: int) -> dict[str, StravaStream]:
        """
        Get the heart rate and time streams for an activity.

        Activities recorded without a heart rate monitor only return the
        time stream, manual activities return none at all.

        Args:
            activity_id: Strava activity ID

        Returns:
            Dictionary of stream type to StravaStream objects

        Raises:
            UpstreamUnavailableError: If the streams could not be fetched
        """
        params = {
            'keys': ','.join(self.STREAM_TYPES),
            'key_by_type': 'true'
        }
        streams_data = self._get(f"/activities/{activity_id}/streams", params=params)

        streams = {}
        for stream_type, stream_info in streams_data.items():
            if 'data' in stream_info:
                streams[stream_type] = StravaStream(
                    type=stream_type,
                    data=stream_info['data'],
                    series_type=stream_info.get('series_type', 'time'),
                    original_size=stream_info.get('original_size', len(stream_info['data'])),
                    resolution=stream_info.get('resolution', 'high')
                )

        logger.debug(f"Fetched streams {list(streams)} for activity {activity_id}")
        return streams
