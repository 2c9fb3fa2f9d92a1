"""Strava client."""

from clients.strava.client import StravaClient

__all__ = [
    "StravaClient",
]
