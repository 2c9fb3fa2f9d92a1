"""
Discord REST client used as the notification sink for synced workouts.
"""
import logging
from typing import Any

import requests
from pydantic import BaseModel

from exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class PostedMessage(BaseModel):
    id: str
    channel_id: str


class Member(BaseModel):
    """Display information of a guild member."""
    user_id: str
    display_name: str
    avatar_url: str | None = None
    color: int = 0xFC4C02  # Strava orange


class DiscordClient:
    """Minimal bot client: post, edit and look up members."""

    BASE_URL = "https://discord.com/api/v10"
    CDN_URL = "https://cdn.discordapp.com"

    def __init__(self, bot_token: str, guild_id: str = ""):
        self.guild_id = guild_id
        self.headers = {
            'Authorization': f'Bot {bot_token}',
            'Content-Type': 'application/json'
        }

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.BASE_URL}{path}"
        try:
            response = requests.request(method, url, headers=self.headers, json=payload)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise UpstreamUnavailableError(f"Discord {method} {path} failed: {e}", original_error=e) from e

    def broadcast(self, channel_id: str, content: dict[str, Any]) -> PostedMessage:
        """Post a new message and return its reference."""
        data = self._request("POST", f"/channels/{channel_id}/messages", content)
        logger.info(f"Posted message {data['id']} to channel {channel_id}")
        return PostedMessage(id=data["id"], channel_id=channel_id)

    def edit_message(self, channel_id: str, message_id: str, content: dict[str, Any]) -> PostedMessage:
        """Replace the content of a previously posted message."""
        self._request("PATCH", f"/channels/{channel_id}/messages/{message_id}", content)
        logger.info(f"Edited message {message_id} in channel {channel_id}")
        return PostedMessage(id=message_id, channel_id=channel_id)

    def find_member(self, user_id: str) -> Member:
        """Look up the guild member a workout is posted for."""
        data = self._request("GET", f"/guilds/{self.guild_id}/members/{user_id}")
        user = data.get("user", {})

        display_name = data.get("nick") or user.get("global_name") or user.get("username") or user_id
        avatar_url = None
        if user.get("avatar"):
            avatar_url = f"{self.CDN_URL}/avatars/{user_id}/{user['avatar']}.png"

        return Member(user_id=user_id, display_name=display_name, avatar_url=avatar_url)
