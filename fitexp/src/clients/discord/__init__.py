"""Discord client."""

from clients.discord.client import DiscordClient, Member, PostedMessage

__all__ = [
    "DiscordClient",
    "Member",
    "PostedMessage",
]
