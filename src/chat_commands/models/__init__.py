"""Data models for chat messages, user profiles, and stored commands."""

from chat_commands.models.command import CommandQuery, CommandRecord
from chat_commands.models.message import Badges, ChatMessage
from chat_commands.models.profile import Country, UserProfile

__all__ = [
    "Badges",
    "ChatMessage",
    "CommandQuery",
    "CommandRecord",
    "Country",
    "UserProfile",
]
