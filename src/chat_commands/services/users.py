"""User profile service."""

import logging
from typing import Any

from chat_commands.models.profile import UserProfile
from chat_commands.store.base import ProfileStore

logger = logging.getLogger(__name__)

_PATCHABLE_FIELDS = frozenset(UserProfile.model_fields) - {"name"}


class UserService:
    def __init__(self, profiles: ProfileStore) -> None:
        self.profiles = profiles

    async def get(self, username: str) -> UserProfile | None:
        return await self.profiles.get(username)

    async def patch(self, username: str, fields: dict[str, Any]) -> UserProfile:
        """Upsert profile fields. Raises ValueError for fields a profile does not have."""
        unknown = set(fields) - _PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        # Validate values against the model before they reach the store
        validated = UserProfile.model_validate({"name": username, **fields})
        updates = {key: getattr(validated, key) for key in fields}
        updates = {
            key: value.model_dump() if hasattr(value, "model_dump") else value
            for key, value in updates.items()
        }
        return await self.profiles.patch(username, updates)
