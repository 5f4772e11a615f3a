"""Command service: dispatch on create, plus the read/patch/remove paths."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from chat_commands.models.command import CommandQuery, CommandRecord
from chat_commands.models.message import ChatMessage
from chat_commands.services.dispatcher import CommandDispatcher
from chat_commands.store.base import CommandStore

logger = logging.getLogger(__name__)

# Only ``ack`` may change once a record is soft-deleted
_DELETED_MUTABLE_FIELDS = frozenset({"ack"})


class CommandService:
    def __init__(
        self,
        commands: CommandStore,
        dispatcher: CommandDispatcher,
        *,
        window_hours: int = 6,
        limit: int = 1000,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.commands = commands
        self.dispatcher = dispatcher
        self.window = timedelta(hours=window_hours)
        self.limit = limit
        self.clock = clock

    async def create(self, message: ChatMessage) -> CommandRecord | None:
        return await self.dispatcher.dispatch(message)

    async def find(self, query: CommandQuery | None = None) -> list[CommandRecord]:
        """List recent, visible, unacknowledged commands newest first.

        Without an explicit created_at range only the trailing window is
        searched. Results are capped at the configured limit.
        """
        query = query or CommandQuery()
        return await self.commands.find(
            query,
            since=self.clock() - self.window,
            limit=self.limit,
        )

    async def patch(self, storage_id: str, updates: dict[str, Any]) -> CommandRecord | None:
        """Set arbitrary fields on a record by storage id.

        Returns None when no such record exists. Soft-deleted records only
        accept ``ack``.
        """
        updates = {key: value for key, value in updates.items() if key not in ("_id", "id")}
        existing = await self.commands.find_one(_id=storage_id)
        if existing is None:
            return None
        if existing.is_deleted:
            updates = {k: v for k, v in updates.items() if k in _DELETED_MUTABLE_FIELDS}
        return await self.commands.find_one_and_update(
            {"_id": storage_id}, updates, upsert=False
        )

    async def remove(self, message_id: str) -> str:
        """Soft-delete the record for a message id. Returns the id."""
        await self.commands.update(
            {"id": message_id, "deleted_at": None},
            {"deleted_at": self.clock()},
        )
        logger.info("Removed command %s", message_id)
        return message_id
