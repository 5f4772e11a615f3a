"""Question view over the command store.

A question is any record that was given a ``num`` by a submission command.
Removal is a soft delete; archiving marks the question as resolved.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from chat_commands.models.command import CommandRecord
from chat_commands.store.base import CommandStore

logger = logging.getLogger(__name__)


class QuestionService:
    def __init__(
        self,
        commands: CommandStore,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.commands = commands
        self.clock = clock

    async def find(self) -> list[CommandRecord]:
        """Return open questions in submission order."""
        return await self.commands.find_questions()

    async def remove(self, storage_id: str) -> str:
        """Soft-delete a question. Already deleted questions keep their original timestamp."""
        count = await self.commands.update(
            {"_id": storage_id, "deleted_at": None},
            {"deleted_at": self.clock()},
        )
        if count:
            logger.info("Removed question %s", storage_id)
        return storage_id

    async def archive(self, storage_id: str) -> CommandRecord | None:
        """Mark a question as resolved. Returns None if it does not exist or is deleted."""
        return await self.commands.find_one_and_update(
            {"_id": storage_id, "deleted_at": None},
            {"archived": True},
            upsert=False,
        )
