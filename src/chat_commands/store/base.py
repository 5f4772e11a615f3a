"""Collaborator interfaces for the profile, command and sequence stores.

The dispatcher only depends on these protocols. Any implementation must
raise StoreError (or a subclass) for I/O failures; "not found" is reported
as None, never as an exception.
"""

from datetime import datetime
from typing import Any, Protocol

from chat_commands.models.command import CommandQuery, CommandRecord
from chat_commands.models.profile import UserProfile


class StoreError(Exception):
    """A storage collaborator failed to complete an operation."""


class ProfileStore(Protocol):
    async def get(self, username: str) -> UserProfile | None: ...

    async def patch(self, username: str, fields: dict[str, Any]) -> UserProfile:
        """Upsert ``fields`` onto the profile. A None value clears the field."""
        ...


class SequenceGenerator(Protocol):
    async def increment_and_get(self, name: str) -> int:
        """Atomically increment the named counter and return the new value."""
        ...


class CommandStore(Protocol):
    async def find_one(self, **criteria: Any) -> CommandRecord | None: ...

    async def find_one_and_update(
        self,
        criteria: dict[str, Any],
        fields: dict[str, Any],
        *,
        upsert: bool = True,
        on_insert: dict[str, Any] | None = None,
    ) -> CommandRecord | None:
        """Set ``fields`` on the record matching ``criteria``.

        With ``upsert`` a missing record is created from criteria + fields,
        plus ``on_insert`` which is never applied to an existing record.
        Returns the record after the update, or None if nothing matched.
        """
        ...

    async def update(self, criteria: dict[str, Any], fields: dict[str, Any]) -> int:
        """Set ``fields`` on every record matching ``criteria``. Returns the match count."""
        ...

    async def find(
        self,
        query: CommandQuery,
        *,
        since: datetime | None = None,
        limit: int,
    ) -> list[CommandRecord]:
        """Return non-deleted, non-acknowledged records matching ``query``, newest first.

        ``since`` is the lower bound on ``created_at`` used when the query
        carries no explicit range.
        """
        ...

    async def find_questions(self) -> list[CommandRecord]:
        """Return open submissions (numbered, not deleted, not archived) by ``num``."""
        ...
