"""In-process store implementations.

Used by the application wiring and the test suite. Each operation runs
without awaiting between its read and its write, so individual calls are
atomic on a single event loop; a lock guards the counter regardless.
"""

import asyncio
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any

from chat_commands.models.command import CommandQuery, CommandRecord
from chat_commands.models.profile import UserProfile

logger = logging.getLogger(__name__)

# Plain chat: starts with a word character, so never with '!'
PLAIN_CHAT_PATTERN = re.compile(r"^(?!!)\w+")


def new_storage_id() -> str:
    """Return a 24 hex character storage id."""
    return uuid.uuid4().hex[:24]


def _coerce(doc: dict[str, Any]) -> tuple[CommandRecord, dict[str, Any]]:
    """Validate a candidate document and return the record plus its coerced form.

    Raises ValidationError without touching the store, so a rejected write
    never leaves a half-applied document behind.
    """
    record = CommandRecord.model_validate(doc)
    return record, record.model_dump(by_alias=True)


class MemoryProfileStore:
    """Profiles keyed by username."""

    def __init__(self) -> None:
        self._profiles: dict[str, dict[str, Any]] = {}

    async def get(self, username: str) -> UserProfile | None:
        data = self._profiles.get(username)
        if data is None:
            return None
        return UserProfile.model_validate(data)

    async def patch(self, username: str, fields: dict[str, Any]) -> UserProfile:
        data = self._profiles.setdefault(username, {"name": username})
        for key, value in fields.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        return UserProfile.model_validate(data)


class MemorySequenceGenerator:
    """Named counters starting at zero."""

    def __init__(self) -> None:
        self._values: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def increment_and_get(self, name: str) -> int:
        async with self._lock:
            value = self._values.get(name, 0) + 1
            self._values[name] = value
            return value


class MemoryCommandStore:
    """Command records keyed by storage id, unique on message ``id``."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    def _match(self, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        return [
            doc
            for doc in self._records.values()
            if all(doc.get(key) == value for key, value in criteria.items())
        ]

    async def find_one(self, **criteria: Any) -> CommandRecord | None:
        matches = self._match(criteria)
        if not matches:
            return None
        return CommandRecord.model_validate(matches[0])

    async def find_one_and_update(
        self,
        criteria: dict[str, Any],
        fields: dict[str, Any],
        *,
        upsert: bool = True,
        on_insert: dict[str, Any] | None = None,
    ) -> CommandRecord | None:
        matches = self._match(criteria)
        if matches:
            doc = dict(matches[0])
        elif upsert:
            doc = {"_id": new_storage_id(), "created_at": datetime.now(timezone.utc)}
            doc.update(on_insert or {})
            doc.update(criteria)
            if "id" not in doc:
                doc["id"] = doc["_id"]
        else:
            return None
        storage_id = doc["_id"]
        doc.update(fields)
        doc["_id"] = storage_id
        record, stored = _coerce(doc)
        self._records[storage_id] = stored
        return record

    async def update(self, criteria: dict[str, Any], fields: dict[str, Any]) -> int:
        # Validate every candidate before committing any of them
        updated = [_coerce({**doc, **fields})[1] for doc in self._match(criteria)]
        for stored in updated:
            self._records[stored["_id"]] = stored
        return len(updated)

    async def find(
        self,
        query: CommandQuery,
        *,
        since: datetime | None = None,
        limit: int,
    ) -> list[CommandRecord]:
        lower = query.created_after if query.has_explicit_range else since
        upper = query.created_before

        def keep(doc: dict[str, Any]) -> bool:
            if doc.get("deleted_at") is not None or doc.get("ack") is True:
                return False
            if lower is not None and doc["created_at"] < lower:
                return False
            if upper is not None and doc["created_at"] > upper:
                return False
            if query.user_id is not None and doc.get("user_id") != query.user_id:
                return False
            if query.commands is False and not PLAIN_CHAT_PATTERN.match(doc.get("message", "")):
                return False
            return True

        docs = sorted(
            (doc for doc in self._records.values() if keep(doc)),
            key=lambda doc: doc["created_at"],
            reverse=True,
        )
        return [CommandRecord.model_validate(doc) for doc in docs[:limit]]

    async def find_questions(self) -> list[CommandRecord]:
        docs = sorted(
            (
                doc
                for doc in self._records.values()
                if doc.get("num") is not None
                and doc.get("deleted_at") is None
                and not doc.get("archived")
            ),
            key=lambda doc: doc["num"],
        )
        return [CommandRecord.model_validate(doc) for doc in docs]
