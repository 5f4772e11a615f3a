"""Stored command record and the read-side query model."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chat_commands.models.message import Badges
from chat_commands.models.profile import UserProfile


def _as_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC so they compare with stored ones."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CommandRecord(BaseModel):
    """A persisted chat message, one per message id.

    ``num`` is only set on question submissions. A record with ``deleted_at``
    set is soft-deleted and hidden from normal listings; ``archived`` marks a
    resolved question.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    storage_id: str = Field(alias="_id")
    id: str
    num: int | None = None
    message: str
    parsed_message: str | None = Field(default=None, alias="parsedMessage")
    user_id: str
    username: str
    badges: Badges = Field(default_factory=Badges)
    created_at: datetime
    deleted_at: datetime | None = None
    archived: bool | None = None
    ack: bool | None = None
    user: UserProfile | None = None  # Profile snapshot, attached on dispatch

    @field_validator("created_at", "deleted_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class CommandQuery(BaseModel):
    """Filter for listing recent commands.

    With no fields set, a listing returns records that are not deleted, not
    acknowledged, and created within the trailing window.
    """

    commands: bool | None = None  # False restricts to plain chat (no leading '!')
    user_id: str | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None

    @property
    def has_explicit_range(self) -> bool:
        return self.created_after is not None or self.created_before is not None

    @field_validator("created_after", "created_before")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)
