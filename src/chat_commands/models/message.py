"""Chat message model as delivered by the upstream platform client."""

from pydantic import BaseModel, ConfigDict, Field


class Badges(BaseModel):
    """Chat badges attached to the author of a message.

    Only ``moderator`` and ``broadcaster`` carry authority in the dispatcher;
    any other badge the platform sends (subscriber, vip, ...) is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    moderator: bool = False
    broadcaster: bool = False

    @property
    def is_privileged(self) -> bool:
        return self.moderator or self.broadcaster


class ChatMessage(BaseModel):
    """A single chat message. Immutable once received."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: str  # Platform message id, the upsert key for the stored record
    user_id: str
    username: str
    message: str
    badges: Badges = Field(default_factory=Badges)
    parsed_message: str | None = Field(default=None, alias="parsedMessage")  # Emote-stripped text

    @property
    def text(self) -> str:
        """Pre-normalized text when available, raw message otherwise."""
        return self.parsed_message or self.message
