"""Command dispatch for incoming chat messages.

Each message is matched against an ordered table of rules (first match
wins). A matching rule may mutate the author's profile, number a question
submission, or archive an earlier submission. Every message is then stored
as a CommandRecord keyed by its message id, whether or not it matched.

Malformed invocations (missing argument, unknown value, bad colour) and
unauthorized archive requests are silent no-ops. Only store failures
propagate to the caller.
"""

import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from chat_commands.models.command import CommandRecord
from chat_commands.models.message import ChatMessage
from chat_commands.models.profile import UserProfile
from chat_commands.reference import is_pronoun, is_team_icon, lookup_country
from chat_commands.services.questions import QuestionService
from chat_commands.store.base import CommandStore, ProfileStore, SequenceGenerator

logger = logging.getLogger(__name__)

CLEAR_WORDS = frozenset({"clear", "remove"})
HEX_COLOR_PATTERN = re.compile(r"^(([a-f0-9]){3}){1,2}\Z")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DispatchContext:
    """Mutable state of a single dispatch. Never shared between messages."""

    message: ChatMessage
    profile: UserProfile
    num: int | None = None
    persist: bool = True

    @property
    def args(self) -> list[str]:
        """Whitespace-separated tokens of the raw message after the command token."""
        return self.message.message.split()[1:]


Handler = Callable[..., Awaitable[None]]


@dataclass(frozen=True)
class Rule:
    name: str
    pattern: re.Pattern[str]
    handler: Handler = field(compare=False)


class CommandDispatcher:
    """Turns chat messages into profile mutations and stored command records."""

    def __init__(
        self,
        profiles: ProfileStore,
        commands: CommandStore,
        questions: QuestionService,
        sequence: SequenceGenerator,
        *,
        question_counter: str = "question",
        dedupe_deliveries: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.profiles = profiles
        self.commands = commands
        self.questions = questions
        self.sequence = sequence
        self.question_counter = question_counter
        self.dedupe_deliveries = dedupe_deliveries
        self.clock = clock

    def match(self, text: str) -> tuple[Rule, re.Match[str]] | None:
        """Return the first rule matching ``text`` with its match, or None for plain chat."""
        for rule in RULES:
            found = rule.pattern.match(text)
            if found:
                return rule, found
        return None

    async def dispatch(self, message: ChatMessage) -> CommandRecord | None:
        """Apply the message's command (if any) and store the record.

        Returns None only for an empty question submission, which is
        rejected without being stored.
        """
        if self.dedupe_deliveries:
            existing = await self.commands.find_one(id=message.id)
            if existing is not None:
                logger.info("Skipping side effects for redelivered message %s", message.id)
                profile = await self._load_profile(message)
                if existing.is_deleted:
                    return existing.model_copy(update={"user": profile})
                return await self._persist(message, profile)

        ctx = DispatchContext(message=message, profile=await self._load_profile(message))

        matched = self.match(message.message)
        if matched is not None:
            rule, found = matched
            await rule.handler(self, ctx, found)
            if not ctx.persist:
                logger.debug("Rejected %s from %s", rule.name, message.username)
                return None

        return await self._persist(message, ctx.profile, num=ctx.num)

    async def _load_profile(self, message: ChatMessage) -> UserProfile:
        profile = await self.profiles.get(message.username)
        return profile if profile is not None else UserProfile(name=message.username)

    async def _persist(
        self,
        message: ChatMessage,
        profile: UserProfile,
        num: int | None = None,
    ) -> CommandRecord:
        fields = message.model_dump(by_alias=True, exclude_none=True)
        if num is not None:
            fields["num"] = num
        record = await self.commands.find_one_and_update(
            {"id": message.id},
            fields,
            upsert=True,
            on_insert={"created_at": self.clock()},
        )
        return record.model_copy(update={"user": profile})

    async def _update_profile(self, ctx: DispatchContext, **fields: Any) -> None:
        ctx.profile = await self.profiles.patch(ctx.profile.name, fields)

    # -- Handlers --

    async def _archive(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        num = int(found.group(1))
        question = await self.commands.find_one(num=num)
        if question is None:
            logger.debug("Archive of unknown question #%d ignored", num)
            return
        if question.archived or question.is_deleted:
            logger.debug("Question #%d already archived or deleted", num)
            return
        is_owner = question.user_id == ctx.message.user_id
        if not (ctx.message.badges.is_privileged or is_owner):
            logger.debug("Archive of question #%d by %s not authorized", num, ctx.message.username)
            return
        await self.questions.remove(question.storage_id)
        logger.info("Question #%d archived by %s", num, ctx.message.username)

    async def _submit(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        if not " ".join(ctx.args).strip():
            ctx.persist = False
            return
        ctx.num = await self.sequence.increment_and_get(self.question_counter)
        await self._update_profile(ctx, last_seen=self.clock())
        logger.info("Question #%d submitted by %s", ctx.num, ctx.message.username)

    async def _here(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        await self._update_profile(ctx, last_seen=self.clock())

    async def _set_status(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        # TODO: cap status length once the overlay has a display limit
        status = " ".join(ctx.message.text.split()[1:])
        await self._update_profile(ctx, status=status)

    async def _clear_status(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        await self._update_profile(ctx, status=None)

    async def _country(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        def resolve(key: str) -> dict | None:
            country = lookup_country(key)
            return country.model_dump() if country else None

        await self._apply_choice(ctx, "country", resolve)

    async def _team(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        await self._apply_choice(ctx, "team", lambda key: key if is_team_icon(key) else None)

    async def _team_color(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        await self._apply_choice(
            ctx,
            "team_color",
            lambda key: key if HEX_COLOR_PATTERN.match(key) else None,
            normalize=lambda key: key.lower().strip().replace("#", "", 1),
        )

    async def _pronoun(self, ctx: DispatchContext, found: re.Match[str]) -> None:
        await self._apply_choice(ctx, "pronoun", lambda key: key if is_pronoun(key) else None)

    async def _apply_choice(
        self,
        ctx: DispatchContext,
        field_name: str,
        resolve: Callable[[str], Any],
        normalize: Callable[[str], str] = lambda key: key.lower().strip(),
    ) -> None:
        """Set, clear or ignore a single-choice profile field from the first argument."""
        args = ctx.args
        if not args:
            return
        key = normalize(args[0])
        if key in CLEAR_WORDS:
            await self._update_profile(ctx, **{field_name: None})
            return
        value = resolve(key)
        if value is None:
            logger.debug("Unknown %s value %r from %s", field_name, key, ctx.message.username)
            return
        await self._update_profile(ctx, **{field_name: value})


# Priority order matters: first match wins
RULES: tuple[Rule, ...] = (
    Rule("archive", re.compile(r"^!archive\s+#?(\d+)\Z"), CommandDispatcher._archive),
    Rule("submit", re.compile(r"^!(ask|idea|submit)(?:\s|\Z)"), CommandDispatcher._submit),
    Rule("here", re.compile(r"^!here\Z"), CommandDispatcher._here),
    Rule("setstatus", re.compile(r"^!setstatus\s"), CommandDispatcher._set_status),
    Rule("clearstatus", re.compile(r"^!clearstatus(?:\s|\Z)"), CommandDispatcher._clear_status),
    Rule("country", re.compile(r"^!(country|flag)(?:\s|\Z)"), CommandDispatcher._country),
    Rule("team", re.compile(r"^!team(?:\s|\Z)"), CommandDispatcher._team),
    Rule("team-color", re.compile(r"^!team-colou?r(?:\s|\Z)"), CommandDispatcher._team_color),
    Rule("pronoun", re.compile(r"^!pronoun(?:\s|\Z)"), CommandDispatcher._pronoun),
)
