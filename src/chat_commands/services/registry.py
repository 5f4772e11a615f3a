"""Process-wide service instances.

Builds the stores and services once on first use from application
settings. Subsequent calls return the cached instances.
"""

from dataclasses import dataclass

from chat_commands.config import get_settings
from chat_commands.services.commands import CommandService
from chat_commands.services.dispatcher import CommandDispatcher
from chat_commands.services.questions import QuestionService
from chat_commands.services.users import UserService
from chat_commands.store.memory import (
    MemoryCommandStore,
    MemoryProfileStore,
    MemorySequenceGenerator,
)


@dataclass
class Services:
    commands: CommandService
    questions: QuestionService
    users: UserService


_services: Services | None = None


def get_services() -> Services:
    """Return the cached service set, creating it on first call."""
    global _services
    if _services is None:
        settings = get_settings()
        profiles = MemoryProfileStore()
        commands = MemoryCommandStore()
        questions = QuestionService(commands)
        dispatcher = CommandDispatcher(
            profiles,
            commands,
            questions,
            MemorySequenceGenerator(),
            question_counter=settings.question_counter,
            dedupe_deliveries=settings.dedupe_deliveries,
        )
        _services = Services(
            commands=CommandService(
                commands,
                dispatcher,
                window_hours=settings.command_window_hours,
                limit=settings.command_find_limit,
            ),
            questions=questions,
            users=UserService(profiles),
        )
    return _services


def reset_services() -> None:
    """Drop cached services and their stores. Used for testing."""
    global _services
    _services = None
