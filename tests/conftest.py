"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from chat_commands.app import app
from chat_commands.models import ChatMessage
from chat_commands.services import CommandDispatcher, CommandService, QuestionService
from chat_commands.store import MemoryCommandStore, MemoryProfileStore, MemorySequenceGenerator


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now += timedelta(**delta)
        return self.now


def _make_message(text: str, **overrides) -> ChatMessage:
    """Build a ChatMessage from a regular viewer with overrides."""
    base = {
        "id": uuid4().hex,
        "user_id": "1001",
        "username": "viewer",
        "message": text,
        "badges": {},
    }
    base.update(overrides)
    return ChatMessage(**base)


@pytest.fixture
def make_message():
    """Factory for ChatMessage instances, see _make_message."""
    return _make_message


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc))


@pytest.fixture
def profiles() -> MemoryProfileStore:
    return MemoryProfileStore()


@pytest.fixture
def commands() -> MemoryCommandStore:
    return MemoryCommandStore()


@pytest.fixture
def sequence() -> MemorySequenceGenerator:
    return MemorySequenceGenerator()


@pytest.fixture
def questions(commands: MemoryCommandStore, clock: FakeClock) -> QuestionService:
    return QuestionService(commands, clock=clock)


@pytest.fixture
def dispatcher(profiles, commands, questions, sequence, clock) -> CommandDispatcher:
    return CommandDispatcher(profiles, commands, questions, sequence, clock=clock)


@pytest.fixture
def service(commands, dispatcher, clock) -> CommandService:
    return CommandService(commands, dispatcher, clock=clock)
