"""Tests for the user profile service."""

from datetime import datetime, timezone

import pytest

from chat_commands.services import UserService


@pytest.fixture
def users(profiles) -> UserService:
    return UserService(profiles)


async def test_get_missing_user_returns_none(users: UserService):
    assert await users.get("nobody") is None


async def test_patch_creates_profile(users: UserService):
    profile = await users.patch("viewer", {"status": "lurking", "team": "python"})

    assert profile.name == "viewer"
    assert profile.status == "lurking"
    assert (await users.get("viewer")).team == "python"


async def test_patch_none_clears_field(users: UserService):
    await users.patch("viewer", {"pronoun": "sheher"})
    profile = await users.patch("viewer", {"pronoun": None})
    assert profile.pronoun is None


async def test_patch_parses_values(users: UserService):
    profile = await users.patch(
        "viewer",
        {
            "last_seen": "2026-10-19T18:00:00Z",
            "country": {"code": "NO", "name": "Norway", "flag": "🇳🇴"},
        },
    )

    assert profile.last_seen == datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc)
    assert profile.country.name == "Norway"


async def test_patch_rejects_unknown_fields(users: UserService):
    with pytest.raises(ValueError, match="favorite_color"):
        await users.patch("viewer", {"favorite_color": "blue"})


async def test_patch_rejects_name_change(users: UserService):
    with pytest.raises(ValueError):
        await users.patch("viewer", {"name": "someone-else"})
