"""Tests for the UserProfile model."""

from chat_commands.models import Country, UserProfile


def test_profile_only_requires_name():
    profile = UserProfile(name="viewer")
    assert profile.model_dump(exclude_none=True) == {"name": "viewer"}


def test_profile_country_from_dict():
    profile = UserProfile(name="viewer", country={"code": "FR", "name": "France", "flag": "🇫🇷"})
    assert profile.country == Country(code="FR", name="France", flag="🇫🇷")
