"""Per-user profile model and its reference value types."""

from datetime import datetime

from pydantic import BaseModel


class Country(BaseModel):
    """A country from the fixed reference table."""

    code: str  # ISO 3166-1 alpha-2, upper case
    name: str
    flag: str  # Regional indicator emoji pair


class UserProfile(BaseModel):
    """Profile of a chat user, keyed by ``name`` (the username).

    Optional fields are cleared by setting them to None; serialized output
    drops them entirely.
    """

    name: str
    country: Country | None = None
    team: str | None = None
    team_color: str | None = None  # 3 or 6 lower-case hex digits, no '#'
    pronoun: str | None = None
    status: str | None = None
    last_seen: datetime | None = None
