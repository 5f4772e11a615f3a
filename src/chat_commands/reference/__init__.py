"""Fixed reference tables used to validate profile commands.

Tables are bundled as YAML next to this module and loaded once per process.
"""

import functools
from pathlib import Path

import yaml

from chat_commands.models.profile import Country

_DATA_DIR = Path(__file__).resolve().parent

# Regional indicator symbol A; flag emoji are pairs of these
_REGIONAL_INDICATOR_A = 0x1F1E6


def _load(filename: str) -> dict:
    with open(_DATA_DIR / filename, encoding="utf-8") as f:
        return yaml.safe_load(f)


def flag_emoji(code: str) -> str:
    """Return the flag emoji for an ISO alpha-2 country code."""
    return "".join(chr(_REGIONAL_INDICATOR_A + ord(c) - ord("A")) for c in code.upper())


@functools.lru_cache
def load_countries() -> dict[str, Country]:
    """Load the country table keyed by lower-cased alpha-2, alpha-3 and name. Result is cached."""
    countries: dict[str, Country] = {}
    for alpha2, alpha3, name in _load("countries.yaml")["countries"]:
        country = Country(code=alpha2, name=name, flag=flag_emoji(alpha2))
        for key in (alpha2, alpha3, name):
            countries[key.lower()] = country
    return countries


@functools.lru_cache
def load_team_icons() -> frozenset[str]:
    """Load the merged Simple Icons and Font Awesome name sets. Result is cached."""
    data = _load("icons.yaml")
    return frozenset(data.get("simple_icons", [])) | frozenset(data.get("font_awesome", []))


@functools.lru_cache
def load_pronouns() -> frozenset[str]:
    """Load the accepted pronoun choices. Result is cached."""
    return frozenset(_load("pronouns.yaml").get("pronouns", []))


def lookup_country(key: str) -> Country | None:
    """Resolve a case-insensitive country key, or None when unknown."""
    return load_countries().get(key.strip().lower())


def is_team_icon(name: str) -> bool:
    return name in load_team_icons()


def is_pronoun(name: str) -> bool:
    return name in load_pronouns()


__all__ = [
    "flag_emoji",
    "is_pronoun",
    "is_team_icon",
    "load_countries",
    "load_pronouns",
    "load_team_icons",
    "lookup_country",
]
