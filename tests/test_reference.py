"""Tests for the bundled reference tables."""

from chat_commands.reference import (
    flag_emoji,
    is_pronoun,
    is_team_icon,
    load_countries,
    load_pronouns,
    load_team_icons,
    lookup_country,
)


def test_lookup_country_by_alpha2_alpha3_and_name():
    assert lookup_country("fr").name == "France"
    assert lookup_country("FRA").code == "FR"
    assert lookup_country("France").code == "FR"


def test_lookup_country_unknown():
    assert lookup_country("atlantis") is None


def test_norway_code_is_not_a_boolean():
    """YAML 1.1 reads a bare NO as false."""
    assert lookup_country("no").name == "Norway"


def test_country_flag():
    assert lookup_country("jp").flag == "🇯🇵"
    assert flag_emoji("us") == "🇺🇸"


def test_country_table_size():
    codes = {country.code for country in load_countries().values()}
    assert len(codes) >= 240


def test_team_icons_merge_both_sets():
    icons = load_team_icons()
    assert isinstance(icons, frozenset)
    assert is_team_icon("python")  # Simple Icons
    assert is_team_icon("otter")  # Font Awesome
    assert not is_team_icon("Python")


def test_pronouns():
    assert isinstance(load_pronouns(), frozenset)
    assert is_pronoun("theythem")
    assert not is_pronoun("whatever")
