from enum import Enum

import pytest

from argweave.arguments import boolean, enum_value
from argweave.args import CommandArgs
from argweave.context import CommandContext
from argweave.elements.pattern import EnumValueElement, PatternMatchingElement
from argweave.exceptions import (
    ArgumentParseError,
    NoMatchingChoiceError,
    ShapeDefinitionError,
)


class Shade(Enum):
    RED = 1
    REDDISH = 2
    BLUE = 3


class Planet(Enum):
    MERCURY = 1
    VENUS = 2
    EARTH = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6


class Commands(PatternMatchingElement):
    """Choices depend on what the source may do."""

    def get_choices(self, source):
        names = ["list", "look"]
        if source.has_permission("admin"):
            names.append("lock")
        return names

    def get_value(self, choice):
        return choice.upper()


def test_exact_match_wins_over_prefix(run):
    _, context = run(enum_value("shade", Shade), "red")
    assert context.get_all("shade") == [Shade.RED]


def test_exact_match_ignores_case(run):
    _, context = run(enum_value("shade", Shade), "BLUE")
    assert context.get_all("shade") == [Shade.BLUE]


def test_prefix_selects_every_match(run):
    _, context = run(enum_value("shade", Shade), "re")
    assert context.get_all("shade") == [Shade.RED, Shade.REDDISH]


def test_no_match(run):
    with pytest.raises(NoMatchingChoiceError) as exc_info:
        run(enum_value("shade", Shade), "green")
    assert exc_info.value.message == (
        "No values matching pattern 'green' present for shade!"
    )


def test_no_match_without_key(run):
    with pytest.raises(NoMatchingChoiceError, match="present for argument!"):
        run(EnumValueElement(None, Shade), "green")


def test_regex_mode(run):
    _, context = run(enum_value("shade", Shade, use_regex=True), "r.*h")
    assert context.get_all("shade") == [Shade.REDDISH]


def test_regex_is_anchored(run):
    with pytest.raises(NoMatchingChoiceError):
        run(enum_value("shade", Shade, use_regex=True), "lue")


def test_invalid_regex(run):
    with pytest.raises(ArgumentParseError, match="Invalid pattern"):
        run(enum_value("shade", Shade, use_regex=True), "[")


def test_enum_with_case_duplicates_is_rejected():
    class Loud(Enum):
        A = 1
        a = 2

    with pytest.raises(ShapeDefinitionError):
        enum_value("loud", Loud)


def test_usage_lists_small_choice_sets(source):
    assert enum_value("shade", Shade).usage(source) == "<red|reddish|blue>"


def test_usage_hides_large_choice_sets(source):
    assert enum_value("planet", Planet).usage(source) == "<planet>"
    forced = EnumValueElement("planet", Planet, choices_in_usage=True)
    assert forced.usage(source).startswith("<mercury|venus|")
    hidden = EnumValueElement("shade", Shade, choices_in_usage=False)
    assert hidden.usage(source) == "<shade>"


def test_choices_can_depend_on_source(run, admin):
    element = Commands("cmd")
    _, context = run(element, "lo", src=admin)
    assert context.get_all("cmd") == ["LOOK", "LOCK"]
    _, context = run(element, "lo")
    assert context.get_all("cmd") == ["LOOK"]


@pytest.mark.parametrize(
    "token, expected",
    [
        ("true", True),
        ("YES", True),
        ("1", True),
        ("verymuchso", True),
        ("tr", True),
        ("false", False),
        ("n", False),
        ("NotAtAll", False),
        ("0", False),
    ],
)
def test_boolean_words(run, token, expected):
    _, context = run(boolean("flag"), token)
    assert context.get_all("flag") == [expected]


def test_boolean_rejects_other_words(run):
    with pytest.raises(NoMatchingChoiceError):
        run(boolean("flag"), "maybe")


def test_boolean_rejects_ambiguous_prefix(source):
    args = CommandArgs.from_tokens("")
    with pytest.raises(ArgumentParseError, match="Ambiguous boolean value"):
        boolean("flag").parse(source, args, CommandContext())


def test_boolean_usage(source):
    assert boolean("flag").usage(source) == "<flag>"
