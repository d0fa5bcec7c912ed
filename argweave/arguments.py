# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Factory functions for building element trees.

Every element is meant to be created through these helpers rather than by
instantiating classes directly, so a command's shape reads as one nested
expression:

    shape = seq(
        only_one(string("target")),
        optional(integer("amount"), 1),
        flags().flag("s", "-silent").build_with(none()),
    )

Key Features:
- Structural combinators: `seq`, `first_parsing`, `optional`, `optional_weak`,
  `all_of`, `only_one`, `requiring_permission`, `requiring_permission_weak`.
- Flag parsing via `flags()` and its `FlagsBuilder`.
- Leaf converters for strings, numbers, booleans, enums, choice maps, URLs,
  UUIDs, date-times, durations and colors.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Collection, Mapping

from argweave.elements.base import CommandElement
from argweave.elements.flags import FlagsBuilder
from argweave.elements.leaves import (
    BigDecimalElement,
    BigIntegerElement,
    ChoicesElement,
    ColorElement,
    DateTimeElement,
    DurationElement,
    MarkTrueElement,
    NumericElement,
    RemainingJoinedStringsElement,
    StringElement,
    UrlElement,
    UuidElement,
)
from argweave.elements.pattern import BooleanElement, EnumValueElement
from argweave.elements.structural import (
    AllOfElement,
    FirstParsingElement,
    OnlyOneElement,
    OptionalElement,
    PermissionElement,
    SequenceElement,
)


def none() -> CommandElement:
    """An element that expects no input at all."""
    return SequenceElement(())


def mark_true(key: str) -> CommandElement:
    """Store `True` under `key` without consuming input."""
    return MarkTrueElement(key)


def flags() -> FlagsBuilder:
    """Start building a flag parser. Finish with `FlagsBuilder.build_with`."""
    return FlagsBuilder()


def seq(*elements: CommandElement) -> CommandElement:
    """Parse each element in order."""
    return SequenceElement(elements)


def first_parsing(*elements: CommandElement) -> CommandElement:
    """Parse with the first element that succeeds."""
    return FirstParsingElement(elements)


def optional(element: CommandElement, value: Any = None) -> CommandElement:
    """
    Make `element` optional, storing `value` when it is absent.

    A parse failure with input left after it is treated as absence; a failure
    on the final token is raised.
    """
    return OptionalElement(element, value, False)


def optional_weak(element: CommandElement, value: Any = None) -> CommandElement:
    """Make `element` optional, treating any malformed input as absent."""
    return OptionalElement(element, value, True)


def all_of(element: CommandElement) -> CommandElement:
    """Parse `element` repeatedly until the input runs out."""
    return AllOfElement(element)


def only_one(element: CommandElement) -> CommandElement:
    """Reject input that leaves more than one value under the element's key."""
    return OnlyOneElement(element)


def requiring_permission(element: CommandElement, permission: str) -> CommandElement:
    """Fail unless the source holds `permission`."""
    return PermissionElement(element, permission, False)


def requiring_permission_weak(
    element: CommandElement, permission: str
) -> CommandElement:
    """Skip `element` (and hide it from usage) unless the source holds `permission`."""
    return PermissionElement(element, permission, True)


def string(key: str) -> CommandElement:
    return StringElement(key)


def integer(key: str) -> CommandElement:
    """An integer, accepting `0x` (hex) and `0b` (binary) prefixes."""
    return NumericElement(
        key,
        int,
        int,
        lambda token: f"Expected an integer, but input '{token}' was not",
    )


def floating(key: str) -> CommandElement:
    return NumericElement(
        key,
        float,
        None,
        lambda token: f"Expected a number, but input '{token}' was not",
    )


def big_decimal(key: str) -> CommandElement:
    """An arbitrary-precision `Decimal`."""
    return BigDecimalElement(key)


def big_integer(key: str) -> CommandElement:
    """An arbitrary-size base-10 integer."""
    return BigIntegerElement(key)


def boolean(key: str) -> CommandElement:
    """A boolean word such as `yes`, `f` or `1`."""
    return BooleanElement(key)


def enum_value(
    key: str, enum_type: type[Enum], use_regex: bool = False
) -> CommandElement:
    """A member of `enum_type`, matched by (prefix of) its name."""
    return EnumValueElement(key, enum_type, use_regex)


def choices(
    key: str,
    mapping: Mapping[str, Any],
    choices_in_usage: bool | None = None,
    case_sensitive: bool = True,
) -> CommandElement:
    """
    One of the keys of `mapping`, stored as the mapped value.

    Args:
        key (str): The key results are stored under.
        mapping (Mapping[str, Any]): Valid tokens and their values.
        choices_in_usage (bool | None): Force the `<a|b|c>` usage on or off.
        case_sensitive (bool): Match tokens exactly, or ignoring case.
    """
    frozen = dict(mapping)
    if case_sensitive:
        return ChoicesElement(key, frozen.keys, frozen.get, choices_in_usage)
    lowered = {choice.lower(): value for choice, value in frozen.items()}
    return ChoicesElement(
        key,
        frozen.keys,
        lambda token: lowered.get(token.lower()),
        choices_in_usage,
    )


def choices_insensitive(
    key: str, mapping: Mapping[str, Any], choices_in_usage: bool | None = None
) -> CommandElement:
    """Like `choices`, ignoring case."""
    return choices(key, mapping, choices_in_usage, case_sensitive=False)


def dynamic_choices(
    key: str,
    keys: Callable[[], Collection[str]],
    values: Callable[[str], Any],
    choices_in_usage: bool | None = None,
) -> CommandElement:
    """Choices whose keys and values are looked up on every use."""
    return ChoicesElement(key, keys, values, choices_in_usage)


def url(key: str) -> CommandElement:
    return UrlElement(key)


def uuid_value(key: str) -> CommandElement:
    return UuidElement(key)


def date_time(key: str) -> CommandElement:
    """An ISO date-time, time (today) or date (midnight)."""
    return DateTimeElement(key, False)


def date_time_or_now(key: str) -> CommandElement:
    """Like `date_time`, falling back to the current time instead of failing."""
    return DateTimeElement(key, True)


def duration(key: str) -> CommandElement:
    """A `timedelta` from `1d2h30m`-style or ISO-8601 duration input."""
    return DurationElement(key)


def color(key: str) -> CommandElement:
    return ColorElement(key)


def remaining_joined_strings(key: str) -> CommandElement:
    """All remaining tokens, joined by single spaces."""
    return RemainingJoinedStringsElement(key, False)


def remaining_raw_joined_strings(key: str) -> CommandElement:
    """The raw input from the next token to the end, unaltered."""
    return RemainingJoinedStringsElement(key, True)
