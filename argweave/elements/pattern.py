# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `PatternMatchingElement`, the base for closed-choice arguments, and its
stock subclasses.

Matching rules, in order:
1. A case-insensitive exact match against any choice wins immediately, even if
   other choices would also match by prefix or pattern.
2. Otherwise, in regex mode the token is anchored to the start (`^` is
   prepended when missing) and every choice it finds a match in is selected;
   without regex mode every choice the token is a case-insensitive prefix of
   is selected.
3. Every selected choice is mapped to its value. No selection is an error.

Subclasses only decide which choices exist (`get_choices`) and what each
choice means (`get_value`), so the same engine serves enum constants, boolean
words or any dynamically sized vocabulary.

Regex mode lets users submit arbitrary patterns; only enable it for trusted
sources.
"""
from __future__ import annotations

import re
from abc import abstractmethod
from enum import Enum
from typing import Any, Iterable

from argweave.args import CommandArgs
from argweave.elements.base import CommandElement
from argweave.exceptions import (
    ArgumentParseError,
    NoMatchingChoiceError,
    ShapeDefinitionError,
)
from argweave.protocols import CommandSource

CHOICES_CUTOFF = 5
NULL_KEY_ARG = "argument"

BOOLEAN_CHOICES: dict[str, bool] = {
    "true": True,
    "t": True,
    "y": True,
    "yes": True,
    "verymuchso": True,
    "1": True,
    "false": False,
    "f": False,
    "n": False,
    "no": False,
    "notatall": False,
    "0": False,
}


class PatternMatchingElement(CommandElement):
    """
    Abstract element that matches one token against a set of choices.

    `parse_value` returns a list of values (one per selected choice), which
    the default `parse` stores one by one under the element's key.

    Args:
        key (str | None): The key results are stored under.
        use_regex (bool): Interpret the token as a regular expression.
        choices_in_usage (bool | None): Force the `<a|b|c>` usage on or off.
            None shows the choices only when there are at most 5 of them.
    """

    def __init__(
        self,
        key: str | None,
        use_regex: bool = False,
        choices_in_usage: bool | None = None,
    ) -> None:
        super().__init__(key)
        self.use_regex = use_regex
        self.choices_in_usage = choices_in_usage

    def parse_value(self, source: CommandSource, args: CommandArgs) -> list[Any]:
        choices = list(self.get_choices(source))
        arg = args.next()

        exact_match = self.get_exact_match(choices, arg)
        if exact_match is not None:
            return [exact_match]

        if self.use_regex:
            try:
                pattern = self.get_formatted_pattern(arg)
            except re.error as error:
                raise args.create_error(
                    f"Invalid pattern '{arg}': {error}"
                ) from error
            selected = [choice for choice in choices if pattern.search(choice)]
        else:
            lowered = arg.lower()
            selected = [choice for choice in choices if choice.lower().startswith(lowered)]

        values = [self.get_value(choice) for choice in selected]
        if not values:
            raise args.create_error(
                f"No values matching pattern '{arg}' present for "
                f"{self.key if self.key is not None else NULL_KEY_ARG}!",
                NoMatchingChoiceError,
            )
        return values

    def get_formatted_pattern(self, value: str) -> re.Pattern[str]:
        # Anchored so that search() behaves like a prefix match.
        if not value.startswith("^"):
            value = f"^{value}"
        return re.compile(value, re.IGNORECASE)

    def get_exact_match(self, choices: Iterable[str], potential_choice: str) -> Any:
        """Return the value of the first choice equal to the input ignoring case."""
        lowered = potential_choice.lower()
        for choice in choices:
            if choice.lower() == lowered:
                return self.get_value(choice)
        return None

    def usage(self, source: CommandSource) -> str:
        if self.choices_in_usage is False:
            return super().usage(source)
        choices = list(self.get_choices(source))
        if self.choices_in_usage or len(choices) <= CHOICES_CUTOFF:
            return f"<{'|'.join(choices)}>"
        return super().usage(source)

    @abstractmethod
    def get_choices(self, source: CommandSource) -> Iterable[str]:
        """Return the choices available to `source`."""

    @abstractmethod
    def get_value(self, choice: str) -> Any:
        """
        Return the value for one of the strings returned by `get_choices`.

        Raises:
            ValueError: If `choice` is not one of the choices.
        """


class EnumValueElement(PatternMatchingElement):
    """Matches the (lowercased) member names of an `Enum`."""

    def __init__(
        self,
        key: str | None,
        enum_type: type[Enum],
        use_regex: bool = False,
        choices_in_usage: bool | None = None,
    ) -> None:
        super().__init__(key, use_regex, choices_in_usage)
        self.enum_type = enum_type
        values: dict[str, Enum] = {}
        for name, member in enum_type.__members__.items():
            lowered = name.lower()
            if lowered in values and values[lowered] is not member:
                raise ShapeDefinitionError(
                    f"{enum_type.__name__} contains more than one member with the "
                    "same name, only differing by capitalization, which is unsupported."
                )
            values[lowered] = member
        self.values = values

    def get_choices(self, source: CommandSource) -> Iterable[str]:
        return self.values.keys()

    def get_value(self, choice: str) -> Any:
        value = self.values.get(choice.lower())
        if value is None:
            raise ValueError(f"No enum member {self.enum_type.__name__}.{choice}")
        return value


class BooleanElement(PatternMatchingElement):
    """Matches the recognised true/false words, ignoring case."""

    def __init__(self, key: str | None, choices_in_usage: bool | None = None) -> None:
        super().__init__(key, False, choices_in_usage)

    def get_choices(self, source: CommandSource) -> Iterable[str]:
        return BOOLEAN_CHOICES.keys()

    def get_value(self, choice: str) -> Any:
        try:
            return BOOLEAN_CHOICES[choice.lower()]
        except KeyError:
            raise ValueError(f"'{choice}' is not a boolean word") from None

    def parse_value(self, source: CommandSource, args: CommandArgs) -> list[Any]:
        values = super().parse_value(source, args)
        if len(set(values)) > 1:
            raise args.create_error(
                f"Ambiguous boolean value '{args[args.index]}'", ArgumentParseError
            )
        return values[:1]
