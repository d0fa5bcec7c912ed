# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Leaf elements that turn a single token (or the rest of the input) into a
typed value.

Every class here only implements `parse_value`; storing the value under the
element's key is left to `CommandElement.parse`. Conversion failures raise
`ArgumentParseError` positioned at the offending token, except for URLs whose
errors point into the token itself.

Exports:
- MarkTrueElement, StringElement, RemainingJoinedStringsElement
- NumericElement, BigDecimalElement, BigIntegerElement
- ChoicesElement
- UrlElement, UuidElement, DateTimeElement, DurationElement, ColorElement
"""
from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Collection
from uuid import UUID

from dateutil.parser import isoparse, isoparser
from pydantic import AnyUrl, TypeAdapter, ValidationError
from rich.color import Color, ColorParseError

from argweave.args import CommandArgs
from argweave.elements.base import CommandElement
from argweave.exceptions import ArgumentParseError
from argweave.protocols import CommandSource

DURATION_PATTERN = re.compile(
    r"(?P<sign>[-+]?)P"
    r"(?:(?P<days>[-+]?\d+)D)?"
    r"(?:T"
    r"(?:(?P<hours>[-+]?\d+)H)?"
    r"(?:(?P<minutes>[-+]?\d+)M)?"
    r"(?:(?P<seconds>[-+]?\d+)(?:[.,](?P<fraction>\d{0,9}))?S)?"
    r")?"
)

LOCAL_TIME_PATTERN = re.compile(r"\d{2}:\d{2}(?::\d{2}(?:[.,]\d{1,9})?)?")
LOCAL_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

_url_adapter = TypeAdapter(AnyUrl)
_time_parser = isoparser()


class MarkTrueElement(CommandElement):
    """Stores `True` without consuming any input. Used by value-less flags."""

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return True

    def usage(self, source: CommandSource) -> str:
        return ""


class StringElement(CommandElement):
    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return args.next()


class RemainingJoinedStringsElement(CommandElement):
    """
    Consumes every remaining token.

    In joined mode the tokens are joined by single spaces. In raw mode the
    raw input is returned from the start of the first remaining token to the
    end, so quoting and spacing survive.
    """

    def __init__(self, key: str | None, raw: bool = False) -> None:
        super().__init__(key)
        self.raw = raw

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        if self.raw:
            args.next()
            value = args.raw[args.raw_position :]
            while args.has_next():
                args.next()
            return value
        parts = [args.next()]
        while args.has_next():
            parts.append(args.next())
        return " ".join(parts)

    def usage(self, source: CommandSource) -> str:
        return f"<{self.key}...>"


class NumericElement(CommandElement):
    """
    Converts a token with `parse_func`.

    When `radix_func` is given, `0x` and `0b` prefixes select base 16 and 2.
    Any `ValueError` from the converters becomes a parse error built by
    `error_supplier(token)`.
    """

    def __init__(
        self,
        key: str | None,
        parse_func: Callable[[str], Any],
        radix_func: Callable[[str, int], Any] | None,
        error_supplier: Callable[[str], str],
    ) -> None:
        super().__init__(key)
        self.parse_func = parse_func
        self.radix_func = radix_func
        self.error_supplier = error_supplier

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = args.next()
        try:
            if self.radix_func is not None:
                if token.startswith("0x"):
                    return self.radix_func(token[2:], 16)
                elif token.startswith("0b"):
                    return self.radix_func(token[2:], 2)
            return self.parse_func(token)
        except ValueError as error:
            raise args.create_error(self.error_supplier(token)) from error


class BigDecimalElement(CommandElement):
    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = args.next()
        try:
            value = Decimal(token)
        except InvalidOperation as error:
            raise args.create_error(
                f"Expected a number, but input {token} was not"
            ) from error
        if not value.is_finite():
            raise args.create_error(f"Expected a number, but input {token} was not")
        return value


class BigIntegerElement(CommandElement):
    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = args.next()
        try:
            return int(token, 10)
        except ValueError as error:
            raise args.create_error(
                f"Expected an integer, but input {token} was not"
            ) from error


class ChoicesElement(CommandElement):
    """
    Maps a token to a value through `value_supplier`.

    `keys_supplier` lists the valid choices for usage and error text; it is
    called on every use, so the set of choices may change between parses.

    Args:
        key (str | None): The key results are stored under.
        keys_supplier (Callable[[], Collection[str]]): Returns the valid choices.
        value_supplier (Callable[[str], Any]): Returns the value for a token,
            or None when the token is not a valid choice.
        choices_in_usage (bool | None): Force the `<a|b|c>` usage on or off.
            None shows the choices only when there are at most 5 of them.
    """

    CUTOFF = 5

    def __init__(
        self,
        key: str | None,
        keys_supplier: Callable[[], Collection[str]],
        value_supplier: Callable[[str], Any],
        choices_in_usage: bool | None = None,
    ) -> None:
        super().__init__(key)
        self.keys_supplier = keys_supplier
        self.value_supplier = value_supplier
        self.choices_in_usage = choices_in_usage

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        value = self.value_supplier(args.next())
        if value is None:
            valid = ", ".join(str(choice) for choice in self.keys_supplier())
            raise args.create_error(
                f"Argument was not a valid choice. Valid choices: [{valid}]"
            )
        return value

    def usage(self, source: CommandSource) -> str:
        keys = list(self.keys_supplier())
        if self.choices_in_usage or (
            self.choices_in_usage is None and len(keys) <= self.CUTOFF
        ):
            return f"<{'|'.join(keys)}>"
        return super().usage(source)


class UrlElement(CommandElement):
    """Validates an absolute URL with pydantic's `AnyUrl`."""

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = args.next()
        try:
            return _url_adapter.validate_python(token)
        except ValidationError as error:
            raise ArgumentParseError("Invalid URL!", token, 0) from error


class UuidElement(CommandElement):
    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = args.next()
        try:
            return UUID(token)
        except ValueError as error:
            raise args.create_error("Invalid UUID!") from error


class DateTimeElement(CommandElement):
    """
    Parses an ISO-8601 date-time, a bare time (on today's date) or a bare date
    (at midnight), in that order.

    With `return_now` the element never fails: missing or unparseable input
    yields the current time, and an unparseable token is left unconsumed.
    """

    def __init__(self, key: str | None, return_now: bool = False) -> None:
        super().__init__(key)
        self.return_now = return_now

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        if not args.has_next() and self.return_now:
            return datetime.now()
        state = args.snapshot()
        token = args.next()
        parsed = self._parse(token)
        if parsed is not None:
            return parsed
        if self.return_now:
            args.restore(state)
            return datetime.now()
        raise args.create_error("Invalid date-time!")

    @staticmethod
    def _parse(token: str) -> datetime | None:
        try:
            if "T" in token.upper():
                return isoparse(token)
            if LOCAL_TIME_PATTERN.fullmatch(token):
                return datetime.combine(
                    date.today(), _time_parser.parse_isotime(token)
                )
            if LOCAL_DATE_PATTERN.fullmatch(token):
                return datetime.combine(_time_parser.parse_isodate(token), time())
        except (ValueError, OverflowError):
            return None
        return None

    def usage(self, source: CommandSource) -> str:
        if self.return_now:
            return f"[{self.key}]"
        return super().usage(source)


class DurationElement(CommandElement):
    """
    Parses an ISO-8601 duration such as `P1DT2H`, also accepting the
    shorthand forms `1d2h`, `5m`, `p3h` and `2d`.
    """

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = self.normalize(args.next())
        duration = self.parse_duration(token)
        if duration is None:
            raise args.create_error("Invalid duration!")
        return duration

    @staticmethod
    def normalize(token: str) -> str:
        value = token.upper()
        if "T" not in value:
            if "D" in value:
                if "H" in value or "M" in value or "S" in value:
                    value = value.replace("D", "DT")
            elif value.startswith("P"):
                value = f"PT{value[1:]}"
            else:
                value = f"T{value}"
        if not value.startswith("P"):
            value = f"P{value}"
        return value

    @staticmethod
    def parse_duration(value: str) -> timedelta | None:
        match = DURATION_PATTERN.fullmatch(value)
        if match is None or value.endswith("T"):
            return None
        parts = match.groupdict()
        if all(parts[name] is None for name in ("days", "hours", "minutes", "seconds")):
            return None
        seconds = parts["seconds"] or "0"
        micros = int((parts["fraction"] or "").ljust(6, "0")[:6])
        if seconds.startswith("-"):
            micros = -micros
        try:
            duration = timedelta(
                days=int(parts["days"] or 0),
                hours=int(parts["hours"] or 0),
                minutes=int(parts["minutes"] or 0),
                seconds=int(seconds),
                microseconds=micros,
            )
            return -duration if parts["sign"] == "-" else duration
        except OverflowError:
            return None


class ColorElement(CommandElement):
    """Parses anything rich understands as a color: names, `#rrggbb`, `rgb(...)`."""

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        token = args.next()
        try:
            return Color.parse(token)
        except ColorParseError as error:
            raise args.create_error(str(error)) from error
