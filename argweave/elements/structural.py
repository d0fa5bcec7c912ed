# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Structural elements that wrap other elements and change how they combine.

Each element here holds one or more children and decides how failures,
backtracking and absent input are handled:

- SequenceElement: children in order, failures propagate.
- FirstParsingElement: first child that parses wins; all fail → last error.
- OptionalElement: absent or (sometimes) malformed input is not an error.
- AllOfElement: repeat a child until the input is exhausted.
- OnlyOneElement: reject a key that ends up with more than one value.
- PermissionElement: gate a child behind a permission check.

Backtracking always snapshots both the token stream and the result store
before an attempt and restores both when the attempt is abandoned.
"""
from __future__ import annotations

from typing import Any, Sequence

from argweave.args import CommandArgs
from argweave.context import CommandContext
from argweave.elements.base import CommandElement
from argweave.exceptions import (
    ArgumentParseError,
    PermissionDeniedError,
    TooManyValuesError,
)
from argweave.logger import logger
from argweave.protocols import CommandSource


class SequenceElement(CommandElement):
    """Parses each child in order. A failing child is never retried."""

    def __init__(self, elements: Sequence[CommandElement]) -> None:
        super().__init__(None)
        self.elements: tuple[CommandElement, ...] = tuple(elements)

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        for element in self.elements:
            element.parse(source, args, context)

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return None

    def usage(self, source: CommandSource) -> str:
        usages = (element.usage(source) for element in self.elements)
        return " ".join(usage for usage in usages if usage)

    def __repr__(self) -> str:
        return f"SequenceElement(elements={list(self.elements)!r})"


class FirstParsingElement(CommandElement):
    """
    Tries each child in turn and keeps the first one that parses.

    Before every attempt the token stream and the result store are
    snapshotted; a failed attempt restores both. When every child fails,
    the error of the *last* child is raised and earlier errors are dropped.
    """

    def __init__(self, elements: Sequence[CommandElement]) -> None:
        super().__init__(None)
        self.elements: tuple[CommandElement, ...] = tuple(elements)

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        last_error: ArgumentParseError | None = None
        for element in self.elements:
            start_state = args.snapshot()
            context_state = context.snapshot()
            try:
                element.parse(source, args, context)
                return
            except ArgumentParseError as error:
                logger.debug("Alternative %r failed: %s", element, error)
                last_error = error
                args.restore(start_state)
                context.restore(context_state)
        if last_error is not None:
            raise last_error

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return None

    def usage(self, source: CommandSource) -> str:
        return "|".join(element.usage(source) for element in self.elements)

    def __repr__(self) -> str:
        return f"FirstParsingElement(elements={list(self.elements)!r})"


class OptionalElement(CommandElement):
    """
    Makes a child element optional.

    With no input left the default (if any) is stored under the child's key.
    With input left the child is attempted:

    - strict mode suppresses a failure only when tokens remain after the
      failure point. A failure on the last token is treated as invalid input
      and re-raised.
    - weak mode (`consider_invalid_format_empty`) suppresses every failure.

    A suppressed failure restores the stream and the store and stores the
    default in place of the child's value.
    """

    def __init__(
        self,
        element: CommandElement,
        value: Any = None,
        consider_invalid_format_empty: bool = False,
    ) -> None:
        super().__init__(element.key)
        self.element = element
        self.value = value
        self.consider_invalid_format_empty = consider_invalid_format_empty

    def _put_default(self, context: CommandContext) -> None:
        if self.element.key is not None and self.value is not None:
            context.put_arg(self.element.key, self.value)

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        if not args.has_next():
            self._put_default(context)
            return
        start_state = args.snapshot()
        context_state = context.snapshot()
        try:
            self.element.parse(source, args, context)
        except ArgumentParseError as error:
            if not (self.consider_invalid_format_empty or args.has_next()):
                raise
            logger.debug("Optional %r skipped: %s", self.element, error)
            args.restore(start_state)
            context.restore(context_state)
            self._put_default(context)

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        if not args.has_next():
            return self.value
        start_state = args.snapshot()
        try:
            return self.element.parse_value(source, args)
        except ArgumentParseError:
            if not (self.consider_invalid_format_empty or args.has_next()):
                raise
            args.restore(start_state)
            return self.value

    def usage(self, source: CommandSource) -> str:
        containing_usage = self.element.usage(source)
        if not containing_usage:
            return ""
        return f"[{containing_usage}]"

    def __repr__(self) -> str:
        return (
            f"OptionalElement(element={self.element!r}, value={self.value!r}, "
            f"weak={self.consider_invalid_format_empty})"
        )


class AllOfElement(CommandElement):
    """
    Parses the child repeatedly until no input is left.

    Shares the child's key, so `only_one(all_of(...))` sees every value.
    """

    def __init__(self, element: CommandElement) -> None:
        super().__init__(element.key)
        self.element = element

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        while args.has_next():
            before = args.snapshot()
            self.element.parse(source, args, context)
            if args.snapshot() == before:
                raise args.create_error(
                    f"Argument {self.key or 'unknown'} did not consume any input"
                )

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return None

    def usage(self, source: CommandSource) -> str:
        return f"{self.element.usage(source)}*"

    def __repr__(self) -> str:
        return f"AllOfElement(element={self.element!r})"


class OnlyOneElement(CommandElement):
    """Fails when the child's key holds more than one value after parsing."""

    def __init__(self, element: CommandElement) -> None:
        super().__init__(element.key)
        self.element = element

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        self.element.parse(source, args, context)
        if len(context.get_all(self.element.key)) > 1:
            key = self.element.key
            raise args.create_error(
                f"Argument {key if key is not None else 'unknown'} may have only one value!",
                TooManyValuesError,
            )

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return self.element.parse_value(source, args)

    def usage(self, source: CommandSource) -> str:
        return self.element.usage(source)

    def __repr__(self) -> str:
        return f"OnlyOneElement(element={self.element!r})"


class PermissionElement(CommandElement):
    """
    Checks a permission before delegating to the child.

    In mandatory mode a missing permission raises `PermissionDeniedError`.
    In optional mode the child is skipped, and left out of the usage, instead.
    Only the permission failure is suppressed: if the source holds the
    permission and the child fails to parse, that error propagates.
    """

    def __init__(
        self, element: CommandElement, permission: str, is_optional: bool = False
    ) -> None:
        super().__init__(element.key)
        self.element = element
        self.permission = permission
        self.is_optional = is_optional

    def _check_permission(self, source: CommandSource, args: CommandArgs) -> bool:
        has_permission = source.has_permission(self.permission)
        if not has_permission and not self.is_optional:
            key = self.key
            raise args.create_error(
                "You do not have permission to use the "
                f"{key if key is not None else 'unknown'} argument",
                PermissionDeniedError,
            )
        return has_permission

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        if self._check_permission(source, args):
            self.element.parse(source, args, context)
        else:
            logger.debug(
                "Skipping %r: source lacks permission '%s'",
                self.element,
                self.permission,
            )

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        if self._check_permission(source, args):
            return self.element.parse_value(source, args)
        return None

    def usage(self, source: CommandSource) -> str:
        if self.is_optional and not source.has_permission(self.permission):
            return ""
        return self.element.usage(source)

    def __repr__(self) -> str:
        return (
            f"PermissionElement(element={self.element!r}, "
            f"permission={self.permission!r}, optional={self.is_optional})"
        )
