# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Argweave argument engine.

Parse failures share one family, `ArgumentParseError`, which carries the
human-readable message, the source text being parsed and the position of the
offending token inside it. Subclasses only narrow down *why* parsing failed so
callers can branch on them; the engine itself treats them all alike.

All exceptions inherit from `ArgweaveError`, the base exception for the package.

Exception Hierarchy:
- ArgweaveError
    ├── ShapeDefinitionError
    ├── CommandPermissionError
    └── ArgumentParseError
        ├── NotEnoughArgumentsError
        ├── UnknownFlagError
        ├── NoMatchingChoiceError
        ├── PermissionDeniedError
        ├── TooManyValuesError
        ├── TooManyArgumentsError
        └── ArgumentParseErrorWithUsage
"""
from __future__ import annotations


class ArgweaveError(Exception):
    """Base exception for the Argweave engine."""


class ShapeDefinitionError(ArgweaveError):
    """Exception raised when an element tree or shape config is malformed."""


class CommandPermissionError(ArgweaveError):
    """Exception raised when a source may not use a command shape at all."""

    def __init__(
        self, message: str = "You do not have permission to use this command!"
    ) -> None:
        super().__init__(message)


class ArgumentParseError(ArgweaveError):
    """
    Exception raised when user input does not match an element tree.

    Attributes:
        message (str): Human-readable description of the failure.
        source_string (str): The text that was being parsed.
        position (int): Offset of the offending token within `source_string`.
    """

    def __init__(self, message: str, source_string: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.source_string = source_string
        self.position = position

    @property
    def annotated_position(self) -> str:
        """Return the source text with a caret under the failing position."""
        source = self.source_string
        position = self.position
        if len(source) > 80:
            if position >= 37:
                start = position - 37
                end = min(len(source), position + 37)
                if end < len(source):
                    source = "..." + source[start:end] + "..."
                else:
                    source = "..." + source[start:end]
                position = position - start + 3
            else:
                source = source[:77] + "..."
        return f"{source}\n{' ' * max(position, 0)}^"

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"source_string={self.source_string!r}, position={self.position})"
        )


class NotEnoughArgumentsError(ArgumentParseError):
    """Raised when a value is required but the input is exhausted."""


class UnknownFlagError(ArgumentParseError):
    """Raised for an unregistered flag under the `ERROR` policy."""


class NoMatchingChoiceError(ArgumentParseError):
    """Raised when no choice of a pattern-matching element fits the input."""


class PermissionDeniedError(ArgumentParseError):
    """Raised when a permission-gated element is used without the permission."""


class TooManyValuesError(ArgumentParseError):
    """Raised when a single-valued key ends up with more than one value."""


class TooManyArgumentsError(ArgumentParseError):
    """Raised when input remains after a shape has been fully parsed."""


class ArgumentParseErrorWithUsage(ArgumentParseError):
    """An `ArgumentParseError` re-raised together with the usage of its shape."""

    def __init__(self, wrapped: ArgumentParseError, usage: str) -> None:
        super().__init__(wrapped.message, wrapped.source_string, wrapped.position)
        self.wrapped = wrapped
        self.usage = usage
