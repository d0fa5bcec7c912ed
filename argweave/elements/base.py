# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandElement`, the abstract contract every parsing element follows.

An element either consumes tokens from a `CommandArgs` stream and records
what it found in a `CommandContext`, or raises an `ArgumentParseError`.
Elements only hold configuration (child elements, key, converter functions,
flag tables); all per-parse state lives in the stream and context passed to
each call, so one element tree can be reused for any number of parses.

Operations:
- parse(source, args, context): consume tokens and store values.
- parse_value(source, args): consume tokens and return the converted value.
- usage(source): render a placeholder for help text.

`source` is the opaque identity a parse runs for. Elements never look at it
except to forward it to `source.has_permission(...)`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from argweave.args import CommandArgs
from argweave.context import CommandContext
from argweave.protocols import CommandSource


class CommandElement(ABC):
    """
    Base class for all argument elements.

    Leaf elements only implement `parse_value`; the default `parse` stores its
    result under `key`. A `list` result is spread, one value per item, which
    is how an element reports several values for one token.

    Args:
        key (str | None): The key results are stored under, or None for
            elements that store nothing themselves.
    """

    def __init__(self, key: str | None = None) -> None:
        self._key = key

    @property
    def key(self) -> str | None:
        return self._key

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        value = self.parse_value(source, args)
        if self._key is not None and value is not None:
            if isinstance(value, list):
                for item in value:
                    context.put_arg(self._key, item)
            else:
                context.put_arg(self._key, value)

    @abstractmethod
    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        """Consume tokens and return the parsed value, or None for no value."""

    def usage(self, source: CommandSource) -> str:
        return f"<{self._key}>" if self._key is not None else ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r})"
