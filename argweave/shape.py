# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandShape`, the entry point that ties an element tree to a
tokenizer, an optional permission and help text.

A shape is declared once and parsed any number of times:

    shape = CommandShape(
        seq(string("target"), optional(integer("amount"), 1)),
        description="Give something to someone",
    )
    context = shape.parse(source, 'steve 5')

Parsing a shape:
- checks the shape-level permission (if any),
- tokenizes the input,
- runs the element tree,
- rejects any tokens the tree left over.

Every parse failure is re-raised as `ArgumentParseErrorWithUsage` so callers
can print the shape's usage next to the message. `render_help` and
`render_error` print through the shared rich console.
"""
from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape

from argweave.args import CommandArgs
from argweave.console import console as default_console
from argweave.context import CommandContext
from argweave.elements.base import CommandElement
from argweave.elements.structural import SequenceElement
from argweave.exceptions import (
    ArgumentParseError,
    ArgumentParseErrorWithUsage,
    CommandPermissionError,
    TooManyArgumentsError,
)
from argweave.logger import logger
from argweave.parsing.tokenizers import quoted_strings
from argweave.protocols import CommandSource, InputTokenizer


class CommandShape:
    """
    A reusable description of the arguments one command accepts.

    Args:
        arguments (CommandElement | Sequence[CommandElement]): The element tree,
            or several elements to parse in sequence.
        description (str | None): One-line description shown first in help.
        extended_description (str | None): Longer text shown after the usage.
        permission (str | None): Permission a source needs to use the shape.
        tokenizer (InputTokenizer | None): Splits raw input into tokens.
            Defaults to the quoted-string tokenizer.
    """

    def __init__(
        self,
        arguments: CommandElement | Sequence[CommandElement],
        description: str | None = None,
        extended_description: str | None = None,
        permission: str | None = None,
        tokenizer: InputTokenizer | None = None,
    ) -> None:
        if isinstance(arguments, CommandElement):
            self.arguments: CommandElement = arguments
        else:
            self.arguments = SequenceElement(arguments)
        self.description = description
        self.extended_description = extended_description
        self.permission = permission
        self.tokenizer: InputTokenizer = tokenizer or quoted_strings()

    def test_permission(self, source: CommandSource) -> bool:
        return self.permission is None or source.has_permission(self.permission)

    def check_permission(self, source: CommandSource) -> None:
        """
        Raises:
            CommandPermissionError: If `source` may not use this shape.
        """
        if not self.test_permission(source):
            raise CommandPermissionError()

    def populate_context(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        """Run the element tree and reject leftover input."""
        self.arguments.parse(source, args, context)
        if args.has_next():
            args.next()
            raise args.create_error("Too many arguments!", TooManyArgumentsError)

    def parse(
        self, source: CommandSource, arguments: str, lenient: bool = False
    ) -> CommandContext:
        """
        Parse `arguments` for `source` and return the populated context.

        Raises:
            CommandPermissionError: If `source` may not use this shape.
            ArgumentParseErrorWithUsage: If the input does not match the shape.
        """
        self.check_permission(source)
        context = CommandContext()
        try:
            args = CommandArgs(arguments, self.tokenizer.tokenize(arguments, lenient))
            self.populate_context(source, args, context)
        except ArgumentParseErrorWithUsage:
            raise
        except ArgumentParseError as error:
            logger.debug("Parsing %r failed: %s", arguments, error)
            raise ArgumentParseErrorWithUsage(error, self.get_usage(source)) from error
        logger.debug("Parsed %r into %r", arguments, context)
        return context

    def get_usage(self, source: CommandSource) -> str:
        return self.arguments.usage(source)

    def get_help(self, source: CommandSource) -> str:
        lines: list[str] = []
        if self.description:
            lines.append(self.description)
        lines.append(self.get_usage(source))
        if self.extended_description:
            lines.append(self.extended_description)
        return "\n".join(lines)

    def render_help(
        self, source: CommandSource, console: Console | None = None
    ) -> None:
        console = console or default_console
        if self.description:
            console.print(f"[argweave.description]{escape(self.description)}[/]")
        console.print(f"[argweave.usage]{escape(self.get_usage(source))}[/]")
        if self.extended_description:
            console.print(f"[argweave.extended]{escape(self.extended_description)}[/]")

    def render_error(
        self, error: ArgumentParseError, console: Console | None = None
    ) -> None:
        """Print a parse error with its caret annotation and, if known, usage."""
        console = console or default_console
        console.print(f"[argweave.error]{escape(error.message)}[/]")
        text, _, caret = error.annotated_position.rpartition("\n")
        console.print(escape(text), highlight=False)
        console.print(f"[argweave.caret]{caret}[/]", highlight=False)
        if isinstance(error, ArgumentParseErrorWithUsage) and error.usage:
            console.print(f"[argweave.usage]Usage: {escape(error.usage)}[/]")

    def __repr__(self) -> str:
        return (
            f"CommandShape(arguments={self.arguments!r}, "
            f"permission={self.permission!r})"
        )
