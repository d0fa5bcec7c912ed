# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input tokenizers that split a raw argument string into positioned tokens.

Every token keeps the offsets it came from in the raw string so that parse
errors can point at the offending text and elements such as
`remaining_raw_joined_strings` can slice the untouched input.

Tokenizers:
- QuotedStringTokenizer: whitespace separated, with quotes and backslash escapes.
- SpaceSplitTokenizer: splits on single spaces only.
- RawStringTokenizer: the whole input as one token.

Factories:
- quoted_strings(force_lenient=False, trim_trailing_space=True)
- space_split()
- raw_input()
"""
from __future__ import annotations

import re

from argweave.exceptions import ArgumentParseError
from argweave.parsing.single_arg import SingleArg

CHAR_BACKSLASH = "\\"
CHAR_SINGLE_QUOTE = "'"
CHAR_DOUBLE_QUOTE = '"'


class TokenizerState:
    """Cursor over the raw input used while tokenizing."""

    def __init__(self, buffer: str, lenient: bool) -> None:
        self.buffer = buffer
        self.lenient = lenient
        self.index = -1

    def has_more(self) -> bool:
        return self.index + 1 < len(self.buffer)

    def peek(self) -> str:
        if not self.has_more():
            raise self.create_error("Buffer overrun while parsing args")
        return self.buffer[self.index + 1]

    def next(self) -> str:
        if not self.has_more():
            raise self.create_error("Buffer overrun while parsing args")
        self.index += 1
        return self.buffer[self.index]

    def create_error(self, message: str) -> ArgumentParseError:
        return ArgumentParseError(message, self.buffer, max(self.index, 0))


class QuotedStringTokenizer:
    """
    Splits input on whitespace while honouring quoted strings and escapes.

    Args:
        handle_quoted_strings (bool): Treat `'` and `"` as grouping characters.
        force_lenient (bool): Accept unterminated quotes even in strict mode.
        trim_trailing_space (bool): Skip whitespace after each token so that
            trailing whitespace does not produce an empty final token.
    """

    def __init__(
        self,
        handle_quoted_strings: bool = True,
        force_lenient: bool = False,
        trim_trailing_space: bool = True,
    ) -> None:
        self.handle_quoted_strings = handle_quoted_strings
        self.force_lenient = force_lenient
        self.trim_trailing_space = trim_trailing_space

    def tokenize(self, arguments: str, lenient: bool = False) -> list[SingleArg]:
        if not arguments:
            return []
        state = TokenizerState(arguments, lenient)
        tokens: list[SingleArg] = []
        if self.trim_trailing_space:
            self._skip_whitespace(state)
        while state.has_more():
            if not self.trim_trailing_space:
                self._skip_whitespace(state)
            start_idx = state.index + 1
            value = self._next_arg(state)
            tokens.append(SingleArg(value, start_idx, state.index))
            if self.trim_trailing_space:
                self._skip_whitespace(state)
        return tokens

    def _skip_whitespace(self, state: TokenizerState) -> None:
        while state.has_more() and state.peek().isspace():
            state.next()

    def _next_arg(self, state: TokenizerState) -> str:
        builder: list[str] = []
        if state.has_more():
            char = state.peek()
            if self.handle_quoted_strings and char in (
                CHAR_DOUBLE_QUOTE,
                CHAR_SINGLE_QUOTE,
            ):
                self._parse_quoted_string(state, char, builder)
            else:
                self._parse_unquoted_string(state, builder)
        return "".join(builder)

    def _parse_quoted_string(
        self, state: TokenizerState, quote: str, builder: list[str]
    ) -> None:
        char = state.next()
        if char != quote:
            raise state.create_error(
                f"Actual next character '{char}' did not match expected "
                f"quotation character '{quote}'"
            )
        while True:
            if not state.has_more():
                if state.lenient or self.force_lenient:
                    return
                raise state.create_error("Unterminated quoted string found")
            char = state.peek()
            if char == quote:
                state.next()
                return
            elif char == CHAR_BACKSLASH:
                self._parse_escape(state, builder)
            else:
                builder.append(state.next())

    def _parse_unquoted_string(self, state: TokenizerState, builder: list[str]) -> None:
        while state.has_more():
            char = state.peek()
            if char.isspace():
                return
            elif char == CHAR_BACKSLASH:
                self._parse_escape(state, builder)
            else:
                builder.append(state.next())

    def _parse_escape(self, state: TokenizerState, builder: list[str]) -> None:
        state.next()
        builder.append(state.next())

    def __repr__(self) -> str:
        return (
            f"QuotedStringTokenizer(handle_quoted_strings={self.handle_quoted_strings}, "
            f"force_lenient={self.force_lenient}, "
            f"trim_trailing_space={self.trim_trailing_space})"
        )


class SpaceSplitTokenizer:
    """Splits input on single spaces; runs of spaces never produce empty tokens."""

    SPACE_REGEX = re.compile(r"^[ ]*$")

    def tokenize(self, arguments: str, lenient: bool = False) -> list[SingleArg]:
        if self.SPACE_REGEX.match(arguments):
            return []
        tokens: list[SingleArg] = []
        last_index = 0
        remaining = arguments
        while (space_index := remaining.find(" ")) != -1:
            if space_index != 0:
                tokens.append(
                    SingleArg(
                        remaining[:space_index],
                        last_index,
                        last_index + space_index - 1,
                    )
                )
                remaining = remaining[space_index:]
                last_index += space_index
            else:
                remaining = remaining[1:]
                last_index += 1
        if remaining:
            end_idx = last_index + len(remaining) - 1
            tokens.append(SingleArg(remaining, last_index, end_idx))
        return tokens

    def __repr__(self) -> str:
        return "SpaceSplitTokenizer()"


class RawStringTokenizer:
    """Returns the entire input as a single token."""

    def tokenize(self, arguments: str, lenient: bool = False) -> list[SingleArg]:
        if not arguments:
            return []
        return [SingleArg(arguments, 0, len(arguments) - 1)]

    def __repr__(self) -> str:
        return "RawStringTokenizer()"


def quoted_strings(
    force_lenient: bool = False, trim_trailing_space: bool = True
) -> QuotedStringTokenizer:
    """Tokenizer that understands quotes and backslash escapes."""
    return QuotedStringTokenizer(True, force_lenient, trim_trailing_space)


def space_split() -> SpaceSplitTokenizer:
    """Tokenizer that splits on spaces without any quote handling."""
    return SpaceSplitTokenizer()


def raw_input() -> RawStringTokenizer:
    """Tokenizer that keeps the input as one token."""
    return RawStringTokenizer()
