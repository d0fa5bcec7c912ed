# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandArgs`, the token stream every element consumes from.

`CommandArgs` owns the raw input, the positioned token list and a cursor. It
supports peeking and consuming tokens, point-in-time snapshots for
backtracking, and the two structural edits the flag parser needs: removing
the tokens a flag consumed and inserting the inline value of `--flag=value`.

Snapshots are frozen structural copies (`ArgsSnapshot`), never diffs, so
restoring one always reproduces the captured state exactly, whatever edits
happened in between.

A fresh `CommandArgs` is created for every parse and is never shared.
"""
from __future__ import annotations

from dataclasses import dataclass

from argweave.exceptions import ArgumentParseError, NotEnoughArgumentsError
from argweave.parsing.single_arg import SingleArg


@dataclass(frozen=True)
class ArgsSnapshot:
    """Opaque capture of a `CommandArgs` cursor and token list."""

    index: int
    args: tuple[SingleArg, ...]


class CommandArgs:
    """
    Ordered, positioned tokens plus a cursor over them.

    The cursor starts before the first token (index -1); `next()` advances it
    and returns the token it lands on.

    Args:
        raw (str): The raw input the tokens were split from.
        args (list[SingleArg] | None): The tokens, in order.
    """

    def __init__(self, raw: str, args: list[SingleArg] | None = None) -> None:
        self.raw: str = raw
        self._args: list[SingleArg] = list(args or [])
        self._index: int = -1

    @classmethod
    def from_tokens(cls, *tokens: str) -> CommandArgs:
        """Build a stream from plain strings, positioned as if joined by spaces."""
        args: list[SingleArg] = []
        offset = 0
        for token in tokens:
            args.append(SingleArg(token, offset, max(offset, offset + len(token) - 1)))
            offset += len(token) + 1
        return cls(" ".join(tokens), args)

    @property
    def index(self) -> int:
        return self._index

    def has_next(self) -> bool:
        return self._index + 1 < len(self._args)

    def peek(self) -> str:
        if not self.has_next():
            raise self.create_error("Not enough arguments", NotEnoughArgumentsError)
        return self._args[self._index + 1].value

    def next(self) -> str:
        if not self.has_next():
            raise self.create_error("Not enough arguments!", NotEnoughArgumentsError)
        self._index += 1
        return self._args[self._index].value

    def next_if_present(self) -> str | None:
        if self.has_next():
            self._index += 1
            return self._args[self._index].value
        return None

    def previous(self) -> None:
        """Go back to the previous token."""
        if self._index > -1:
            self._index -= 1

    def create_error(
        self,
        message: str,
        error_type: type[ArgumentParseError] = ArgumentParseError,
    ) -> ArgumentParseError:
        """Build a parse error pointing at the current token."""
        return error_type(message, self.raw, self.raw_position)

    @property
    def all(self) -> list[str]:
        return [arg.value for arg in self._args]

    @property
    def args(self) -> tuple[SingleArg, ...]:
        return tuple(self._args)

    def __getitem__(self, index: int) -> str:
        return self._args[index].value

    def __len__(self) -> int:
        return len(self._args)

    @property
    def raw_position(self) -> int:
        """Offset of the current token within the raw input."""
        return 0 if self._index < 0 else self._args[self._index].start_idx

    def insert_arg(self, value: str) -> None:
        """Insert a token so that it is the next one returned by `next()`."""
        position = 0 if self._index < 0 else self._args[self._index].end_idx
        self._args.insert(self._index + 1, SingleArg(value, position, position))

    def remove_args(self, start: ArgsSnapshot, end: ArgsSnapshot) -> None:
        """Remove the tokens parsed between two snapshots, both ends inclusive."""
        self._remove_args(start.index, end.index)

    def _remove_args(self, start_idx: int, end_idx: int) -> None:
        if self._index >= start_idx:
            if self._index < end_idx:
                self._index = start_idx - 1
            else:
                self._index -= end_idx - start_idx + 1
        del self._args[start_idx : end_idx + 1]

    def snapshot(self) -> ArgsSnapshot:
        return ArgsSnapshot(self._index, tuple(self._args))

    def restore(self, snapshot: ArgsSnapshot, reset_args: bool = True) -> None:
        """
        Reset the stream to a previous snapshot.

        Args:
            snapshot (ArgsSnapshot): The state to go back to.
            reset_args (bool): Also restore the token list. When False only the
                cursor moves, so tokens removed since the snapshot stay removed.
        """
        self._index = snapshot.index
        if reset_args:
            self._args = list(snapshot.args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandArgs):
            return NotImplemented
        return (
            self.raw == other.raw
            and self._index == other._index
            and self._args == other._args
        )

    def __repr__(self) -> str:
        return f"CommandArgs(raw={self.raw!r}, index={self._index}, args={self.all!r})"
