# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandContext`, the multi-valued result store a parse writes into.

Values are grouped per key in insertion order. Putting a value under a key
that already has values appends to it; nothing is ever overwritten. Elements
without a key store under `None`.

`snapshot()` captures the whole store as a frozen structural copy and
`restore()` overwrites the current content with it. Alternation and optional
elements use the pair to undo the writes of a failed attempt.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContextSnapshot:
    """Opaque capture of a `CommandContext`."""

    args: tuple[tuple[str | None, tuple[Any, ...]], ...]


class CommandContext:
    """Insertion-ordered multi-map from argument key to parsed values."""

    def __init__(self) -> None:
        self._parsed_args: dict[str | None, list[Any]] = {}

    def put_arg(self, key: str | None, value: Any) -> None:
        if value is None:
            raise ValueError("value must not be None")
        self._parsed_args.setdefault(key, []).append(value)

    def get_all(self, key: str | None) -> list[Any]:
        return list(self._parsed_args.get(key, ()))

    def get_one(self, key: str | None) -> Any | None:
        """Return the value under `key` if there is exactly one, else None."""
        values = self._parsed_args.get(key, [])
        if len(values) != 1:
            return None
        return values[0]

    def require_one(self, key: str | None) -> Any:
        """
        Return the single value under `key`.

        Raises:
            KeyError: If there is no value for the key.
            ValueError: If there is more than one value for the key.
        """
        values = self._parsed_args.get(key, [])
        if not values:
            raise KeyError(key)
        if len(values) > 1:
            raise ValueError(f"Argument '{key}' has {len(values)} values")
        return values[0]

    def has_any(self, key: str | None) -> bool:
        return bool(self._parsed_args.get(key))

    def keys(self) -> list[str | None]:
        return list(self._parsed_args)

    def as_dict(self) -> dict[str | None, list[Any]]:
        return {key: list(values) for key, values in self._parsed_args.items()}

    def snapshot(self) -> ContextSnapshot:
        return ContextSnapshot(
            tuple((key, tuple(values)) for key, values in self._parsed_args.items())
        )

    def restore(self, snapshot: ContextSnapshot) -> None:
        self._parsed_args = {key: list(values) for key, values in snapshot.args}

    def __contains__(self, key: object) -> bool:
        return bool(self._parsed_args.get(key))  # type: ignore[call-overload]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandContext):
            return NotImplemented
        return self._parsed_args == other._parsed_args

    def __repr__(self) -> str:
        return f"CommandContext({self._parsed_args!r})"
