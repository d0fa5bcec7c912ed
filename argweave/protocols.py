# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for the collaborators Argweave talks to.

These runtime-checkable `Protocol` classes specify the expected interfaces for:
- The identity that a parse is performed on behalf of
- Tokenizers that split raw input into positioned tokens

Protocols:
- CommandSource: Anything that can answer `has_permission(permission)`.
- InputTokenizer: Turns a raw string into a list of `SingleArg` tokens.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from argweave.parsing.single_arg import SingleArg


@runtime_checkable
class CommandSource(Protocol):
    def has_permission(self, permission: str) -> bool: ...


@runtime_checkable
class InputTokenizer(Protocol):
    def tokenize(self, arguments: str, lenient: bool) -> list[SingleArg]: ...
