# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandFlags`, the element that picks `-x` / `--long` flags out of the
token stream, and `FlagsBuilder`, the only way to configure one.

Flags may appear anywhere in the input (or only at its start when anchored).
Each recognised flag is handed to its own element; the tokens it consumed are
then removed from the stream so that the wrapped "rest" element, which parses
everything else, never sees them.

Flag grammar:
- `--name` → long flag `name` (case-insensitive).
- `--name=value` → long flag `name`; `value` is injected as the next token.
- `-abc` → short flags `a`, `b`, `c`, resolved one after another.
- An em dash (U+2014) is read as `--` so autocorrected input still works.

Unknown flags follow a per-kind `UnknownFlagBehavior`.

Example:
    element = (
        flags()
        .flag("v", "-verbose")
        .value_flag(integer("count"), "c", "-count")
        .set_unknown_short_flag_behavior(UnknownFlagBehavior.IGNORE)
        .build_with(seq(string("target")))
    )
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from argweave.args import CommandArgs
from argweave.context import CommandContext
from argweave.elements.base import CommandElement
from argweave.elements.leaves import MarkTrueElement
from argweave.elements.structural import PermissionElement
from argweave.exceptions import ShapeDefinitionError, UnknownFlagError
from argweave.logger import logger
from argweave.protocols import CommandSource

EM_DASH = "—"


class UnknownFlagBehavior(Enum):
    """
    How the flag parser treats a flag-looking token it does not recognise.

    Members:
        ERROR: Raise an `UnknownFlagError`.
        ACCEPT_NONVALUE: Store `True` (or the inline `=value`) under the flag name.
        ACCEPT_VALUE: Store the inline `=value` or the next token under the flag name.
        IGNORE: Leave the token for the wrapped element. For short flags this is
            only allowed for the first letter of a bundle; a later unknown
            letter is always an error because the bundle is already committed.

    Aliases:
        - "nonvalue" → "accept_nonvalue"
        - "value" → "accept_value"
        - "fail" → "error"
    """

    ERROR = "error"
    ACCEPT_NONVALUE = "accept_nonvalue"
    ACCEPT_VALUE = "accept_value"
    IGNORE = "ignore"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "nonvalue": "accept_nonvalue",
            "value": "accept_value",
            "fail": "error",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> UnknownFlagBehavior:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


class CommandFlags(CommandElement):
    """
    Scans the input for flags, then parses what is left with a wrapped element.

    Instances are created by `FlagsBuilder.build_with()` and hold read-only
    flag tables.
    """

    def __init__(
        self,
        child_element: CommandElement | None,
        usage_flags: Mapping[tuple[str, ...], CommandElement],
        short_flags: Mapping[str, CommandElement],
        long_flags: Mapping[str, CommandElement],
        unknown_short_flag_behavior: UnknownFlagBehavior,
        unknown_long_flag_behavior: UnknownFlagBehavior,
        anchor_flags: bool,
    ) -> None:
        super().__init__(None)
        self.child_element = child_element
        self.usage_flags = MappingProxyType(dict(usage_flags))
        self.short_flags = MappingProxyType(dict(short_flags))
        self.long_flags = MappingProxyType(dict(long_flags))
        self.unknown_short_flag_behavior = unknown_short_flag_behavior
        self.unknown_long_flag_behavior = unknown_long_flag_behavior
        self.anchor_flags = anchor_flags

    def parse(
        self, source: CommandSource, args: CommandArgs, context: CommandContext
    ) -> None:
        state = args.snapshot()
        while args.has_next():
            token = args.next().replace(EM_DASH, "--")
            if token.startswith("-"):
                start = args.snapshot()
                if token.startswith("--"):
                    remove = self._parse_long_flag(source, token[2:], args, context)
                else:
                    remove = self._parse_short_flags(source, token[1:], args, context)
                if remove:
                    args.remove_args(start, args.snapshot())
            elif self.anchor_flags:
                break
        # Tokens consumed by flags stay removed; only the cursor goes back.
        args.restore(state, reset_args=False)
        if self.child_element is not None:
            self.child_element.parse(source, args, context)

    def _parse_long_flag(
        self,
        source: CommandSource,
        long_flag: str,
        args: CommandArgs,
        context: CommandContext,
    ) -> bool:
        name, has_value, inline_value = long_flag.partition("=")
        flag = name.lower()
        element = self.long_flags.get(flag)
        if element is None:
            behavior = self.unknown_long_flag_behavior
            if behavior == UnknownFlagBehavior.ERROR:
                raise args.create_error(
                    f"Unknown long flag {name} specified", UnknownFlagError
                )
            elif behavior == UnknownFlagBehavior.ACCEPT_NONVALUE:
                context.put_arg(flag, inline_value if has_value else True)
                return True
            elif behavior == UnknownFlagBehavior.ACCEPT_VALUE:
                context.put_arg(flag, inline_value if has_value else args.next())
                return True
            logger.debug("Ignoring unknown long flag '%s'", name)
            return False
        if has_value:
            args.insert_arg(inline_value)
        logger.debug("Parsing long flag '%s' with %r", flag, element)
        element.parse(source, args, context)
        return True

    def _parse_short_flags(
        self,
        source: CommandSource,
        short_flags: str,
        args: CommandArgs,
        context: CommandContext,
    ) -> bool:
        for position, short_flag in enumerate(short_flags):
            element = self.short_flags.get(short_flag)
            if element is not None:
                logger.debug("Parsing short flag '%s' with %r", short_flag, element)
                element.parse(source, args, context)
                continue
            behavior = self.unknown_short_flag_behavior
            if behavior == UnknownFlagBehavior.IGNORE:
                if position == 0:
                    logger.debug("Ignoring unknown short flag '%s'", short_flag)
                    return False
                raise args.create_error(
                    f"Unknown short flag {short_flag} specified", UnknownFlagError
                )
            elif behavior == UnknownFlagBehavior.ERROR:
                raise args.create_error(
                    f"Unknown short flag {short_flag} specified", UnknownFlagError
                )
            elif behavior == UnknownFlagBehavior.ACCEPT_NONVALUE:
                context.put_arg(short_flag, True)
            elif behavior == UnknownFlagBehavior.ACCEPT_VALUE:
                context.put_arg(short_flag, args.next())
        return True

    def parse_value(self, source: CommandSource, args: CommandArgs) -> Any:
        return None

    def usage(self, source: CommandSource) -> str:
        groups: list[str] = []
        for aliases, element in self.usage_flags.items():
            flag_text = "|".join(
                f"--{alias}" if len(alias) > 1 else f"-{alias}" for alias in aliases
            )
            element_usage = element.usage(source)
            if element_usage.strip():
                flag_text = f"{flag_text}={element_usage}"
            groups.append(f"[{flag_text}]")
        if self.child_element is not None:
            child_usage = self.child_element.usage(source)
            if child_usage:
                groups.append(child_usage)
        return " ".join(groups)

    def __repr__(self) -> str:
        return (
            f"CommandFlags(flags={list(self.usage_flags)!r}, "
            f"child={self.child_element!r}, anchored={self.anchor_flags})"
        )


class FlagsBuilder:
    """
    Collects flag definitions and produces a frozen `CommandFlags`.

    Each name registers aliases for one flag:
    - a string starting with `-` registers the long flag named by the rest of
      the string (so "-flag" matches `--flag`);
    - a single character registers that short flag;
    - a longer string registers each of its characters as an independent
      short flag (so "vq" matches `-v` and `-q`, stored under `v` and `q`).

    Long and single-character aliases of one call share a single element.
    """

    def __init__(self) -> None:
        self._usage_flags: dict[tuple[str, ...], CommandElement] = {}
        self._short_flags: dict[str, CommandElement] = {}
        self._long_flags: dict[str, CommandElement] = {}
        self._unknown_short_flag_behavior = UnknownFlagBehavior.ERROR
        self._unknown_long_flag_behavior = UnknownFlagBehavior.ERROR
        self._anchor_flags = False

    def _flag(
        self, factory: Callable[[str], CommandElement], *names: str
    ) -> FlagsBuilder:
        if not names:
            raise ShapeDefinitionError("At least one flag name is required")
        groups: list[tuple[list[str], CommandElement]] = []
        shared_aliases: list[str] = []
        shared_element: CommandElement | None = None
        for name in names:
            if not isinstance(name, str) or not name or name == "-":
                raise ShapeDefinitionError(f"Invalid flag name: {name!r}")
            if name.startswith("-") or len(name) == 1:
                flag_key = name[1:] if name.startswith("-") else name
                if shared_element is None:
                    shared_element = factory(flag_key)
                    groups.append((shared_aliases, shared_element))
                shared_aliases.append(flag_key)
                if name.startswith("-"):
                    self._long_flags[flag_key.lower()] = shared_element
                else:
                    self._short_flags[flag_key] = shared_element
            else:
                # Each letter of a bundle is its own flag.
                for flag_key in name:
                    element = factory(flag_key)
                    groups.append(([flag_key], element))
                    self._short_flags[flag_key] = element
        for aliases, element in groups:
            self._usage_flags[tuple(aliases)] = element
        return self

    def flag(self, *names: str) -> FlagsBuilder:
        """Add a value-less flag storing `True` under its first alias."""
        return self._flag(MarkTrueElement, *names)

    def permission_flag(self, flag_permission: str, *names: str) -> FlagsBuilder:
        """Add a value-less flag that requires `flag_permission` to be used."""
        return self._flag(
            lambda key: PermissionElement(MarkTrueElement(key), flag_permission),
            *names,
        )

    def value_flag(self, value: CommandElement, *names: str) -> FlagsBuilder:
        """Add a flag whose value is parsed by `value`. It may repeat."""
        return self._flag(lambda _: value, *names)

    def set_unknown_long_flag_behavior(
        self, behavior: UnknownFlagBehavior | str
    ) -> FlagsBuilder:
        self._unknown_long_flag_behavior = UnknownFlagBehavior(behavior)
        return self

    def set_unknown_short_flag_behavior(
        self, behavior: UnknownFlagBehavior | str
    ) -> FlagsBuilder:
        """
        Set how unregistered short flags are handled.

        Commands that accept negative numbers should use `IGNORE` so that
        `-5` reaches the wrapped element instead of failing as flag `5`.
        """
        self._unknown_short_flag_behavior = UnknownFlagBehavior(behavior)
        return self

    def set_anchor_flags(self, anchor_flags: bool) -> FlagsBuilder:
        """Only pick up flags at the beginning of the input."""
        self._anchor_flags = anchor_flags
        return self

    def build_with(self, wrapped: CommandElement | None) -> CommandFlags:
        """
        Build the flag element, parsing all non-flag input with `wrapped`.

        Wrap several elements in `seq(...)` to pass them here.
        """
        return CommandFlags(
            wrapped,
            self._usage_flags,
            self._short_flags,
            self._long_flags,
            self._unknown_short_flag_behavior,
            self._unknown_long_flag_behavior,
            self._anchor_flags,
        )
