# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Loads declarative command shapes from YAML or TOML files.

A shape file describes the same element tree the factory functions in
`argweave.arguments` build in code:

    description: Give items to a player
    permission: game.give
    arguments:
      - type: string
        key: target
      - type: optional
        default: 1
        element: {type: integer, key: amount}
      - type: flags
        unknown_short_flags: ignore
        flags:
          - aliases: ["s", "-silent"]
          - aliases: ["-reason"]
            value: {type: remaining_joined_strings, key: reason}
        element: {type: none}

Element types are the factory names (`string`, `integer`, `enum_value`,
`choices`, ...) plus the structural names `seq`, `first_parsing`, `optional`,
`all_of`, `only_one`, `permission`, `flags` and `none`.
"""
from __future__ import annotations

import importlib
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field

from argweave import arguments
from argweave.elements.base import CommandElement
from argweave.exceptions import ShapeDefinitionError
from argweave.logger import logger
from argweave.parsing.tokenizers import quoted_strings, raw_input, space_split
from argweave.protocols import InputTokenizer
from argweave.shape import CommandShape


class RawElement(BaseModel):
    """One node of an element tree as written in a shape file."""

    type: str
    key: str | None = None

    element: RawElement | None = None
    elements: list[RawElement] = Field(default_factory=list)

    default: Any = None
    weak: bool = False
    permission: str | None = None

    choices: dict[str, Any] | None = None
    case_sensitive: bool = True
    choices_in_usage: bool | None = None
    enum: str | None = None
    use_regex: bool = False

    flags: list[RawFlag] = Field(default_factory=list)
    unknown_short_flags: str = "error"
    unknown_long_flags: str = "error"
    anchor_flags: bool = False


class RawFlag(BaseModel):
    """A flag of a `flags` element. A flag with `value` takes an argument."""

    aliases: list[str]
    value: RawElement | None = None
    permission: str | None = None


RawElement.model_rebuild()
RawFlag.model_rebuild()


class ShapeConfig(BaseModel):
    """Top-level model of a shape file."""

    arguments: list[RawElement] = Field(default_factory=list)
    description: str | None = None
    extended_description: str | None = None
    permission: str | None = None
    tokenizer: str = "quoted_strings"
    force_lenient: bool = False

    def to_shape(self) -> CommandShape:
        return CommandShape(
            [build_element(raw) for raw in self.arguments],
            description=self.description,
            extended_description=self.extended_description,
            permission=self.permission,
            tokenizer=build_tokenizer(self.tokenizer, self.force_lenient),
        )


def import_enum(dotted_path: str) -> type[Enum]:
    """Dynamically imports an `Enum` class from a dotted path like 'my.module.Color'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ShapeDefinitionError(f"Invalid enum path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ShapeDefinitionError(
            f"Could not import '{dotted_path}': {error}"
        ) from error
    enum_type = getattr(module, attr, None)
    if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
        raise ShapeDefinitionError(f"'{dotted_path}' is not an Enum class")
    return enum_type


def build_tokenizer(name: str, force_lenient: bool = False) -> InputTokenizer:
    if name == "quoted_strings":
        return quoted_strings(force_lenient)
    elif name == "space_split":
        return space_split()
    elif name == "raw_input":
        return raw_input()
    raise ShapeDefinitionError(f"Unknown tokenizer: {name}")


def _require_key(raw: RawElement) -> str:
    if not raw.key:
        raise ShapeDefinitionError(f"Element of type '{raw.type}' requires a key")
    return raw.key


def _require_child(raw: RawElement) -> CommandElement:
    if raw.element is None:
        raise ShapeDefinitionError(
            f"Element of type '{raw.type}' requires a nested 'element'"
        )
    return build_element(raw.element)


def _build_optional(raw: RawElement) -> CommandElement:
    if raw.weak:
        return arguments.optional_weak(_require_child(raw), raw.default)
    return arguments.optional(_require_child(raw), raw.default)


def _build_permission(raw: RawElement) -> CommandElement:
    if not raw.permission:
        raise ShapeDefinitionError("Element of type 'permission' requires a permission")
    if raw.weak:
        return arguments.requiring_permission_weak(_require_child(raw), raw.permission)
    return arguments.requiring_permission(_require_child(raw), raw.permission)


def _build_choices(raw: RawElement) -> CommandElement:
    if not raw.choices:
        raise ShapeDefinitionError("Element of type 'choices' requires a 'choices' map")
    return arguments.choices(
        _require_key(raw), raw.choices, raw.choices_in_usage, raw.case_sensitive
    )


def _build_enum(raw: RawElement) -> CommandElement:
    if not raw.enum:
        raise ShapeDefinitionError("Element of type 'enum_value' requires an 'enum' path")
    return arguments.enum_value(_require_key(raw), import_enum(raw.enum), raw.use_regex)


def _build_flags(raw: RawElement) -> CommandElement:
    builder = arguments.flags()
    for flag in raw.flags:
        if flag.value is not None:
            builder.value_flag(build_element(flag.value), *flag.aliases)
        elif flag.permission:
            builder.permission_flag(flag.permission, *flag.aliases)
        else:
            builder.flag(*flag.aliases)
    try:
        builder.set_unknown_short_flag_behavior(raw.unknown_short_flags)
        builder.set_unknown_long_flag_behavior(raw.unknown_long_flags)
    except ValueError as error:
        raise ShapeDefinitionError(str(error)) from error
    builder.set_anchor_flags(raw.anchor_flags)
    wrapped = build_element(raw.element) if raw.element is not None else None
    return builder.build_with(wrapped)


def _leaf(factory: Callable[[str], CommandElement]) -> Callable[[RawElement], CommandElement]:
    return lambda raw: factory(_require_key(raw))


ELEMENT_BUILDERS: dict[str, Callable[[RawElement], CommandElement]] = {
    "none": lambda raw: arguments.none(),
    "seq": lambda raw: arguments.seq(*(build_element(e) for e in raw.elements)),
    "first_parsing": lambda raw: arguments.first_parsing(
        *(build_element(e) for e in raw.elements)
    ),
    "optional": _build_optional,
    "all_of": lambda raw: arguments.all_of(_require_child(raw)),
    "only_one": lambda raw: arguments.only_one(_require_child(raw)),
    "permission": _build_permission,
    "flags": _build_flags,
    "choices": _build_choices,
    "enum_value": _build_enum,
    "mark_true": _leaf(arguments.mark_true),
    "string": _leaf(arguments.string),
    "integer": _leaf(arguments.integer),
    "floating": _leaf(arguments.floating),
    "big_decimal": _leaf(arguments.big_decimal),
    "big_integer": _leaf(arguments.big_integer),
    "boolean": _leaf(arguments.boolean),
    "url": _leaf(arguments.url),
    "uuid": _leaf(arguments.uuid_value),
    "date_time": _leaf(arguments.date_time),
    "date_time_or_now": _leaf(arguments.date_time_or_now),
    "duration": _leaf(arguments.duration),
    "color": _leaf(arguments.color),
    "remaining_joined_strings": _leaf(arguments.remaining_joined_strings),
    "remaining_raw_joined_strings": _leaf(arguments.remaining_raw_joined_strings),
}


def build_element(raw: RawElement) -> CommandElement:
    """Turn a validated `RawElement` into a live element tree."""
    builder = ELEMENT_BUILDERS.get(raw.type.lower())
    if builder is None:
        valid = ", ".join(sorted(ELEMENT_BUILDERS))
        raise ShapeDefinitionError(
            f"Unknown element type '{raw.type}'. Must be one of: {valid}"
        )
    return builder(raw)


def loader(file_path: Path | str) -> CommandShape:
    """
    Load a `CommandShape` from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the shape file (.yaml, .yml or .toml).

    Returns:
        CommandShape: The shape described by the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported, or its content is not
            a table or fails validation.
        ShapeDefinitionError: If the element tree cannot be built.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such shape file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as shape_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(shape_file)
        elif suffix == ".toml":
            raw_config = toml.load(shape_file)
        else:
            raise ValueError(f"Unsupported shape file format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Shape file must contain a table with a list of arguments.\n"
            "Example:\n"
            "description: 'Greet someone'\n"
            "arguments:\n"
            "  - type: 'string'\n"
            "    key: 'name'"
        )

    logger.debug("Loading shape from '%s'", path)
    return ShapeConfig.model_validate(raw_config).to_shape()
