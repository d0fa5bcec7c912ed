"""
Argweave Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .base import CommandElement
from .flags import CommandFlags, FlagsBuilder, UnknownFlagBehavior
from .leaves import (
    BigDecimalElement,
    BigIntegerElement,
    ChoicesElement,
    ColorElement,
    DateTimeElement,
    DurationElement,
    MarkTrueElement,
    NumericElement,
    RemainingJoinedStringsElement,
    StringElement,
    UrlElement,
    UuidElement,
)
from .pattern import BooleanElement, EnumValueElement, PatternMatchingElement
from .structural import (
    AllOfElement,
    FirstParsingElement,
    OnlyOneElement,
    OptionalElement,
    PermissionElement,
    SequenceElement,
)

__all__ = [
    "CommandElement",
    "CommandFlags",
    "FlagsBuilder",
    "UnknownFlagBehavior",
    "PatternMatchingElement",
    "EnumValueElement",
    "BooleanElement",
    "SequenceElement",
    "FirstParsingElement",
    "OptionalElement",
    "AllOfElement",
    "OnlyOneElement",
    "PermissionElement",
    "MarkTrueElement",
    "StringElement",
    "RemainingJoinedStringsElement",
    "NumericElement",
    "BigDecimalElement",
    "BigIntegerElement",
    "ChoicesElement",
    "UrlElement",
    "UuidElement",
    "DateTimeElement",
    "DurationElement",
    "ColorElement",
]
