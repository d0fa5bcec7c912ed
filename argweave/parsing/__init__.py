"""
Argweave Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .single_arg import SingleArg
from .tokenizers import (
    QuotedStringTokenizer,
    RawStringTokenizer,
    SpaceSplitTokenizer,
    quoted_strings,
    raw_input,
    space_split,
)

__all__ = [
    "SingleArg",
    "QuotedStringTokenizer",
    "RawStringTokenizer",
    "SpaceSplitTokenizer",
    "quoted_strings",
    "raw_input",
    "space_split",
]
