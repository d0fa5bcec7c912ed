"""
Argweave Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .args import CommandArgs
from .context import CommandContext
from .shape import CommandShape

logger = logging.getLogger("argweave")


__all__ = [
    "CommandArgs",
    "CommandContext",
    "CommandShape",
]
