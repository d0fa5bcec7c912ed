# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Defines `SingleArg`, one token of user input together with its raw offsets."""
from dataclasses import dataclass


@dataclass(frozen=True)
class SingleArg:
    """
    A single token split out of raw input.

    Attributes:
        value (str): The token text after quote and escape processing.
        start_idx (int): Offset of the token's first character in the raw input.
        end_idx (int): Offset of the token's last character in the raw input.
    """

    value: str
    start_idx: int
    end_idx: int
