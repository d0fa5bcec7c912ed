# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for rendering usage, help and parse errors."""
from rich.console import Console
from rich.theme import Theme

ARGWEAVE_THEME = Theme(
    {
        "argweave.description": "bold #88C0D0",
        "argweave.usage": "#A3BE8C",
        "argweave.extended": "#D8DEE9",
        "argweave.error": "bold #BF616A",
        "argweave.caret": "#EBCB8B",
    }
)

console = Console(color_system="truecolor", theme=ARGWEAVE_THEME)
