# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Prompt Toolkit validators backed by a `CommandShape`.

`ShapeValidator` parses the prompt text against a shape on every keystroke
check, so interactive prompts reject input the shape would reject and place
the cursor at the offending token.

Included Validators:
- ShapeValidator: Validates a document by parsing it with a shape.
- shape_validator: Factory returning a `ShapeValidator`.
"""
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator

from argweave.exceptions import ArgumentParseError, CommandPermissionError
from argweave.protocols import CommandSource
from argweave.shape import CommandShape


class ShapeValidator(Validator):
    """Validator that accepts exactly the input `shape` parses for `source`."""

    def __init__(self, shape: CommandShape, source: CommandSource) -> None:
        super().__init__()
        self.shape = shape
        self.source = source

    def validate(self, document: Document) -> None:
        try:
            self.shape.parse(self.source, document.text)
        except CommandPermissionError as error:
            raise ValidationError(message=str(error), cursor_position=0) from error
        except ArgumentParseError as error:
            raise ValidationError(
                message=error.message,
                cursor_position=min(max(error.position, 0), len(document.text)),
            ) from error


def shape_validator(shape: CommandShape, source: CommandSource) -> Validator:
    """Validator for input parsed by a command shape."""
    return ShapeValidator(shape, source)
