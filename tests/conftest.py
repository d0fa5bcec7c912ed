import pytest

from argweave.args import CommandArgs
from argweave.context import CommandContext


class Source:
    """A command source holding a fixed set of permissions."""

    def __init__(self, *permissions: str) -> None:
        self.permissions = set(permissions)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


@pytest.fixture
def source():
    return Source()


@pytest.fixture
def admin():
    return Source("admin", "admin.force", "cmd.use")


@pytest.fixture
def run(source):
    """Parse plain tokens with an element; returns (args, context)."""

    def _run(element, *tokens, src=None):
        args = CommandArgs.from_tokens(*tokens)
        context = CommandContext()
        element.parse(src or source, args, context)
        return args, context

    return _run
