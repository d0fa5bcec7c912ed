import pytest

from argweave.context import CommandContext


def test_put_arg_appends_values():
    context = CommandContext()
    context.put_arg("tag", "a")
    context.put_arg("tag", "b")
    assert context.get_all("tag") == ["a", "b"]
    assert context.keys() == ["tag"]


def test_put_arg_rejects_none():
    context = CommandContext()
    with pytest.raises(ValueError):
        context.put_arg("tag", None)


def test_get_all_returns_copy():
    context = CommandContext()
    context.put_arg("tag", "a")
    context.get_all("tag").append("b")
    assert context.get_all("tag") == ["a"]
    assert context.get_all("missing") == []


def test_get_one():
    context = CommandContext()
    assert context.get_one("n") is None
    context.put_arg("n", 1)
    assert context.get_one("n") == 1
    context.put_arg("n", 2)
    assert context.get_one("n") is None


def test_require_one():
    context = CommandContext()
    with pytest.raises(KeyError):
        context.require_one("n")
    context.put_arg("n", 1)
    assert context.require_one("n") == 1
    context.put_arg("n", 2)
    with pytest.raises(ValueError):
        context.require_one("n")


def test_has_any_and_contains():
    context = CommandContext()
    assert not context.has_any("flag")
    assert "flag" not in context
    context.put_arg("flag", True)
    assert context.has_any("flag")
    assert "flag" in context


def test_snapshot_and_restore():
    context = CommandContext()
    context.put_arg("a", 1)
    snapshot = context.snapshot()
    context.put_arg("a", 2)
    context.put_arg("b", 3)
    context.restore(snapshot)
    assert context.as_dict() == {"a": [1]}


def test_restore_is_isolated_from_later_writes():
    context = CommandContext()
    context.put_arg("a", 1)
    snapshot = context.snapshot()
    context.restore(snapshot)
    context.put_arg("a", 2)
    context.restore(snapshot)
    assert context.get_all("a") == [1]


def test_equality():
    first = CommandContext()
    second = CommandContext()
    first.put_arg("a", 1)
    assert first != second
    second.put_arg("a", 1)
    assert first == second
