import pytest

from argweave.arguments import (
    flags,
    integer,
    none,
    remaining_joined_strings,
    seq,
    string,
)
from argweave.elements.flags import UnknownFlagBehavior
from argweave.exceptions import (
    NotEnoughArgumentsError,
    PermissionDeniedError,
    ShapeDefinitionError,
    UnknownFlagError,
)


def verbose_flags():
    return flags().flag("v", "-verbose").build_with(string("name"))


@pytest.mark.parametrize(
    "tokens",
    [
        ("-v", "bob"),
        ("bob", "-v"),
        ("--verbose", "bob"),
        ("bob", "--VERBOSE"),
        ("—verbose", "bob"),
    ],
)
def test_flag_anywhere_in_input(run, tokens):
    _, context = run(verbose_flags(), *tokens)
    assert context.get_all("v") == [True]
    assert context.get_all("name") == ["bob"]


def test_no_flags_given(run):
    _, context = run(verbose_flags(), "bob")
    assert context.as_dict() == {"name": ["bob"]}


def test_flag_tokens_are_removed_for_the_rest_element(run):
    element = flags().flag("v").build_with(seq(string("a"), string("b")))
    _, context = run(element, "x", "-v", "y")
    assert context.as_dict() == {"v": [True], "a": ["x"], "b": ["y"]}


def test_anchored_flags_stop_at_first_value(run):
    element = (
        flags()
        .flag("v")
        .set_anchor_flags(True)
        .build_with(remaining_joined_strings("rest"))
    )
    _, context = run(element, "bob", "-v")
    assert context.as_dict() == {"rest": ["bob -v"]}
    _, context = run(element, "-v", "bob")
    assert context.as_dict() == {"v": [True], "rest": ["bob"]}


def test_value_flag(run):
    element = flags().value_flag(integer("count"), "c", "-count").build_with(
        string("name")
    )
    _, context = run(element, "-c", "5", "bob")
    assert context.as_dict() == {"count": [5], "name": ["bob"]}


def test_long_flag_inline_value(run):
    element = flags().value_flag(integer("count"), "c", "-count").build_with(
        string("name")
    )
    _, context = run(element, "--count=7", "bob")
    assert context.as_dict() == {"count": [7], "name": ["bob"]}


def test_inline_value_leaves_next_token_for_rest(run):
    element = flags().value_flag(string("name"), "-name").build_with(
        remaining_joined_strings("rest")
    )
    _, context = run(element, "--name=hello", "world")
    assert context.as_dict() == {"name": ["hello"], "rest": ["world"]}


def test_value_flag_repeats(run):
    element = flags().value_flag(string("tag"), "t").build_with(none())
    _, context = run(element, "-t", "a", "-t", "b")
    assert context.get_all("tag") == ["a", "b"]


def test_value_flag_missing_value(run):
    element = flags().value_flag(integer("count"), "c").build_with(none())
    with pytest.raises(NotEnoughArgumentsError):
        run(element, "-c")


def test_bundle_string_registers_each_letter(run):
    element = flags().flag("abc").build_with(none())
    _, context = run(element, "-abc")
    assert context.as_dict() == {"a": [True], "b": [True], "c": [True]}
    _, context = run(element, "-b")
    assert context.as_dict() == {"b": [True]}


def test_bundled_short_flags_with_value_last(run):
    element = (
        flags().flag("a").value_flag(string("c"), "c").build_with(none())
    )
    _, context = run(element, "-ac", "val")
    assert context.as_dict() == {"a": [True], "c": ["val"]}


def test_unknown_long_flag_error(run):
    with pytest.raises(UnknownFlagError) as exc_info:
        run(verbose_flags(), "--nope", "bob")
    assert exc_info.value.message == "Unknown long flag nope specified"


def test_unknown_short_flag_error(run):
    with pytest.raises(UnknownFlagError, match="Unknown short flag x specified"):
        run(verbose_flags(), "-x", "bob")


def test_unknown_long_flag_accept_nonvalue(run):
    element = (
        flags()
        .set_unknown_long_flag_behavior(UnknownFlagBehavior.ACCEPT_NONVALUE)
        .build_with(string("name"))
    )
    _, context = run(element, "--Debug", "--level=3", "bob")
    assert context.as_dict() == {"debug": [True], "level": ["3"], "name": ["bob"]}


def test_unknown_long_flag_accept_value(run):
    element = (
        flags()
        .set_unknown_long_flag_behavior("accept_value")
        .build_with(string("name"))
    )
    _, context = run(element, "--level", "3", "bob")
    assert context.as_dict() == {"level": ["3"], "name": ["bob"]}


def test_unknown_short_flags_accept(run):
    nonvalue = flags().set_unknown_short_flag_behavior("nonvalue").build_with(none())
    _, context = run(nonvalue, "-xy")
    assert context.as_dict() == {"x": [True], "y": [True]}

    value = flags().set_unknown_short_flag_behavior("value").build_with(none())
    _, context = run(value, "-x", "hi")
    assert context.as_dict() == {"x": ["hi"]}


def test_unknown_long_flag_ignored(run):
    element = (
        flags()
        .set_unknown_long_flag_behavior(UnknownFlagBehavior.IGNORE)
        .build_with(remaining_joined_strings("rest"))
    )
    _, context = run(element, "--foo", "bar")
    assert context.as_dict() == {"rest": ["--foo bar"]}


def test_ignored_short_flag_allows_negative_numbers(run):
    element = (
        flags()
        .flag("v")
        .set_unknown_short_flag_behavior(UnknownFlagBehavior.IGNORE)
        .build_with(integer("n"))
    )
    _, context = run(element, "-5", "-v")
    assert context.as_dict() == {"v": [True], "n": [-5]}


def test_ignored_short_flag_later_in_bundle_fails(run):
    element = (
        flags()
        .flag("a")
        .set_unknown_short_flag_behavior(UnknownFlagBehavior.IGNORE)
        .build_with(none())
    )
    with pytest.raises(UnknownFlagError, match="Unknown short flag z specified"):
        run(element, "-az")


def test_permission_flag(run, admin):
    element = flags().permission_flag("admin.force", "f", "-force").build_with(none())
    with pytest.raises(PermissionDeniedError) as exc_info:
        run(element, "--force")
    assert exc_info.value.message == "You do not have permission to use the f argument"
    _, context = run(element, "--force", src=admin)
    assert context.get_all("f") == [True]


def test_flags_usage(source):
    element = (
        flags()
        .flag("v", "-verbose")
        .value_flag(integer("count"), "c")
        .build_with(string("name"))
    )
    assert element.usage(source) == "[-v|--verbose] [-c=<count>] <name>"


def test_flags_usage_without_rest(source):
    assert flags().flag("ab").build_with(none()).usage(source) == "[-a] [-b]"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("error", UnknownFlagBehavior.ERROR),
        ("fail", UnknownFlagBehavior.ERROR),
        ("nonvalue", UnknownFlagBehavior.ACCEPT_NONVALUE),
        ("Accept-Value", UnknownFlagBehavior.ACCEPT_VALUE),
        ("IGNORE", UnknownFlagBehavior.IGNORE),
    ],
)
def test_unknown_flag_behavior_aliases(value, expected):
    assert UnknownFlagBehavior(value) is expected


def test_unknown_flag_behavior_invalid():
    with pytest.raises(ValueError, match="Must be one of"):
        UnknownFlagBehavior("sometimes")


@pytest.mark.parametrize("specs", [(), ("",), ("-",)])
def test_invalid_flag_specs(specs):
    with pytest.raises(ShapeDefinitionError):
        flags().flag(*specs)


def test_ignored_unknown_short_flag_reaches_rest(run):
    element = (
        flags()
        .flag("a")
        .set_unknown_short_flag_behavior(UnknownFlagBehavior.IGNORE)
        .build_with(remaining_joined_strings("rest"))
    )
    _, context = run(element, "-x", "-a")
    assert context.as_dict() == {"a": [True], "rest": ["-x"]}
