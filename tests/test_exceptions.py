from argweave.exceptions import (
    ArgumentParseError,
    ArgumentParseErrorWithUsage,
    ArgweaveError,
    CommandPermissionError,
    NoMatchingChoiceError,
    NotEnoughArgumentsError,
    PermissionDeniedError,
    ShapeDefinitionError,
    TooManyArgumentsError,
    TooManyValuesError,
    UnknownFlagError,
)


def test_hierarchy():
    for error_type in (
        NotEnoughArgumentsError,
        UnknownFlagError,
        NoMatchingChoiceError,
        PermissionDeniedError,
        TooManyValuesError,
        TooManyArgumentsError,
        ArgumentParseErrorWithUsage,
    ):
        assert issubclass(error_type, ArgumentParseError)
    assert issubclass(ArgumentParseError, ArgweaveError)
    assert issubclass(ShapeDefinitionError, ArgweaveError)
    assert issubclass(CommandPermissionError, ArgweaveError)


def test_str_is_message():
    error = ArgumentParseError("Not enough arguments!", "give", 0)
    assert str(error) == "Not enough arguments!"
    assert "give" in repr(error)


def test_annotated_position_short_source():
    error = ArgumentParseError("bad", "abc def", 4)
    assert error.annotated_position == "abc def\n    ^"


def test_annotated_position_truncates_around_position():
    source = "a" * 50 + "X" + "b" * 49
    error = ArgumentParseError("bad", source, 50)
    text, caret = error.annotated_position.split("\n")
    assert text.startswith("...") and text.endswith("...")
    assert caret == " " * 40 + "^"
    assert text[40] == "X"


def test_annotated_position_truncates_tail_for_early_position():
    source = "x" * 100
    error = ArgumentParseError("bad", source, 10)
    text, caret = error.annotated_position.split("\n")
    assert text == "x" * 77 + "..."
    assert caret == " " * 10 + "^"


def test_command_permission_error_default_message():
    assert str(CommandPermissionError()) == (
        "You do not have permission to use this command!"
    )


def test_error_with_usage_keeps_wrapped_error():
    wrapped = TooManyArgumentsError("Too many arguments!", "a b", 2)
    error = ArgumentParseErrorWithUsage(wrapped, "<a>")
    assert error.wrapped is wrapped
    assert error.usage == "<a>"
    assert error.message == "Too many arguments!"
    assert error.position == 2
    assert error.source_string == "a b"
