from http import HTTPStatus

import pytest

from argweave.config import ShapeConfig, loader
from argweave.exceptions import ShapeDefinitionError

GIVE_YAML = """
description: Give items to a player
permission: game.give
arguments:
  - type: flags
    unknown_short_flags: ignore
    flags:
      - aliases: ["-silent", "s"]
      - aliases: ["c", "-count"]
        value: {type: integer, key: count}
    element:
      type: seq
      elements:
        - {type: string, key: target}
        - type: optional
          default: 1
          element: {type: integer, key: amount}
"""

STATUS_TOML = """
description = "Report a status"

[[arguments]]
type = "enum_value"
key = "status"
enum = "http.HTTPStatus"

[[arguments]]
type = "choices"
key = "speed"
case_sensitive = false

[arguments.choices]
fast = 1
slow = 2
"""


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="UTF-8")
    return path


def test_yaml_shape(tmp_path, admin):
    admin.permissions.add("game.give")
    shape = loader(write(tmp_path, "give.yaml", GIVE_YAML))
    assert shape.description == "Give items to a player"
    context = shape.parse(admin, "steve -s --count=3 5")
    assert context.as_dict() == {
        "silent": [True],
        "count": [3],
        "target": ["steve"],
        "amount": [5],
    }
    assert shape.get_usage(admin) == (
        "[--silent|-s] [-c|--count=<count>] <target> [<amount>]"
    )


def test_yaml_shape_requires_permission(tmp_path, source):
    shape = loader(write(tmp_path, "give.yml", GIVE_YAML))
    assert not shape.test_permission(source)


def test_toml_shape(tmp_path, source):
    shape = loader(str(write(tmp_path, "status.toml", STATUS_TOML)))
    context = shape.parse(source, "not_found FAST")
    assert context.require_one("status") is HTTPStatus.NOT_FOUND
    assert context.require_one("speed") == 1


def test_config_matches_code_built_shape(source):
    from argweave import CommandShape
    from argweave.arguments import integer, optional, string

    code_shape = CommandShape([string("name"), optional(integer("age"), 30)])
    config_shape = ShapeConfig.model_validate(
        {
            "arguments": [
                {"type": "string", "key": "name"},
                {
                    "type": "optional",
                    "default": 30,
                    "element": {"type": "integer", "key": "age"},
                },
            ]
        }
    ).to_shape()
    for text in ("bob", "bob 41"):
        assert config_shape.parse(source, text) == code_shape.parse(source, text)
    assert config_shape.get_usage(source) == code_shape.get_usage(source)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_unsupported_format(tmp_path):
    with pytest.raises(ValueError, match="Unsupported"):
        loader(write(tmp_path, "shape.json", "{}"))


def test_non_mapping_content(tmp_path):
    with pytest.raises(ValueError, match="must contain a table"):
        loader(write(tmp_path, "shape.yaml", "- just\n- a list\n"))


def test_invalid_content(tmp_path):
    with pytest.raises(ValueError):
        loader(write(tmp_path, "shape.yaml", "arguments: 5\n"))


@pytest.mark.parametrize(
    "raw",
    [
        {"type": "teleport", "key": "x"},
        {"type": "string"},
        {"type": "optional"},
        {"type": "permission", "element": {"type": "string", "key": "x"}},
        {"type": "choices", "key": "x"},
        {"type": "enum_value", "key": "x", "enum": "no.such.Module"},
        {"type": "enum_value", "key": "x", "enum": "http.client"},
        {"type": "flags", "unknown_long_flags": "sometimes"},
    ],
)
def test_bad_elements(raw):
    with pytest.raises(ShapeDefinitionError):
        ShapeConfig.model_validate({"arguments": [raw]}).to_shape()


def test_bad_tokenizer():
    with pytest.raises(ShapeDefinitionError, match="Unknown tokenizer"):
        ShapeConfig.model_validate({"tokenizer": "commas"}).to_shape()
