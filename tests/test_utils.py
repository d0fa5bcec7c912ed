import logging
from io import StringIO

import pytest
import pythonjsonlogger.json
from rich.console import Console
from rich.logging import RichHandler

from argweave.arguments import first_parsing, integer, string
from argweave.utils import setup_logging


@pytest.fixture
def argweave_logger():
    logger = logging.getLogger("argweave")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging_cli(tmp_path, argweave_logger):
    console = Console(file=StringIO(), color_system=None, width=120)
    setup_logging(
        mode="cli", log_filename=str(tmp_path / "argweave.log"), console=console
    )
    handlers = argweave_logger.handlers
    assert any(isinstance(handler, RichHandler) for handler in handlers)
    assert any(isinstance(handler, logging.FileHandler) for handler in handlers)
    assert "Logging initialized in 'cli' mode." in console.file.getvalue()


def test_setup_logging_leaves_root_handlers_alone(argweave_logger):
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        setup_logging(mode="cli", console=Console(file=StringIO()))
        assert sentinel in root.handlers
        assert argweave_logger.propagate is False
    finally:
        root.removeHandler(sentinel)


def test_setup_logging_replaces_previous_handlers(argweave_logger):
    setup_logging(mode="json")
    setup_logging(mode="json")
    assert len(argweave_logger.handlers) == 1


def test_setup_logging_json_from_env(tmp_path, monkeypatch, argweave_logger):
    monkeypatch.setenv("ARGWEAVE_LOG_MODE", "json")
    log_file = tmp_path / "argweave.log"
    setup_logging(log_filename=str(log_file), json_log_to_file=True)
    stream_handlers = [
        handler
        for handler in argweave_logger.handlers
        if type(handler) is logging.StreamHandler
    ]
    assert len(stream_handlers) == 1
    assert isinstance(stream_handlers[0].formatter, pythonjsonlogger.json.JsonFormatter)
    assert "Logging initialized in 'json' mode." in log_file.read_text(encoding="UTF-8")


def test_setup_logging_level_from_env(monkeypatch, argweave_logger):
    monkeypatch.setenv("ARGWEAVE_LOG_LEVEL", "warning")
    setup_logging(mode="json")
    assert argweave_logger.level == logging.WARNING


def test_setup_logging_invalid_mode(argweave_logger):
    with pytest.raises(ValueError, match="Invalid log mode"):
        setup_logging(mode="xml")


def test_setup_logging_invalid_level(argweave_logger):
    with pytest.raises(ValueError):
        setup_logging(mode="cli", level="chatty")


def test_engine_logs_discarded_alternatives(run, caplog):
    caplog.set_level(logging.DEBUG, logger="argweave")
    run(first_parsing(integer("n"), string("s")), "abc")
    assert "Alternative" in caplog.text
    assert "Expected an integer" in caplog.text
