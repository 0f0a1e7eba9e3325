from __future__ import annotations

import logging
from typing import Callable, List

import pytest

from api_template.app.core.logging_config import setup_logging


@pytest.fixture
def configure_logging():
    """
    Run setup_logging against a root logger without handlers.

    Handlers installed by pytest are set aside for the call and put back
    afterwards; the handlers added by setup_logging are returned and
    removed again at teardown.
    """
    root = logging.getLogger()
    saved_level = root.level
    added: List[logging.Handler] = []

    def _configure(*args) -> List[logging.Handler]:
        existing = root.handlers[:]
        root.handlers = []
        try:
            setup_logging(*args)
            added.extend(root.handlers)
        finally:
            root.handlers = existing + added
        return list(added)

    yield _configure

    for handler in added:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(saved_level)


def test_console_only_by_default(configure_logging: Callable[..., List[logging.Handler]]) -> None:
    handlers = configure_logging("warning")

    assert logging.getLogger().level == logging.WARNING
    assert len(handlers) == 1


def test_unknown_level_falls_back_to_info(configure_logging: Callable[..., List[logging.Handler]]) -> None:
    configure_logging("chatty")

    assert logging.getLogger().level == logging.INFO


def test_log_dir_adds_app_and_error_files(configure_logging, tmp_path) -> None:
    log_dir = tmp_path / "logs"
    handlers = configure_logging("INFO", str(log_dir))

    logging.getLogger("api_template.test").info("routine")
    logging.getLogger("api_template.test").error("boom")
    for handler in handlers:
        handler.flush()

    app_log = (log_dir / "app.log").read_text(encoding="utf-8")
    error_log = (log_dir / "errors.log").read_text(encoding="utf-8")
    assert "routine" in app_log and "boom" in app_log
    assert "boom" in error_log and "routine" not in error_log


def test_second_call_is_a_no_op(configure_logging) -> None:
    handlers = configure_logging("INFO")

    setup_logging("DEBUG")

    assert logging.getLogger().level == logging.INFO
    assert all(handler in logging.getLogger().handlers for handler in handlers)
