"""Property-based tests for logging configuration.

Log records are captured through the optional log file, which carries the
same rendered lines as stdout.
"""

import json
import logging
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest
import structlog
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from aimeswitcher.utils.logging_config import NOISY_LOGGERS, configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    library_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}

    yield

    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name, library_level in library_levels.items():
        logging.getLogger(name).setLevel(library_level)
    structlog.reset_defaults()


def read_json_lines(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


@given(
    log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    error_message=st.text(min_size=1, max_size=200),
)
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_error_log_format_contains_required_fields(
    tmp_path: Path, restore_logging: None, log_level: str, error_message: str
) -> None:
    """Every JSON log line carries a timestamp, level, event and call site."""
    log_file = tmp_path / "app.log"
    log_file.unlink(missing_ok=True)
    configure_logging(log_level=log_level, json_logs=True, log_file=str(log_file))

    try:
        log = structlog.stdlib.get_logger("aimeswitcher.test")
        log.critical("snapshot_upload_failed", error=error_message)
    finally:
        for handler in list(logging.getLogger().handlers):
            if isinstance(handler, logging.FileHandler):
                logging.getLogger().removeHandler(handler)
                handler.close()

    entries = read_json_lines(log_file)

    assert len(entries) == 1
    entry = entries[0]
    assert entry["event"] == "snapshot_upload_failed"
    assert entry["error"] == error_message
    assert entry["level"] == "critical"
    assert entry["logger"] == "aimeswitcher.test"
    assert entry["func_name"] == "test_error_log_format_contains_required_fields"
    assert "filename" in entry and "lineno" in entry
    datetime.fromisoformat(entry["timestamp"].replace("Z", "+00:00"))


def test_level_filtering(tmp_path: Path, restore_logging: None) -> None:
    log_file = tmp_path / "app.log"
    configure_logging(log_level="WARNING", json_logs=True, log_file=str(log_file))

    log = structlog.stdlib.get_logger("aimeswitcher.test")
    log.info("sync_cycle_completed")
    log.warning("configuration_validation_warnings")

    events = [entry["event"] for entry in read_json_lines(log_file)]
    assert events == ["configuration_validation_warnings"]


def test_noisy_libraries_held_at_warning(restore_logging: None) -> None:
    configure_logging(log_level="INFO", json_logs=True)

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_debug_level_releases_noisy_libraries(restore_logging: None) -> None:
    configure_logging(log_level="DEBUG", json_logs=True)

    assert logging.getLogger("botocore").level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info(restore_logging: None) -> None:
    configure_logging(log_level="chatty", json_logs=False)

    assert logging.getLogger().level == logging.INFO


def test_console_format_is_not_json(tmp_path: Path, restore_logging: None) -> None:
    log_file = tmp_path / "app.log"
    configure_logging(log_level="INFO", json_logs=False, log_file=str(log_file))

    structlog.stdlib.get_logger("aimeswitcher.test").info("card_switched", card="*1234")

    line = log_file.read_text(encoding="utf-8").strip()
    assert "card_switched" in line
    assert "*1234" in line
    with pytest.raises(json.JSONDecodeError):
        json.loads(line)
