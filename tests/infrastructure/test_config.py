"""Tests for environment-driven settings and logging setup."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from storefront.infrastructure.config import DEFAULT_DATA_DIR, Settings
from storefront.infrastructure.logging import configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"

    def test_reads_environment(self, tmp_path):
        settings = Settings.from_env({
            "STOREFRONT_DATA_DIR": str(tmp_path),
            "STOREFRONT_LOG_LEVEL": "debug",
            "STOREFRONT_LOG_FORMAT": "JSON",
        })
        assert settings.data_dir == Path(tmp_path)
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_unknown_log_format(self):
        with pytest.raises(ValueError, match="STOREFRONT_LOG_FORMAT"):
            Settings.from_env({"STOREFRONT_LOG_FORMAT": "xml"})


class TestConfigureLogging:

    def test_json_lines(self, restore_logging, capsys):
        configure_logging(Settings(log_level="INFO", log_format="json"))

        structlog.get_logger("storefront.test").info("order.created", order_id=7)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "order.created"
        assert record["order_id"] == 7
        assert record["level"] == "info"

    def test_level_filters_events(self, restore_logging, capsys):
        configure_logging(Settings(log_level="WARNING"))

        log = structlog.get_logger("storefront.test")
        log.info("inventory.reserved")
        log.warning("inventory.write_conflict")

        err = capsys.readouterr().err
        assert "inventory.write_conflict" in err
        assert "inventory.reserved" not in err
