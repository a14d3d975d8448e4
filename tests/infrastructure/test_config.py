import logging
import os

import pytest

from checkout.infrastructure.config import Settings
from checkout.infrastructure.logging_config import setup_logging

_ENV = (
    "CHECKOUT_DATA_DIR",
    "CHECKOUT_LOG_LEVEL",
    "CHECKOUT_LOG_FILE",
    "CHECKOUT_LOW_STOCK_THRESHOLD",
    "CHECKOUT_CRITICAL_STOCK_THRESHOLD",
    "CHECKOUT_ASYNC_NOTIFICATIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSettings:

    def test_defaults(self):
        config = Settings.from_env()
        assert config.data_dir.name == "data"
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.low_stock_threshold == 10
        assert config.critical_stock_threshold == 5
        assert config.async_notifications is False

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CHECKOUT_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("CHECKOUT_LOG_LEVEL", "debug")
        monkeypatch.setenv("CHECKOUT_LOG_FILE", str(tmp_path / "checkout.log"))
        monkeypatch.setenv("CHECKOUT_LOW_STOCK_THRESHOLD", "20")
        monkeypatch.setenv("CHECKOUT_CRITICAL_STOCK_THRESHOLD", "2")
        monkeypatch.setenv("CHECKOUT_ASYNC_NOTIFICATIONS", "yes")

        config = Settings.from_env()

        assert config.data_dir == tmp_path
        assert config.log_level == "DEBUG"
        assert config.log_file == tmp_path / "checkout.log"
        assert config.low_stock_threshold == 20
        assert config.critical_stock_threshold == 2
        assert config.async_notifications is True

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("CHECKOUT_LOW_STOCK_THRESHOLD", "lots")
        with pytest.raises(ValueError, match="CHECKOUT_LOW_STOCK_THRESHOLD"):
            Settings.from_env()


class TestSetupLogging:

    def test_file_handler(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "checkout.log"

        setup_logging("WARNING", log_file)
        logging.getLogger("checkout.test").warning("stock low")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.WARNING
        line = log_file.read_text(encoding="utf-8").strip()
        assert line.endswith("- WARNING - [PID:%d] - checkout.test - stock low" % os.getpid())

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO
