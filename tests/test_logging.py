import logging
from pathlib import Path

import pytest
import structlog

from payload_lint.observability.log import ENV_LOG_LEVEL, configure_logging

CONFIG_DIR = Path(__file__).parent.parent / "config"
LOGGING_YAML = CONFIG_DIR / "logging.yaml"


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch):
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)


def test_configure_logging_from_yaml():
    assert configure_logging(LOGGING_YAML) == logging.INFO
    assert logging.getLogger().level == logging.INFO
    structlog.get_logger("test").info("configured", source="yaml")


def test_configure_logging_without_file(tmp_path):
    configure_logging(tmp_path / "missing.yaml")
    structlog.get_logger("test").info("configured", source="default")


def test_shipped_settings_level():
    assert configure_logging(LOGGING_YAML, CONFIG_DIR / "settings.toml") == logging.INFO


def test_settings_file_sets_level(tmp_path):
    settings = tmp_path / "settings.toml"
    settings.write_text('[logging]\nlevel = "debug"\n', encoding="utf-8")
    assert configure_logging(LOGGING_YAML, settings) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    structlog.get_logger("test").debug("discriminator_fallback", value="Unknown")


def test_environment_overrides_settings(tmp_path, monkeypatch):
    settings = tmp_path / "settings.toml"
    settings.write_text('[logging]\nlevel = "DEBUG"\n', encoding="utf-8")
    monkeypatch.setenv(ENV_LOG_LEVEL, "warning")
    assert configure_logging(LOGGING_YAML, settings) == logging.WARNING


def test_unknown_level_is_rejected(tmp_path):
    settings = tmp_path / "settings.toml"
    settings.write_text('[logging]\nlevel = "chatty"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        configure_logging(LOGGING_YAML, settings)
