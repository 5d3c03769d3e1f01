"""Structured logging initialisation utilities."""
from __future__ import annotations

import logging
import logging.config
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from dotenv import load_dotenv

ENV_LOG_LEVEL = "PAYLOAD_LINT_LOG_LEVEL"


def _configured_level(settings_path: Optional[Path]) -> Optional[str]:
    """Level from the environment, else from the ``[logging]`` table of the settings file."""
    load_dotenv()
    override = os.environ.get(ENV_LOG_LEVEL)
    if override:
        return override
    if settings_path is None or not settings_path.exists():
        return None
    with settings_path.open("rb") as handle:
        level = tomllib.load(handle).get("logging", {}).get("level")
    return level if isinstance(level, str) else None


def configure_logging(config_path: Path, settings_path: Optional[Path] = None) -> int:
    """Configure stdlib and structlog logging using the YAML definition.

    Rule events (discriminator fallbacks, index summaries) are debug level, so
    they only show up when the settings or ``PAYLOAD_LINT_LOG_LEVEL`` ask for
    ``DEBUG``. Returns the effective root level.
    """
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            config: Dict[str, Any] = yaml.safe_load(handle)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO)

    root = logging.getLogger()
    name = _configured_level(settings_path)
    if name:
        level = logging.getLevelName(name.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level {name!r}")
        root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(root.level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return root.level
