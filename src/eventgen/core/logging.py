"""
Logging configuration.

The packaged `logging.yaml` is applied with `logging.config.dictConfig`; the level comes
from the caller (CLI `--log-level`) or from settings (`EVENTGEN_LOG_LEVEL`).

Library modules only call `logging.getLogger(__name__)`; entrypoints call
`configure_logging()` once.
"""

from __future__ import annotations

import copy
import logging.config
from typing import Any

from eventgen.config.settings import get_logging_config, get_settings


def _with_level(config: dict[str, Any], level: str) -> dict[str, Any]:
    # The cached YAML dict is shared; never mutate it in place.
    config = copy.deepcopy(config)
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict):
            handler["level"] = level
    return config


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system from packaged YAML config + settings."""
    resolved = (level or get_settings().app.log_level).upper()
    logging.config.dictConfig(_with_level(get_logging_config(), resolved))
