"""Named loggers under the ``adaptknn`` root that `RuntimeConfig` configures."""

from __future__ import annotations

import logging
from typing import Optional

from . import config as ak_config

ROOT_LOGGER_NAME = ak_config.ROOT_LOGGER_NAME


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``adaptknn`` or ``adaptknn.<name>``.

    Child loggers carry no level or handler of their own; they inherit both
    from the root, so a reloaded ``ADAPTKNN_LOG_LEVEL`` also reaches loggers
    created at import time.
    """

    ak_config.runtime_config()
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    logger.setLevel(logging.NOTSET)
    return logger


__all__ = ["ROOT_LOGGER_NAME", "get_logger"]
