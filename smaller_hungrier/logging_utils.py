"""Logging bridge between the plugin logger and the host server's logger."""
from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "SmallerHungrier"
LOG_TAG = "smallerhungrier"
DEFAULT_LOG_LEVEL = logging.INFO


def resolve_host_log_level(host_logger: Optional[logging.Logger]) -> int:
    candidates: list[int] = []
    if host_logger is not None:
        candidates.append(host_logger.getEffectiveLevel())
    candidates.append(logging.getLogger().getEffectiveLevel())
    candidates.append(DEFAULT_LOG_LEVEL)
    for level in candidates:
        if isinstance(level, int) and level != logging.NOTSET:
            return level
    return DEFAULT_LOG_LEVEL


class HostLogHandler(logging.Handler):
    """Forwards plugin records to the host logger, honouring its level."""

    def __init__(self, host_logger: Optional[logging.Logger] = None) -> None:
        super().__init__()
        self.host_logger = host_logger

    def emit(self, record: logging.LogRecord) -> None:
        target_level = resolve_host_log_level(self.host_logger)
        plugin_logger = logging.getLogger(LOGGER_NAME)
        if plugin_logger.level != target_level:
            plugin_logger.setLevel(target_level)
        if record.levelno < target_level:
            return
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        target = self.host_logger if self.host_logger is not None else logging.getLogger()
        if target.isEnabledFor(record.levelno):
            target.log(record.levelno, message)


def configure_logger(host_logger: Optional[logging.Logger] = None) -> logging.Logger:
    """Attach a single host bridge to the plugin logger; later calls retarget it."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_host_log_level(host_logger))
    bridge = next((handler for handler in logger.handlers if isinstance(handler, HostLogHandler)), None)
    if bridge is None:
        bridge = HostLogHandler(host_logger)
        bridge.setFormatter(logging.Formatter(f"[{LOG_TAG}] %(message)s"))
        logger.addHandler(bridge)
    else:
        bridge.host_logger = host_logger
    logger.propagate = False
    return logger
