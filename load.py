"""Primary entry point for the SmallerHungrier plugin.

The host adapter imports this module and calls the hook functions below: it
calls ``plugin_start`` once the server engine is starting, forwards the join,
post-respawn and data-value-change events, and calls ``plugin_stop`` on
shutdown.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from smaller_hungrier.configuration import (
    CONFIG_FILE,
    Configuration,
    ConfigurationLoader,
    load_configuration,
)
from smaller_hungrier.host_api import JoinEvent, RespawnPostEvent, ValueChangeEvent
from smaller_hungrier.logging_utils import configure_logger
from smaller_hungrier.scaler import PlayerScaler
from smaller_hungrier.version import __version__ as SMALLER_HUNGRIER_VERSION

PLUGIN_ID = "smallerhungrier"
PLUGIN_NAME = "SmallerHungrier"
PLUGIN_VERSION = SMALLER_HUNGRIER_VERSION


class _PluginRuntime:
    """Encapsulates plugin state so host globals stay tidy."""

    def __init__(self, config_path: Path, host_logger: Optional[logging.Logger] = None) -> None:
        self.config_path = Path(config_path)
        self.logger = configure_logger(host_logger)
        self.loader = ConfigurationLoader(self.config_path)
        self.scaler: Optional[PlayerScaler] = None

    @property
    def configuration(self) -> Optional[Configuration]:
        return self.scaler.configuration if self.scaler else None

    # Lifecycle ------------------------------------------------------------

    def start(self) -> str:
        if self.scaler is not None:
            return PLUGIN_ID
        config = load_configuration(self.loader, self.logger)
        self.scaler = PlayerScaler(config, self.logger)
        self.logger.info(
            "Plugin started (version %s): source=%s range.low=%s range.high=%s",
            PLUGIN_VERSION,
            config.source.token,
            config.range.low,
            config.range.high,
        )
        return PLUGIN_ID

    def stop(self) -> None:
        if self.scaler is None:
            return
        self.scaler = None
        self.logger.info("Plugin stopping")


def _resolve_config_path(config_path: Union[str, Path]) -> Path:
    path = Path(config_path)
    if path.is_dir():
        return path / CONFIG_FILE
    return path


# Host hook functions ------------------------------------------------------

_plugin: Optional[_PluginRuntime] = None


def plugin_start(config_path: Union[str, Path], host_logger: Optional[logging.Logger] = None) -> str:
    """Load configuration from ``config_path`` (a file, or the shared config directory)."""
    global _plugin
    if _plugin is not None:
        return PLUGIN_ID
    runtime = _PluginRuntime(_resolve_config_path(config_path), host_logger)
    result = runtime.start()
    _plugin = runtime
    return result


def plugin_stop() -> None:
    global _plugin
    if _plugin:
        try:
            _plugin.stop()
        finally:
            _plugin = None


def player_join(event: JoinEvent) -> None:
    if _plugin and _plugin.scaler:
        _plugin.scaler.handle_join(event)


def player_respawn(event: RespawnPostEvent) -> None:
    if _plugin and _plugin.scaler:
        _plugin.scaler.handle_respawn(event)


def data_value_change(event: ValueChangeEvent) -> None:
    if _plugin and _plugin.scaler:
        _plugin.scaler.handle_value_change(event)


# Metadata expected by some plugin loaders
name = PLUGIN_NAME
plugin_name = PLUGIN_NAME
version = PLUGIN_VERSION
