"""Exceptions raised by the SmallerHungrier plugin."""
from __future__ import annotations

from typing import Any


class SmallerHungrierError(Exception):
    """Base class for plugin errors."""


class ConfigurationError(SmallerHungrierError, ValueError):
    """Raised when the configuration file cannot be parsed or deserialized."""


class UnknownSourceError(ConfigurationError):
    """Raised for a metric source token that matches no known source."""

    def __init__(self, token: Any) -> None:
        super().__init__(f"Unknown source: {token}")
        self.token = token


class MissingAttributeError(SmallerHungrierError, RuntimeError):
    """Raised when a player does not expose an attribute every player should have."""


class MissingValueError(SmallerHungrierError, LookupError):
    """Raised when a player does not carry the value bound to a metric source."""
