from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import ConfigurationError

DEFAULT_LOW = 0.45
DEFAULT_HIGH = 1.0


def _coerce_bound(name: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise ConfigurationError(f"Invalid value for range.{name}: {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid value for range.{name}: {raw!r}") from None


@dataclass(frozen=True)
class Range:
    """Output bounds for the scale. ``low`` may exceed ``high`` to invert scaling."""

    low: float = DEFAULT_LOW
    high: float = DEFAULT_HIGH

    def map(self, value: float) -> float:
        """Interpolate ``value`` (0 -> low, 1 -> high) without clamping."""
        return self.low + (self.high - self.low) * value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Range":
        low = _coerce_bound("low", data.get("low", DEFAULT_LOW))
        high = _coerce_bound("high", data.get("high", DEFAULT_HIGH))
        return cls(low=low, high=high)

    def to_dict(self) -> Dict[str, float]:
        return {"low": float(self.low), "high": float(self.high)}
