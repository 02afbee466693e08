"""The in-game statistic that drives the scale."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import MissingValueError, UnknownSourceError
from .host_api import DataHolder, DataTransactionResult, Key, Keys

# Both food level and health top out at 20 for a vanilla player.
NORMALIZATION_DIVISOR = 20.0


@dataclass(frozen=True)
class MetricReader:
    """Reads one host value and normalizes it to the 0..1 domain."""

    key: Key
    divisor: float = NORMALIZATION_DIVISOR

    def normalize(self, raw: Any) -> float:
        return float(raw) / self.divisor

    def from_holder(self, holder: DataHolder) -> float:
        raw = holder.get(self.key)
        if raw is None:
            raise MissingValueError(f"Data holder {holder!r} has no value for '{self.key}'")
        return self.normalize(raw)

    def from_transaction(self, result: DataTransactionResult) -> Optional[float]:
        raw = result.successful_value(self.key)
        if raw is None:
            return None
        return self.normalize(raw)


class MetricSource(Enum):
    FOOD = "food"
    HEALTH = "health"

    @property
    def token(self) -> str:
        return self.value

    @property
    def reader(self) -> MetricReader:
        return _READERS[self]

    @property
    def key(self) -> Key:
        return self.reader.key

    def from_player(self, player: DataHolder) -> float:
        """Current normalized value for ``player``; raises if the host omits it."""
        return self.reader.from_holder(player)

    def from_change_result(self, result: DataTransactionResult) -> Optional[float]:
        """Normalized value the change just applied, or None if the key was not changed."""
        return self.reader.from_transaction(result)

    @classmethod
    def parse(cls, raw: Any) -> "MetricSource":
        if isinstance(raw, cls):
            return raw
        name = str(raw).upper()
        for source in cls:
            if source.name == name:
                return source
        raise UnknownSourceError(raw)


_READERS: Dict[MetricSource, MetricReader] = {
    MetricSource.FOOD: MetricReader(Keys.FOOD_LEVEL),
    MetricSource.HEALTH: MetricReader(Keys.HEALTH),
}
