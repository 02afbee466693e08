"""HOCON-backed configuration for the plugin."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pyhocon import ConfigFactory

from .errors import ConfigurationError
from .host_api import DataHolder, DataTransactionResult
from .logging_utils import LOGGER_NAME
from .metric_source import MetricSource
from .scale_range import Range

CONFIG_FILE = "smallerhungrier.conf"

SOURCE_COMMENT = (
    "Defines the source which will be used to calculate the scale.\n"
    "\n"
    "Possible values:\n"
    "  - food = uses the players food level with high at 20\n"
    "  - health = uses the players health with high at 20 (players will grow on excess health)"
)
RANGE_COMMENT = (
    "Defines the range in which the resulted scale will be.\n"
    "\n"
    "The high property defines the scale when the player has 20 hunger/health\n"
    "and the low property defines the scale when the player reaches 0 hunger/health.\n"
    "\n"
    "You can also set the low value higher than the high value to make the player bigger when hungrier!"
)


@dataclass(frozen=True)
class Configuration:
    source: MetricSource = MetricSource.FOOD
    range: Range = field(default_factory=Range)

    def scale_for_player(self, player: DataHolder) -> float:
        """Scale for ``player`` based on its current metric value."""
        return self.range.map(self.source.from_player(player))

    def scale_for_transaction(self, result: DataTransactionResult) -> Optional[float]:
        """Scale for the value a data change applied.

        Returns None if the change does not contain the bound metric.
        """
        value = self.source.from_change_result(result)
        if value is None:
            return None
        return self.range.map(value)

    @classmethod
    def from_mapping(cls, data: Any) -> "Configuration":
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Expected an object at the configuration root, got {type(data).__name__}")
        raw_source = data.get("source", None)
        source = MetricSource.FOOD if raw_source is None else MetricSource.parse(raw_source)
        raw_range = data.get("range", None)
        if raw_range is None:
            scale_range = Range()
        elif isinstance(raw_range, Mapping):
            scale_range = Range.from_mapping(raw_range)
        else:
            raise ConfigurationError(f"Expected an object for 'range', got {raw_range!r}")
        return cls(source=source, range=scale_range)

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source.token, "range": self.range.to_dict()}


def _comment(text: str) -> List[str]:
    return [f"# {line}" if line else "#" for line in text.splitlines()]


class ConfigurationLoader:
    """Reads and writes the plugin's HOCON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Configuration:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Configuration()
        except UnicodeDecodeError as exc:
            raise ConfigurationError(f"Failed to read {self.path}: {exc}") from exc
        try:
            # Relative includes resolve next to the config file.
            tree = ConfigFactory.parse_string(text, basedir=str(self.path.parent))
        except Exception as exc:
            raise ConfigurationError(f"Failed to parse {self.path}: {exc}") from exc
        return Configuration.from_mapping(tree)

    def render(self, config: Configuration) -> str:
        data = config.to_dict()
        lines = _comment(SOURCE_COMMENT)
        lines.append(f"source = {json.dumps(data['source'])}")
        lines.append("")
        lines.extend(_comment(RANGE_COMMENT))
        lines.append("range {")
        for name, value in data["range"].items():
            lines.append(f"    {name} = {value!r}")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def save(self, config: Configuration) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.render(config), encoding="utf-8")


def load_configuration(loader: ConfigurationLoader, logger: Optional[logging.Logger] = None) -> Configuration:
    """Load the configuration and write it back so new keys and comments land on disk.

    A failed load never overwrites the file; any failure yields defaults for this session.
    """
    log = logger or logging.getLogger(LOGGER_NAME)
    try:
        config = loader.load()
        loader.save(config)
    except (OSError, ConfigurationError) as exc:
        log.error("Failed to load configuration, loading defaults instead: %s", exc, exc_info=exc)
        return Configuration()
    log.debug("Configuration written to %s", loader.path)
    return config
