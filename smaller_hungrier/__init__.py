"""Scale players by how hungry (or hurt) they are."""

from .configuration import Configuration, ConfigurationLoader, load_configuration
from .errors import (
    ConfigurationError,
    MissingAttributeError,
    MissingValueError,
    SmallerHungrierError,
    UnknownSourceError,
)
from .metric_source import MetricSource
from .scale_range import Range
from .scaler import PlayerScaler
from .version import __version__

__all__ = [
    "Configuration",
    "ConfigurationError",
    "ConfigurationLoader",
    "MetricSource",
    "MissingAttributeError",
    "MissingValueError",
    "PlayerScaler",
    "Range",
    "SmallerHungrierError",
    "UnknownSourceError",
    "__version__",
    "load_configuration",
]
