
__version__ = "0.3.0"

from autolevel.protocol import Layout, PlacementRecord, PropDefinition, TrackConfig
from autolevel.core.validator import (
    ConfigError,
    ConfigurationError,
    ErrorKind,
    ValidationResult,
    ensure_valid,
    validate,
)
from autolevel.core.rng import RandomSource, SeededRNG
from autolevel.core.placer import iter_placements, place

__all__ = [
    "__version__",
    "ConfigError",
    "ConfigurationError",
    "ErrorKind",
    "Layout",
    "PlacementRecord",
    "PropDefinition",
    "RandomSource",
    "SeededRNG",
    "TrackConfig",
    "ValidationResult",
    "ensure_valid",
    "iter_placements",
    "place",
    "validate",
]
