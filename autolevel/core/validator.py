"""
Configuration credibility checks.

Every check runs; nothing short-circuits, so a caller always gets the full
list of problems in one go. Nothing here logs – reporting is up to the
caller (see :class:`autolevel.core.level.LevelGenerator`).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from autolevel.constants import UNIFORM_SAMPLE_COUNT
from autolevel.protocol import PropDefinition, TrackConfig


class ErrorKind(str, Enum):
    INVALID_SPAN = "invalid_span"
    MISSING_MODEL = "missing_model"
    DEGENERATE_SPACING = "degenerate_spacing"
    BAD_UNIFORM_ARITY = "bad_uniform_arity"
    NO_PROPS = "no_props"
    INVERTED_SPACING = "inverted_spacing"
    NEGATIVE_SPACING = "negative_spacing"


@dataclass(frozen=True, slots=True)
class ConfigError:
    kind: ErrorKind
    message: str
    prop_index: Optional[int] = None

    def __str__(self) -> str:
        if self.prop_index is None:
            return self.message
        return f"[prop {self.prop_index}] {self.message}"


@dataclass(slots=True)
class ValidationResult:
    errors: List[ConfigError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok

    def kinds(self) -> List[ErrorKind]:
        return [e.kind for e in self.errors]


class ConfigurationError(ValueError):
    """Raised when placement is requested on a configuration that failed validation."""

    def __init__(self, errors: Sequence[ConfigError]):
        self.errors = list(errors)
        lines = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"{len(self.errors)} configuration error(s):\n{lines}")


# ──────────────────────────────────────────────────────────────────────
# Individual checks
# ──────────────────────────────────────────────────────────────────────
def _check_span(track: TrackConfig) -> List[ConfigError]:
    if track.cursor_start > track.limit:
        return [
            ConfigError(
                ErrorKind.INVALID_SPAN,
                "Starting point plus prop spawn offset "
                f"({track.cursor_start}) is bigger than ending point minus "
                f"level end offset ({track.limit}). This is not allowed.",
            )
        ]
    return []


def _check_prop(idx: int, prop: PropDefinition) -> List[ConfigError]:
    errors: List[ConfigError] = []

    if prop.model is None:
        errors.append(ConfigError(
            ErrorKind.MISSING_MODEL,
            "Prop has no model. This is not allowed.",
            idx,
        ))

    if prop.min_safe_distance == 0 and prop.max_safe_distance == 0:
        errors.append(ConfigError(
            ErrorKind.DEGENERATE_SPACING,
            "Prop has a 0 min_safe_distance and 0 max_safe_distance. "
            "The generator would never advance.",
            idx,
        ))
    elif prop.discrete_safe_distance and prop.min_safe_distance == 0:
        errors.append(ConfigError(
            ErrorKind.DEGENERATE_SPACING,
            "Prop has discrete_safe_distance with a 0 min_safe_distance. "
            "The generator would never advance.",
            idx,
        ))
    elif prop.min_safe_distance < 0 or prop.max_safe_distance < 0:
        errors.append(ConfigError(
            ErrorKind.NEGATIVE_SPACING,
            f"Prop has a negative safe distance ({prop.min_safe_distance}, "
            f"{prop.max_safe_distance}).",
            idx,
        ))
    elif not prop.discrete_safe_distance and prop.max_safe_distance < prop.min_safe_distance:
        errors.append(ConfigError(
            ErrorKind.INVERTED_SPACING,
            f"Prop has max_safe_distance ({prop.max_safe_distance}) smaller "
            f"than min_safe_distance ({prop.min_safe_distance}).",
            idx,
        ))

    bad_position = prop.uniform_position and len(prop.position_samples) != UNIFORM_SAMPLE_COUNT
    bad_rotation = prop.uniform_rotation and len(prop.rotation_samples) != UNIFORM_SAMPLE_COUNT
    if bad_position or bad_rotation:
        which = ", ".join(
            name for name, bad in (("position", bad_position), ("rotation", bad_rotation)) if bad
        )
        errors.append(ConfigError(
            ErrorKind.BAD_UNIFORM_ARITY,
            f"Uniform {which} requires exactly {UNIFORM_SAMPLE_COUNT} samples.",
            idx,
        ))

    return errors


# ──────────────────────────────────────────────────────────────────────
# Public façade
# ──────────────────────────────────────────────────────────────────────
def validate(track: TrackConfig, props: Sequence[PropDefinition]) -> ValidationResult:
    """
    Inspect *track* and *props* and report whether placement is safe to run.

    Returns
    -------
    ValidationResult
        ``ok`` when no violation was found, otherwise every violation in
        check order (span first, then each prop by index).
    """
    errors = _check_span(track)
    if not props:
        errors.append(ConfigError(
            ErrorKind.NO_PROPS,
            "No prop definitions were given; there is nothing to place.",
        ))
    for idx, prop in enumerate(props):
        errors.extend(_check_prop(idx, prop))
    return ValidationResult(errors)


def ensure_valid(track: TrackConfig, props: Sequence[PropDefinition]) -> None:
    result = validate(track, props)
    if not result.ok:
        raise ConfigurationError(result.errors)
