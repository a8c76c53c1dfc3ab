# autolevel/protocol.py
# -----------------------------------------------------------------------------
#  AutoLevel – seeded prop placement along a runner track
# -----------------------------------------------------------------------------
"""Data model shared by the validator, the placer and the spawners.

* ``PropDefinition`` – one kind of placeable actor plus its placement rules.
* ``TrackConfig``    – the 1D span (along +Z) that props are placed on.
* ``PlacementRecord`` – one emitted placement; consumed by a spawner.
* ``Layout``         – the ordered records of one pass and their fingerprint.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

import msgpack  # only used for fingerprinting layouts

from autolevel.constants import (
    DEFAULT_END_LINE,
    DEFAULT_LEVEL_END_OFFSET,
    DEFAULT_PROP_SPAWN_OFFSET,
    DEFAULT_START_LINE,
    VECTOR_DIM,
    ZERO_VECTOR,
)

Vec3 = Tuple[float, float, float]
Quat = Tuple[float, float, float, float]


def _as_vec3(value: Sequence[float], what: str) -> Vec3:
    """Coerce lists / tuples / numpy arrays into a float 3‑tuple."""
    vec = tuple(float(x) for x in value)
    if len(vec) != VECTOR_DIM:
        raise ValueError(f"{what} must have {VECTOR_DIM} components, got {len(vec)}")
    return vec


def _as_whole(value, what: str) -> int:
    """Accept integral numbers only; 2.0 is fine, 2.9 is not."""
    whole = int(value)
    if whole != value:
        raise ValueError(f"{what} must be a whole number, got {value!r}")
    return whole


# --------------------------------------------------------------------------- #
# 1.  Inputs                                                                   #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PropDefinition:
    """A reusable template for one kind of level actor.

    ``model`` is whatever the spawner knows how to instantiate (a URDF / OBJ
    path for :class:`~autolevel.core.spawner.PyBulletSpawner`); it is borrowed
    from the caller and never touched by the placer.

    With ``uniform_position`` set the prop lands anywhere *between* the two
    ``position_samples`` instead of exactly on one of them. For example, a
    prop that may sit in the left or the right lane gets the discrete samples
    ``(-1, 0, 0)`` and ``(1, 0, 0)``. Samples are added on top of
    ``position_offset``; rotations work the same way (Euler angles, degrees).

    ``discrete_safe_distance`` spawns the next prop exactly
    ``min_safe_distance`` further down the track; otherwise the gap is drawn
    from ``[min_safe_distance, max_safe_distance]``.
    """

    model: Any
    position_offset: Vec3 = ZERO_VECTOR
    rotation_offset: Vec3 = ZERO_VECTOR
    uniform_position: bool = False
    position_samples: Tuple[Vec3, ...] = ()
    uniform_rotation: bool = False
    rotation_samples: Tuple[Vec3, ...] = ()
    discrete_safe_distance: bool = False
    min_safe_distance: int = 0
    max_safe_distance: int = 0
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "position_offset", _as_vec3(self.position_offset, "position_offset"))
        object.__setattr__(self, "rotation_offset", _as_vec3(self.rotation_offset, "rotation_offset"))
        object.__setattr__(
            self,
            "position_samples",
            tuple(_as_vec3(s, "position sample") for s in self.position_samples),
        )
        object.__setattr__(
            self,
            "rotation_samples",
            tuple(_as_vec3(s, "rotation sample") for s in self.rotation_samples),
        )
        object.__setattr__(self, "min_safe_distance", _as_whole(self.min_safe_distance, "min_safe_distance"))
        object.__setattr__(self, "max_safe_distance", _as_whole(self.max_safe_distance, "max_safe_distance"))

    @property
    def label(self) -> str:
        return self.name if self.name is not None else str(self.model)


@dataclass(frozen=True, slots=True)
class TrackConfig:
    start_line: int = DEFAULT_START_LINE
    end_line: int = DEFAULT_END_LINE
    prop_spawn_offset: int = DEFAULT_PROP_SPAWN_OFFSET
    level_end_offset: int = DEFAULT_LEVEL_END_OFFSET

    @property
    def cursor_start(self) -> int:
        """First track coordinate a prop may be placed on."""
        return self.start_line + self.prop_spawn_offset

    @property
    def limit(self) -> int:
        """Exclusive upper bound of the usable span."""
        return self.end_line - self.level_end_offset


# --------------------------------------------------------------------------- #
# 2.  Outputs                                                                  #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PlacementRecord:
    prop_index: int
    model: Any
    position: Vec3
    rotation: Quat             # (x, y, z, w)
    euler: Vec3                # degrees, before conversion
    cursor: int                # track coordinate the record was computed at
    step: int                  # advance applied after this record


def _fingerprint(records: Sequence[PlacementRecord]) -> str:
    packed = msgpack.packb(
        [(r.prop_index, r.position, r.rotation, r.cursor, r.step) for r in records],
        use_bin_type=True,
    )
    return hashlib.sha256(packed).hexdigest()


@dataclass(frozen=True, slots=True)
class Layout:
    seed: int
    records: Tuple[PlacementRecord, ...] = ()
    sha256: str = field(init=False)

    def __post_init__(self):
        records = tuple(self.records)
        object.__setattr__(self, "records", records)
        object.__setattr__(self, "sha256", _fingerprint(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def cursors(self) -> List[int]:
        return [r.cursor for r in self.records]
