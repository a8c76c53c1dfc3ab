"""
Track prop placer.

Walks the track from ``start_line + prop_spawn_offset`` towards
``end_line - level_end_offset`` and, at every step, picks a prop type, its
position, its rotation and the gap to the next spawn point.

Draw order per step (fixed, so a seed always reproduces the same layout):

    1. prop index
    2. position   – interpolation scalar *or* sample index (if any samples)
    3. rotation   – interpolation scalar *or* sample index (if any samples)
    4. safe distance (only when the prop is not discrete)
"""
from __future__ import annotations

import math
import numbers
from typing import Callable, Iterator, Sequence

import numpy as np

from autolevel.core.rng import RandomSource, SeededRNG
from autolevel.core.validator import ensure_valid
from autolevel.protocol import Layout, PlacementRecord, PropDefinition, TrackConfig

RngFactory = Callable[[int], RandomSource]


# --------------------------------------------------------------------------
# Internal helpers
# --------------------------------------------------------------------------
def _sample_offset(rng: RandomSource, samples, uniform: bool) -> np.ndarray:
    """Return the extra offset contributed by *samples* (zero if empty)."""
    if not samples:
        return np.zeros(3)
    if uniform:
        lo = np.asarray(samples[0], dtype=float)
        hi = np.asarray(samples[1], dtype=float)
        return lo + (hi - lo) * rng.next_float()
    return np.asarray(samples[rng.index(len(samples))], dtype=float)


def _next_step(rng: RandomSource, prop: PropDefinition) -> int:
    if prop.discrete_safe_distance:
        return prop.min_safe_distance
    return rng.rand_int(prop.min_safe_distance, prop.max_safe_distance)


def _axis_quat(axis: int, deg: float) -> np.ndarray:
    half = math.radians(deg) / 2.0
    q = np.zeros(4)
    q[axis] = math.sin(half)
    q[3] = math.cos(half)
    return q


def _quat_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Hamilton product of two (x, y, z, w) quaternions."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ])


def euler_to_quaternion(euler_deg) -> tuple:
    """
    Euler angles in degrees → quaternion (x, y, z, w) in the track frame
    (Y up, track along +Z).

    Rotations apply around Z first, then X, then Y.
    """
    x, y, z = euler_deg
    q = _quat_mul(_axis_quat(1, y), _quat_mul(_axis_quat(0, x), _axis_quat(2, z)))
    return tuple(float(c) for c in q)


# --------------------------------------------------------------------------
# Public façade
# --------------------------------------------------------------------------
def iter_placements(
    track: TrackConfig,
    props: Sequence[PropDefinition],
    seed: int,
    *,
    rng_factory: RngFactory = SeededRNG,
) -> Iterator[PlacementRecord]:
    """
    Lazily yield one :class:`PlacementRecord` per step along the track.

    The configuration is validated before the first draw; an invalid one
    raises :class:`~autolevel.core.validator.ConfigurationError` listing every
    problem. Stopping the iteration early is a valid way to cancel a pass.

    *seed* must be an integer; there is no unseeded mode.
    """
    if not isinstance(seed, numbers.Integral):
        raise TypeError(f"seed must be an integer, got {seed!r}")
    ensure_valid(track, props)
    return _walk(track, list(props), rng_factory(int(seed)))


def _walk(track: TrackConfig, props, rng: RandomSource) -> Iterator[PlacementRecord]:
    cursor = track.cursor_start
    limit = track.limit

    while cursor < limit:
        idx = rng.index(len(props))
        prop = props[idx]

        position = np.array([0.0, 0.0, float(cursor)]) + np.asarray(prop.position_offset)
        position = position + _sample_offset(rng, prop.position_samples, prop.uniform_position)

        euler = _sample_offset(rng, prop.rotation_samples, prop.uniform_rotation)
        euler = euler + np.asarray(prop.rotation_offset)

        step = _next_step(rng, prop)

        yield PlacementRecord(
            prop_index=idx,
            model=prop.model,
            position=tuple(float(v) for v in position),
            rotation=euler_to_quaternion(euler),
            euler=tuple(float(v) for v in euler),
            cursor=cursor,
            step=step,
        )
        cursor += step


def place(
    track: TrackConfig,
    props: Sequence[PropDefinition],
    seed: int,
    *,
    rng_factory: RngFactory = SeededRNG,
) -> Layout:
    """Run a full pass and return the ordered layout."""
    records = list(iter_placements(track, props, seed, rng_factory=rng_factory))
    return Layout(seed=int(seed), records=records)
