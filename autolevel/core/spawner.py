"""
Spawners materialise placement records in a host world.

The placer never calls these directly; :class:`autolevel.core.level.LevelGenerator`
feeds records into a spawner and owns the handles it returns.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Protocol, Tuple, runtime_checkable

import pybullet as p

MESH_SCALE = [1.0, 1.0, 1.0]


# --------------------------------------------------------------------------
# Track frame (Y up, track along +Z) → PyBullet frame (Z up)
# --------------------------------------------------------------------------
def to_z_up_position(position) -> List[float]:
    """Swap Y and Z: the track runs along PyBullet +Y, height goes to +Z."""
    x, y, z = position
    return [float(x), float(z), float(y)]


def to_z_up_rotation(rotation) -> List[float]:
    """
    Same basis change for an (x, y, z, w) quaternion.

    The Y/Z swap flips handedness, so the rotation axis is mirrored and
    negated; the angle is unchanged.
    """
    x, y, z, w = rotation
    return [-float(x), -float(z), -float(y), float(w)]


@runtime_checkable
class Spawner(Protocol):
    def spawn(self, model: Any, position, rotation) -> Any:
        """Instantiate *model* at *position* with quaternion *rotation*; return a handle."""

    def despawn(self, handle: Any) -> None:
        """Remove a previously spawned entity."""


class PyBulletSpawner:
    """
    Spawn props as static PyBullet bodies.

    ``model`` is a path: ``*.urdf`` files go through ``loadURDF`` (relative
    paths resolve against the client's additional search path, e.g.
    ``pybullet_data``), ``*.obj`` meshes are turned into a visual + collision
    shape pair that is cached per file.

    Records come in the track frame (Y up). With ``y_up`` left on, poses are
    mapped into PyBullet's Z-up world so the track lies along +Y on the
    ground; pass ``y_up=False`` for records that are already Z-up.
    """

    def __init__(self, cli: int, *, mesh_scale=None, rgba=None, y_up: bool = True):
        self.cli = cli
        self.y_up = y_up
        self.mesh_scale = list(mesh_scale) if mesh_scale is not None else MESH_SCALE
        self.rgba = rgba
        self._shape_cache: Dict[str, Tuple[int, int]] = {}

    def _mesh_shapes(self, path: str) -> Tuple[int, int]:
        if path not in self._shape_cache:
            if not os.path.exists(path):
                raise FileNotFoundError(path)
            extra = {"rgbaColor": list(self.rgba)} if self.rgba is not None else {}
            vis_id = p.createVisualShape(
                p.GEOM_MESH, fileName=path, meshScale=self.mesh_scale,
                physicsClientId=self.cli, **extra,
            )
            col_id = p.createCollisionShape(
                p.GEOM_MESH, fileName=path, meshScale=self.mesh_scale,
                physicsClientId=self.cli,
            )
            self._shape_cache[path] = (vis_id, col_id)
        return self._shape_cache[path]

    def spawn(self, model, position, rotation) -> int:
        path = os.fspath(model)
        if self.y_up:
            position = to_z_up_position(position)
            rotation = to_z_up_rotation(rotation)
        if path.lower().endswith(".obj"):
            vis_id, col_id = self._mesh_shapes(path)
            return p.createMultiBody(
                baseMass=0, baseCollisionShapeIndex=col_id,
                baseVisualShapeIndex=vis_id, basePosition=list(position),
                baseOrientation=list(rotation), physicsClientId=self.cli,
            )
        if path.lower().endswith(".urdf"):
            # loadURDF reports a missing file as a generic error
            try:
                return p.loadURDF(
                    path,
                    basePosition=list(position),
                    baseOrientation=list(rotation),
                    useFixedBase=True,
                    physicsClientId=self.cli,
                )
            except p.error as exc:
                raise FileNotFoundError(path) from exc
        raise ValueError(f"Unsupported model type: {path!r} (expected .urdf or .obj)")

    def despawn(self, handle: int) -> None:
        p.removeBody(handle, physicsClientId=self.cli)


class RecordingSpawner:
    """Headless spawner that keeps every live entity in a dict."""

    def __init__(self):
        self._next_handle = 0
        self.live: Dict[int, Tuple[Any, tuple, tuple]] = {}
        self.history: List[Tuple[str, int]] = []

    def spawn(self, model, position, rotation) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.live[handle] = (model, tuple(position), tuple(rotation))
        self.history.append(("spawn", handle))
        return handle

    def despawn(self, handle: int) -> None:
        del self.live[handle]
        self.history.append(("despawn", handle))
