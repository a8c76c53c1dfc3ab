"""
Preview a generated level in PyBullet.

    python -m autolevel.preview --seed 7
    python -m autolevel.preview --seed 7 --gui --hold

Props come from the demo palette in ``autolevel.constants`` (URDFs shipped
with ``pybullet_data``). Records use the track frame (Y up, track along +Z);
the spawner maps them onto the ground plane, where the track runs along
PyBullet +Y and the camera looks down it from the start line.
"""
from __future__ import annotations

import time
from typing import List

import bittensor as bt
import pybullet as p
import pybullet_data

from autolevel.config import read_config, track_from_config
from autolevel.constants import (
    PREVIEW_CAMERA_DISTANCE,
    PREVIEW_CAMERA_PITCH,
    PREVIEW_CAMERA_YAW,
    PREVIEW_HOLD_SEC,
    PREVIEW_LANE_WIDTH,
    PREVIEW_PALETTE,
    PREVIEW_PLANE_URDF,
)
from autolevel.core.level import LevelGenerator
from autolevel.core.spawner import PyBulletSpawner, to_z_up_position
from autolevel.core.validator import ConfigurationError
from autolevel.protocol import Layout, PropDefinition
from autolevel.utils.logging import ColoredLogger


def _lane_samples(kind: str):
    w = PREVIEW_LANE_WIDTH
    if kind == "lanes":
        return False, ((-w, 0.0, 0.0), (0.0, 0.0, 0.0), (w, 0.0, 0.0))
    if kind == "uniform":
        return True, ((-w, 0.0, 0.0), (w, 0.0, 0.0))
    return False, ()


def demo_palette() -> List[PropDefinition]:
    props = []
    for name, urdf, lanes, lo, hi, discrete in PREVIEW_PALETTE:
        uniform, samples = _lane_samples(lanes)
        props.append(PropDefinition(
            model=urdf,
            name=name,
            uniform_position=uniform,
            position_samples=samples,
            rotation_samples=((0.0, 0.0, 0.0), (0.0, 90.0, 0.0)),  # yaw about "up"
            discrete_safe_distance=discrete,
            min_safe_distance=lo,
            max_safe_distance=hi,
        ))
    return props


def _focus_camera(cli: int, layout: Layout) -> None:
    if not layout.records:
        return
    first = layout.records[0].position
    p.resetDebugVisualizerCamera(
        cameraDistance=PREVIEW_CAMERA_DISTANCE,
        cameraYaw=PREVIEW_CAMERA_YAW,
        cameraPitch=PREVIEW_CAMERA_PITCH,
        cameraTargetPosition=to_z_up_position(first),
        physicsClientId=cli,
    )


def main(args=None) -> int:
    config = read_config(args)
    bt.logging.set_config(config=config.logging)
    track = track_from_config(config)

    cli = p.connect(p.GUI if config.gui else p.DIRECT)
    try:
        p.setAdditionalSearchPath(pybullet_data.getDataPath(), physicsClientId=cli)
        p.loadURDF(PREVIEW_PLANE_URDF, physicsClientId=cli)

        generator = LevelGenerator(
            PyBulletSpawner(cli), demo_palette(), track, seed=config.seed
        )
        try:
            layout = generator.regenerate()
        except ConfigurationError:
            return 1

        for rec in layout:
            ColoredLogger.debug(
                f"{generator.props[rec.prop_index].label:>8} @ z={rec.cursor:<5} "
                f"pos={tuple(round(v, 2) for v in rec.position)} step={rec.step}"
            )
        ColoredLogger.info(f"Layout sha256: {layout.sha256}")

        if config.gui:
            _focus_camera(cli, layout)
            if config.hold:
                time.sleep(PREVIEW_HOLD_SEC)
    finally:
        p.disconnect(physicsClientId=cli)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
