import argparse
from typing import List, Optional

import bittensor as bt

from autolevel.constants import (
    DEFAULT_END_LINE,
    DEFAULT_LEVEL_END_OFFSET,
    DEFAULT_PROP_SPAWN_OFFSET,
    DEFAULT_SEED,
    DEFAULT_START_LINE,
)
from autolevel.protocol import TrackConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a seeded prop layout along a runner track."
    )
    bt.logging.add_args(parser)

    parser.add_argument(
        "--seed",
        type=int,
        help="Level seed; the same seed always reproduces the same layout",
        default=DEFAULT_SEED,
    )

    parser.add_argument(
        "--track.start_line",
        type=int,
        help="Runner's starting position (world units)",
        default=DEFAULT_START_LINE,
    )

    parser.add_argument(
        "--track.end_line",
        type=int,
        help="End of the level (world units)",
        default=DEFAULT_END_LINE,
    )

    parser.add_argument(
        "--track.prop_spawn_offset",
        type=int,
        help="Distance after start_line before props start spawning",
        default=DEFAULT_PROP_SPAWN_OFFSET,
    )

    parser.add_argument(
        "--track.level_end_offset",
        type=int,
        help="No props spawn beyond end_line minus this offset",
        default=DEFAULT_LEVEL_END_OFFSET,
    )

    parser.add_argument("--gui", action="store_true", help="Open the PyBullet viewer")
    parser.add_argument(
        "--hold", action="store_true", help="Keep the viewer open after generation"
    )

    return parser


def read_config(args: Optional[List[str]] = None) -> bt.config:
    return bt.config(build_parser(), args=args)


def track_from_config(config: bt.config) -> TrackConfig:
    return TrackConfig(
        start_line=config.track.start_line,
        end_line=config.track.end_line,
        prop_spawn_offset=config.track.prop_spawn_offset,
        level_end_offset=config.track.level_end_offset,
    )
