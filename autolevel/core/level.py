"""
Host-side level generator.

Owns the handles of every prop it spawned, so a regeneration can remove the
previous layout before materialising the new one. Generation only happens
when :meth:`LevelGenerator.regenerate` is called.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple

from autolevel.constants import DEFAULT_SEED
from autolevel.core.placer import RngFactory, iter_placements
from autolevel.core.rng import SeededRNG
from autolevel.core.spawner import Spawner
from autolevel.core.validator import ConfigurationError, ValidationResult, validate
from autolevel.protocol import Layout, PlacementRecord, PropDefinition, TrackConfig
from autolevel.utils.logging import ColoredLogger


class LevelGenerator:
    def __init__(
        self,
        spawner: Spawner,
        props: Sequence[PropDefinition],
        track: Optional[TrackConfig] = None,
        *,
        seed: int = DEFAULT_SEED,
        rng_factory: RngFactory = SeededRNG,
    ):
        self.spawner = spawner
        self.props = list(props)
        self.track = track if track is not None else TrackConfig()
        self.seed = seed
        self.rng_factory = rng_factory
        self._spawned: List[Any] = []
        self.last_layout: Optional[Layout] = None

    @property
    def spawned(self) -> Tuple[Any, ...]:
        return tuple(self._spawned)

    def check(self) -> ValidationResult:
        """Validate the current configuration and log every problem found."""
        result = validate(self.track, self.props)
        for err in result.errors:
            ColoredLogger.warning(str(err))
        return result

    def clear(self) -> int:
        """Despawn everything spawned so far. Returns the number removed."""
        removed = 0
        while self._spawned:
            self.spawner.despawn(self._spawned[0])
            del self._spawned[0]
            removed += 1
        return removed

    def regenerate(
        self,
        seed: Optional[int] = None,
        *,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> Layout:
        """
        Replace the current layout with a fresh pass for *seed*.

        Parameters
        ----------
        seed : int, optional
            Overrides ``self.seed`` when given; stored only once the
            configuration has passed validation.
        should_stop : callable, optional
            Polled before every record; returning ``True`` ends the pass and
            keeps what was already spawned.

        Raises
        ------
        ConfigurationError
            The configuration failed validation. Nothing is despawned.
        """
        seed = self.seed if seed is None else seed

        result = self.check()
        if not result.ok:
            ColoredLogger.error(
                "There are errors in your prop configuration. Level generation stopped."
            )
            raise ConfigurationError(result.errors)

        placements = iter_placements(
            self.track, self.props, seed, rng_factory=self.rng_factory
        )
        self.seed = seed

        removed = self.clear()
        if removed:
            ColoredLogger.debug(f"Removed {removed} props from the previous layout")

        records: List[PlacementRecord] = []
        stopped = False
        for record in placements:
            if should_stop is not None and should_stop():
                stopped = True
                break
            handle = self.spawner.spawn(record.model, record.position, record.rotation)
            self._spawned.append(handle)
            records.append(record)

        layout = Layout(seed=self.seed, records=records)
        self.last_layout = layout
        if stopped:
            ColoredLogger.warning(
                f"Level generation cancelled after {len(layout)} props (seed {self.seed})"
            )
        else:
            ColoredLogger.success(
                f"Spawned {len(layout)} props | seed {self.seed} | sha256 {layout.sha256[:12]}"
            )
        return layout
