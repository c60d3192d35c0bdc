"""Region state store."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .region import Region, RegionState
from .topology import PipelineTopology

logger = logging.getLogger(__name__)


class RegionStore:
    """Single source of truth for region positions and health.

    Regions are immutable values; ``apply`` swaps one whole value, so readers
    never observe a half-updated region.
    """

    def __init__(self, topology: PipelineTopology) -> None:
        self._topology = topology
        self._regions: dict[str, Region] = {}

    @property
    def topology(self) -> PipelineTopology:
        return self._topology

    def load(self, regions: Iterable[Region]) -> None:
        """Replace all regions."""
        loaded: dict[str, Region] = {}
        for region in regions:
            if region.id in loaded:
                raise ValueError(f"Duplicate region id '{region.id}'.")
            self._topology.require_position(region.current_phase_id, region.current_gate_id)
            loaded[region.id] = region
        self._regions = loaded
        logger.info("Loaded %d regions", len(loaded))

    def get(self, region_id: str) -> Region:
        return self._regions[region_id]

    def apply(self, region: Region) -> None:
        """Replace the stored value for ``region.id``."""
        if region.id not in self._regions:
            raise KeyError(region.id)
        self._topology.require_position(region.current_phase_id, region.current_gate_id)
        self._regions[region.id] = region

    def reset(self, region_id: str) -> Region:
        """Send a region back to the first gate, processing from zero."""
        first = self._topology.first_gate
        region = self.get(region_id).evolve(
            state=RegionState.PROCESSING,
            progress=0,
            current_phase_id=first.phase_id,
            current_gate_id=first.id,
            issue=None,
        )
        self.apply(region)
        return region

    def snapshot(self) -> tuple[Region, ...]:
        return tuple(self._regions.values())

    def __contains__(self, region_id: object) -> bool:
        return region_id in self._regions

    def __iter__(self) -> Iterator[Region]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._regions)
