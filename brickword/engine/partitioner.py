"""Randomized partitioning of a connected cell set into bricks."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ..core.constants import GROWTH_PROBABILITIES, PARTITION_RETRY_LIMIT, SeedOrder
from ..core.exceptions import DegeneratePartition
from ..core.models import Brick, Cell, Coord
from ..utils.logger import get_logger
from .connectivity import neighbor_coords


LOGGER = get_logger(__name__)


@dataclass
class PartitionConfig:
    """Knobs for brick formation."""

    retry_limit: int = PARTITION_RETRY_LIMIT
    growth_probabilities: Tuple[float, ...] = GROWTH_PROBABILITIES
    seed_order: SeedOrder = SeedOrder.SHUFFLE
    rng_seed: Optional[int] = None


class BrickPartitioner:
    """Splits cells into connected bricks by randomized bounded flood fill.

    Each attempt seeds a brick at every still-unassigned cell (visited in
    shuffled or edge-first order) and grows it depth-first. A neighbour joins
    with a probability that drops as the brick grows, which favours bricks of
    two to five cells. Leftover single-cell bricks are merged into an adjacent
    brick. Attempts that end with one brick covering every cell are retried.
    """

    def __init__(self, config: Optional[PartitionConfig] = None) -> None:
        self.config = config or PartitionConfig()
        if not self.config.growth_probabilities:
            raise ValueError("growth_probabilities must not be empty")
        self.rng = random.Random(self.config.rng_seed)
        self.attempts = 0

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def partition(self, cells: Sequence[Cell]) -> List[Brick]:
        cells = list(cells)
        if len(cells) == 1:
            raise DegeneratePartition("Could not generate puzzle: a single cell cannot be split")

        limit = self.config.retry_limit
        for attempt in range(1, limit + 1):
            bricks = self._partition_once(cells)
            if len(bricks) != 1:
                self.attempts = attempt
                LOGGER.info(
                    "Partitioned %d cells into %d bricks (attempt %d/%d)",
                    len(cells), len(bricks), attempt, limit,
                )
                return bricks
            LOGGER.debug("Partition attempt %d/%d collapsed into one brick", attempt, limit)

        self.attempts = limit
        raise DegeneratePartition(
            f"Could not generate puzzle: {len(cells)} cells collapsed into one brick "
            f"in all {limit} attempts"
        )

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def _partition_once(self, cells: List[Cell]) -> List[Brick]:
        by_coord: Dict[Coord, Cell] = {cell.coord: cell for cell in cells}
        assigned: Set[Coord] = set()
        bricks: List[Brick] = []

        for cell in self._seed_order(cells):
            if cell.coord in assigned:
                continue
            bricks.append(self._grow(cell, by_coord, assigned))

        for cell in cells:
            if cell.coord not in assigned:
                assigned.add(cell.coord)
                bricks.append(Brick([cell]))

        self._merge_singletons(bricks)
        return bricks

    def _seed_order(self, cells: List[Cell]) -> List[Cell]:
        ordered = list(cells)
        if self.config.seed_order == SeedOrder.EDGE_FIRST:
            if not ordered:
                return ordered
            center_x = (min(c.x for c in ordered) + max(c.x for c in ordered)) / 2
            center_y = (min(c.y for c in ordered) + max(c.y for c in ordered)) / 2
            ordered.sort(key=lambda c: math.hypot(c.x - center_x, c.y - center_y), reverse=True)
        else:
            self.rng.shuffle(ordered)
        return ordered

    def _grow(self, seed: Cell, by_coord: Dict[Coord, Cell], assigned: Set[Coord]) -> Brick:
        """Grow a brick from ``seed`` depth-first using an explicit stack."""
        brick = Brick([seed])
        assigned.add(seed.coord)
        stack: List[Iterator[Cell]] = [self._open_neighbors(seed, by_coord, assigned)]
        while stack:
            neighbor = next(stack[-1], None)
            if neighbor is None:
                stack.pop()
                continue
            # a deeper branch may have claimed it since the frontier was listed
            if neighbor.coord in assigned:
                continue
            if self.rng.random() < self.admission_probability(len(brick)):
                assigned.add(neighbor.coord)
                brick.cells.append(neighbor)
                stack.append(self._open_neighbors(neighbor, by_coord, assigned))
        return brick

    @staticmethod
    def _open_neighbors(
        cell: Cell, by_coord: Dict[Coord, Cell], assigned: Set[Coord]
    ) -> Iterator[Cell]:
        found = [
            by_coord[coord]
            for coord in neighbor_coords(cell.coord)
            if coord in by_coord and coord not in assigned
        ]
        return iter(found)

    def admission_probability(self, brick_size: int) -> float:
        table = self.config.growth_probabilities
        return table[min(brick_size, len(table) - 1)]

    @staticmethod
    def _merge_singletons(bricks: List[Brick]) -> None:
        for index in range(len(bricks) - 1, -1, -1):
            if len(bricks[index]) != 1:
                continue
            lone = bricks[index].cells[0]
            for other_index, other in enumerate(bricks):
                if other_index == index or not other.touches(lone):
                    continue
                other.cells.append(lone)
                del bricks[index]
                LOGGER.debug("Merged single cell '%s' at %s into brick %d", lone.letter, lone.coord, other_index)
                break
            else:
                LOGGER.warning("Single cell '%s' at %s has no neighbouring brick", lone.letter, lone.coord)
