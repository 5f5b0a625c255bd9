"""Spiral compaction of bricks around the origin."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ..core.constants import PLACEMENT_ATTEMPT_LIMIT, RING_POSITIONS
from ..core.exceptions import PlacementExhausted
from ..core.models import Brick, Coord
from ..utils.logger import get_logger
from .connectivity import neighbor_coords


LOGGER = get_logger(__name__)


@dataclass
class PackerConfig:
    attempt_limit: int = PLACEMENT_ATTEMPT_LIMIT
    strict: bool = False
    rng_seed: Optional[int] = None


@dataclass
class PackingResult:
    """Packed bricks and the indices of those left at their source position."""

    bricks: List[Brick]
    fallbacks: List[int] = field(default_factory=list)


def ring_target(attempt: int) -> Coord:
    """Candidate corner for ``attempt``: eight angles per ring, radius = ring number."""

    if attempt == 0:
        return (0, 0)
    ring, position = divmod(attempt, RING_POSITIONS)
    angle = position / RING_POSITIONS * 2 * math.pi
    return (
        math.floor(ring * math.cos(angle) + 0.5),
        math.floor(ring * math.sin(angle) + 0.5),
    )


def mark_occupied(brick: Brick, occupied: Set[Coord]) -> None:
    """Reserve each cell of ``brick`` plus its orthogonal neighbours."""

    for coord in brick.coords():
        occupied.add(coord)
        occupied.update(neighbor_coords(coord))


class BrickPacker:
    """Places bricks one by one on the first free spot of an outward spiral."""

    def __init__(self, config: Optional[PackerConfig] = None) -> None:
        self.config = config or PackerConfig()
        self.rng = random.Random(self.config.rng_seed)

    def pack(self, bricks: Sequence[Brick]) -> PackingResult:
        order = list(bricks)
        self.rng.shuffle(order)
        occupied: Set[Coord] = set()
        result = PackingResult(bricks=[])
        for brick in order:
            placed = self.place(brick, occupied)
            if placed is None:
                if self.config.strict:
                    raise PlacementExhausted(
                        f"No free slot for a {len(brick)}-cell brick after "
                        f"{self.config.attempt_limit} attempts"
                    )
                LOGGER.warning(
                    "Brick of %d cells kept at its source position after %d attempts",
                    len(brick), self.config.attempt_limit,
                )
                placed = Brick(list(brick.cells))
                mark_occupied(placed, occupied)
                result.fallbacks.append(len(result.bricks))
            result.bricks.append(placed)
        LOGGER.info(
            "Packed %d bricks (%d fallback placements)", len(result.bricks), len(result.fallbacks)
        )
        return result

    def place(self, brick: Brick, occupied: Set[Coord]) -> Optional[Brick]:
        """Translate ``brick`` to the first free spiral slot and reserve it.

        Returns None, leaving ``occupied`` untouched, when every attempt collides.
        """
        min_x, min_y = brick.min_corner()
        for attempt in range(self.config.attempt_limit):
            target_x, target_y = ring_target(attempt)
            trial = brick.translated(target_x - min_x, target_y - min_y)
            if occupied.isdisjoint(trial.coords()):
                mark_occupied(trial, occupied)
                LOGGER.debug("Placed %d-cell brick at (%d,%d) on attempt %d", len(brick), target_x, target_y, attempt)
                return trial
        return None
