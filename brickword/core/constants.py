"""Shared constants and enumerations for the brick puzzle engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Orientation(str, Enum):
    """Word directions produced by the layout collaborator."""

    ACROSS = "across"
    DOWN = "down"


class SeedOrder(str, Enum):
    """Order in which the partitioner visits cells when seeding bricks."""

    SHUFFLE = "shuffle"
    EDGE_FIRST = "edge_first"


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))

# Admission probability indexed by current brick size; the last entry covers
# every larger size.
GROWTH_PROBABILITIES: Tuple[float, ...] = (1.0, 1.0, 0.4, 0.2, 0.1, 0.05, 0.01)

LAYOUT_RETRY_LIMIT = 10
PARTITION_RETRY_LIMIT = 100
PLACEMENT_ATTEMPT_LIMIT = 1000

RING_POSITIONS = 8

# Word placements the layout search may try before falling back to a single
# greedy pass.
LAYOUT_SEARCH_LIMIT = 500
