"""Connectivity checks over cell sets (4-neighbour adjacency)."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, Iterator, List, Sequence, Set

from ..core.constants import ORTHOGONAL_STEPS
from ..core.models import Cell, Coord


def neighbor_coords(coord: Coord) -> Iterator[Coord]:
    x, y = coord
    for dx, dy in ORTHOGONAL_STEPS:
        yield x + dx, y + dy


def _flood(start: Coord, present: Set[Coord], visited: Set[Coord]) -> List[Coord]:
    reached = [start]
    visited.add(start)
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in neighbor_coords(current):
            if neighbor in present and neighbor not in visited:
                visited.add(neighbor)
                reached.append(neighbor)
                queue.append(neighbor)
    return reached


def is_connected(cells: Sequence[Cell]) -> bool:
    """Return True when ``cells`` form a single region. Empty input is connected."""

    if not cells:
        return True
    present = {cell.coord for cell in cells}
    visited: Set[Coord] = set()
    _flood(cells[0].coord, present, visited)
    return len(visited) == len(present)


def connected_components(cells: Iterable[Cell]) -> List[List[Cell]]:
    """Split ``cells`` into connected components, in first-seen order."""

    by_coord: Dict[Coord, Cell] = {}
    for cell in cells:
        by_coord.setdefault(cell.coord, cell)
    present = set(by_coord)
    visited: Set[Coord] = set()
    components: List[List[Cell]] = []
    for coord in by_coord:
        if coord in visited:
            continue
        components.append([by_coord[c] for c in _flood(coord, present, visited)])
    return components
