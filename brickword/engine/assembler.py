"""Merge word placements into a deduplicated set of letter cells."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Union

from ..core.models import Cell, Coord, WordPlacement
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

PlacementLike = Union[WordPlacement, Mapping[str, Any]]


def assemble_cells(placements: Iterable[PlacementLike]) -> List[Cell]:
    """Return the letter cells covered by ``placements``.

    Crossing cells keep the first letter written; later words never overwrite
    them and letter agreement is not checked here.
    """

    cell_map: Dict[Coord, Cell] = {}
    for raw in placements:
        placement = raw if isinstance(raw, WordPlacement) else WordPlacement.from_mapping(raw)
        for cell in placement.cells:
            if cell.coord not in cell_map:
                cell_map[cell.coord] = cell
    LOGGER.debug("Assembled %d cells", len(cell_map))
    return list(cell_map.values())
