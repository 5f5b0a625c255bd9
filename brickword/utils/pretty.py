"""Pretty-print helpers for cell sets and packed bricks."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence

from ..core.models import Brick, Cell, Coord

if TYPE_CHECKING:
    from ..engine.generator import PuzzleResult


def format_cells(cells: Iterable[Cell], empty: str = ".") -> str:
    """Render cells on their bounding box; row labels are y, column labels x."""

    by_coord: Dict[Coord, str] = {cell.coord: cell.letter for cell in cells}
    if not by_coord:
        return "(empty)"
    xs = [x for x, _ in by_coord]
    ys = [y for _, y in by_coord]
    columns = range(min(xs), max(xs) + 1)
    lines = ["     " + " ".join(f"{x:>3}" for x in columns)]
    lines.append("     " + "-" * (4 * len(columns) - 1))
    for y in range(min(ys), max(ys) + 1):
        row = " ".join(f"{by_coord.get((x, y), empty):>3}" for x in columns)
        lines.append(f"{y:>3} | {row}")
    return "\n".join(lines)


def format_bricks(bricks: Sequence[Brick]) -> str:
    cells: List[Cell] = [cell for brick in bricks for cell in brick.cells]
    return format_cells(cells)


def print_puzzle(result: PuzzleResult, *, stream=None) -> None:
    """Print the assembled crossword, the packed layout and brick stats."""

    stream = stream or sys.stdout
    print("--- Crossword ---", file=stream)
    print(format_cells(result.cells), file=stream)
    print(file=stream)
    print("--- Packed bricks ---", file=stream)
    print(format_bricks(result.state.bricks), file=stream)

    sizes = sorted(len(brick) for brick in result.state.bricks)
    print(file=stream)
    print(f"  Cells:     {len(result.cells)}", file=stream)
    print(f"  Bricks:    {len(sizes)} (sizes {' '.join(str(s) for s in sizes)})", file=stream)
    print(f"  Attempts:  layout {result.layout_attempts}, partition {result.partition_attempts}", file=stream)
    if result.fallbacks:
        print(f"  Fallbacks: {len(result.fallbacks)}", file=stream)
    if result.seed is not None:
        print(f"  Seed:      {result.seed}", file=stream)
