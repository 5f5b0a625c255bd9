"""Deterministic integrity checks for partitions and packed layouts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence, Set

from ..core.exceptions import ValidationError
from ..core.models import Brick, Cell, Coord
from ..utils.logger import get_logger
from .connectivity import is_connected, neighbor_coords


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs rule validation over bricks before and after packing."""

    def validate_partition(self, cells: Sequence[Cell], bricks: Sequence[Brick]) -> ValidationResult:
        try:
            self._check_complete(cells, bricks)
            self._check_bricks_connected(bricks)
            self._check_no_singletons(cells, bricks)
            self._check_not_degenerate(cells, bricks)
        except ValidationError as exc:
            return self._failed(exc)
        return ValidationResult(ok=True, messages=[])

    def validate_layout(
        self,
        source: Sequence[Brick],
        packed: Sequence[Brick],
        fallbacks: Sequence[int] = (),
    ) -> ValidationResult:
        """Check packed bricks against their sources; fallback bricks skip separation."""
        try:
            self._check_translations(source, packed)
            self._check_bricks_connected(packed)
            self._check_separation(packed, set(fallbacks))
        except ValidationError as exc:
            return self._failed(exc)
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _failed(exc: ValidationError) -> ValidationResult:
        LOGGER.error("Validation failed: %s", exc)
        return ValidationResult(ok=False, messages=[str(exc)])

    def _check_complete(self, cells: Sequence[Cell], bricks: Sequence[Brick]) -> None:
        expected = Counter(cells)
        actual = Counter(cell for brick in bricks for cell in brick.cells)
        if actual != expected:
            missing = expected - actual
            extra = actual - expected
            raise ValidationError(
                f"Bricks do not cover the cell set (missing={len(missing)}, extra={len(extra)})"
            )

    def _check_bricks_connected(self, bricks: Sequence[Brick]) -> None:
        for index, brick in enumerate(bricks):
            if not brick.cells:
                raise ValidationError(f"Brick {index} is empty")
            if not is_connected(brick.cells):
                raise ValidationError(f"Brick {index} is not connected")

    def _check_no_singletons(self, cells: Sequence[Cell], bricks: Sequence[Brick]) -> None:
        if len(cells) < 2 or not is_connected(cells):
            return
        for index, brick in enumerate(bricks):
            if len(brick) == 1:
                raise ValidationError(f"Brick {index} holds a single cell at {brick.cells[0].coord}")

    def _check_not_degenerate(self, cells: Sequence[Cell], bricks: Sequence[Brick]) -> None:
        if len(cells) >= 2 and len(bricks) == 1:
            raise ValidationError("Partition collapsed into a single brick")

    def _check_translations(self, source: Sequence[Brick], packed: Sequence[Brick]) -> None:
        if len(source) != len(packed):
            raise ValidationError(f"Packed {len(packed)} bricks but {len(source)} were given")
        remaining = Counter(self._shape_key(brick) for brick in source)
        for index, brick in enumerate(packed):
            key = self._shape_key(brick)
            if not remaining.get(key):
                raise ValidationError(f"Packed brick {index} is not a translation of any source brick")
            remaining[key] -= 1

    @staticmethod
    def _shape_key(brick: Brick) -> tuple:
        if not brick.cells:
            return ()
        min_x, min_y = brick.min_corner()
        return tuple(sorted((c.x - min_x, c.y - min_y, c.letter) for c in brick.cells))

    def _check_separation(self, packed: Sequence[Brick], fallbacks: Set[int]) -> None:
        owner: Dict[Coord, int] = {}
        for index, brick in enumerate(packed):
            for coord in brick.coords():
                if coord in owner:
                    if index in fallbacks or owner[coord] in fallbacks:
                        continue
                    raise ValidationError(f"Bricks {owner[coord]} and {index} overlap at {coord}")
                owner[coord] = index
        for coord, index in owner.items():
            if index in fallbacks:
                continue
            for neighbor in neighbor_coords(coord):
                other = owner.get(neighbor)
                if other is not None and other != index and other not in fallbacks:
                    raise ValidationError(
                        f"Bricks {index} and {other} touch at {coord}/{neighbor}"
                    )
