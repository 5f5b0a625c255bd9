"""Data models supporting the brick puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Set, Tuple

from .constants import Orientation

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """One grid position holding one letter."""

    x: int
    y: int
    letter: str

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    def translated(self, dx: int, dy: int) -> "Cell":
        return Cell(self.x + dx, self.y + dy, self.letter)

    def is_neighbor(self, other: "Cell") -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) == 1

    def to_jsonable(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "letter": self.letter}


@dataclass
class WordPlacement:
    """A word positioned on the grid by the layout collaborator."""

    answer: str
    startx: int
    starty: int
    orientation: Orientation

    @property
    def cells(self) -> List[Cell]:
        if self.orientation == Orientation.ACROSS:
            return [Cell(self.startx + i, self.starty, ch) for i, ch in enumerate(self.answer)]
        return [Cell(self.startx, self.starty + i, ch) for i, ch in enumerate(self.answer)]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WordPlacement":
        return cls(
            answer=str(data["answer"]),
            startx=int(data["startx"]),
            starty=int(data["starty"]),
            orientation=Orientation(str(data["orientation"]).lower()),
        )

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "answer": self.answer,
            "startx": self.startx,
            "starty": self.starty,
            "orientation": self.orientation.value,
        }


@dataclass
class Brick:
    """A connected group of cells that moves as one puzzle piece."""

    cells: List[Cell] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cells)

    def coords(self) -> Set[Coord]:
        return {cell.coord for cell in self.cells}

    def min_corner(self) -> Coord:
        return (min(cell.x for cell in self.cells), min(cell.y for cell in self.cells))

    def translated(self, dx: int, dy: int) -> "Brick":
        return Brick([cell.translated(dx, dy) for cell in self.cells])

    def touches(self, cell: Cell) -> bool:
        return any(own.is_neighbor(cell) for own in self.cells)

    def to_jsonable(self) -> Dict[str, Any]:
        return {"blocks": [cell.to_jsonable() for cell in self.cells]}


@dataclass
class PuzzleState:
    """Externally visible puzzle: packed bricks plus an opaque hint."""

    bricks: List[Brick]
    hint: str = ""

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "bricks": [brick.to_jsonable() for brick in self.bricks],
            "hint": self.hint,
        }
