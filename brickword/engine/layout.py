"""Default crossword layout collaborator.

The puzzle engine only needs word placements on relative coordinates; any
object with a compatible ``generate`` method can replace this one.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Dict, List, Optional, Protocol, Sequence, Set, Tuple

from ..core.constants import LAYOUT_SEARCH_LIMIT, Orientation
from ..core.models import Coord, WordPlacement
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class LayoutGenerator(Protocol):
    """Protocol implemented by crossword layout providers."""

    def generate(self, words: Sequence[str]) -> List[WordPlacement]:
        ...


def _step(orientation: Orientation) -> Tuple[int, int]:
    return (1, 0) if orientation == Orientation.ACROSS else (0, 1)


def letters_link_all(words: Sequence[str]) -> bool:
    """True when the words form one group through shared letters."""
    if len(words) < 2:
        return True
    seen = {0}
    queue: Deque[int] = deque([0])
    while queue:
        current = set(words[queue.popleft()])
        for index, word in enumerate(words):
            if index not in seen and current & set(word):
                seen.add(index)
                queue.append(index)
    return len(seen) == len(words)


class _Board:
    """Letters written so far, with undo for the search."""

    def __init__(self) -> None:
        self.letters: Dict[Coord, str] = {}
        self.owners: Dict[Coord, Set[Orientation]] = {}
        self.placements: List[WordPlacement] = []
        self._written: List[List[Coord]] = []

    def add(self, placement: WordPlacement) -> None:
        written: List[Coord] = []
        for cell in placement.cells:
            if cell.coord not in self.letters:
                self.letters[cell.coord] = cell.letter
                written.append(cell.coord)
            self.owners.setdefault(cell.coord, set()).add(placement.orientation)
        self.placements.append(placement)
        self._written.append(written)

    def pop(self) -> None:
        placement = self.placements.pop()
        written = set(self._written.pop())
        for cell in placement.cells:
            if cell.coord in written:
                del self.letters[cell.coord]
                del self.owners[cell.coord]
            else:
                self.owners[cell.coord].discard(placement.orientation)

    def bottom(self) -> int:
        return max(y for _, y in self.letters)


class IntersectionLayoutGenerator:
    """Free-form layout in which every word crosses another one.

    The first word goes across at the origin. The rest are placed by a
    depth-first search over word order and crossing choice, bounded by
    ``search_limit`` tried placements. When the search fails, a single greedy
    pass places what it can: words with no crossing yet wait at the back of the
    queue, and a word is parked two rows below the layout only once no waiting
    word can be placed. A parked word leaves the layout disconnected so the
    caller can retry with another word order.
    """

    def __init__(self, seed: Optional[int] = None, search_limit: int = LAYOUT_SEARCH_LIMIT) -> None:
        self.rng = random.Random(seed)
        self.search_limit = search_limit
        self._budget = 0

    def generate(self, words: Sequence[str]) -> List[WordPlacement]:
        cleaned = [raw.strip().upper() for raw in words if raw.strip()]
        if not cleaned:
            return []

        board = _Board()
        board.add(WordPlacement(cleaned[0], 0, 0, Orientation.ACROSS))
        if letters_link_all(cleaned):
            self._budget = self.search_limit
            if self._search(cleaned[1:], board):
                return board.placements
            LOGGER.debug("Layout search gave up after %d placements", self.search_limit)
        else:
            LOGGER.debug("Words share no letters across groups; skipping layout search")

        board = _Board()
        board.add(WordPlacement(cleaned[0], 0, 0, Orientation.ACROSS))
        self._greedy(cleaned[1:], board)
        return board.placements

    # ------------------------------------------------------------------
    # Placement strategies
    # ------------------------------------------------------------------
    def _search(self, pending: List[str], board: _Board) -> bool:
        if not pending:
            return True
        for index, word in enumerate(pending):
            rest = pending[:index] + pending[index + 1:]
            for placement in self._ranked_options(word, board):
                if self._budget <= 0:
                    return False
                self._budget -= 1
                board.add(placement)
                if self._search(rest, board):
                    return True
                board.pop()
        return False

    def _greedy(self, pending: List[str], board: _Board) -> None:
        queue: Deque[str] = deque(pending)
        stalled = 0
        while queue:
            word = queue.popleft()
            options = self._ranked_options(word, board)
            if options:
                board.add(options[0])
                stalled = 0
            elif stalled < len(queue):
                queue.append(word)
                stalled += 1
            else:
                row = board.bottom() + 2
                board.add(WordPlacement(word, 0, row, Orientation.ACROSS))
                LOGGER.debug("No crossing for '%s'; parked at row %d", word, row)
                stalled = 0

    def _ranked_options(self, word: str, board: _Board) -> List[WordPlacement]:
        options = self._crossing_options(word, board)
        self.rng.shuffle(options)
        options.sort(key=lambda option: option[0], reverse=True)
        return [placement for _, placement in options]

    # ------------------------------------------------------------------
    # Crossing checks
    # ------------------------------------------------------------------
    def _crossing_options(self, word: str, board: _Board) -> List[Tuple[int, WordPlacement]]:
        options: List[Tuple[int, WordPlacement]] = []
        seen: Set[Tuple[int, int, Orientation]] = set()
        for existing in board.placements:
            orientation = (
                Orientation.DOWN if existing.orientation == Orientation.ACROSS else Orientation.ACROSS
            )
            dx, dy = _step(orientation)
            for cell in existing.cells:
                for index, letter in enumerate(word):
                    if letter != cell.letter:
                        continue
                    key = (cell.x - dx * index, cell.y - dy * index, orientation)
                    if key in seen:
                        continue
                    seen.add(key)
                    score = self._fit_score(word, key[0], key[1], orientation, board)
                    if score:
                        options.append((score, WordPlacement(word, key[0], key[1], orientation)))
        return options

    @staticmethod
    def _fit_score(word: str, x: int, y: int, orientation: Orientation, board: _Board) -> int:
        """Number of crossings for a legal placement, 0 when it does not fit."""
        letters = board.letters
        dx, dy = _step(orientation)
        if (x - dx, y - dy) in letters or (x + dx * len(word), y + dy * len(word)) in letters:
            return 0
        crossings = 0
        for index, letter in enumerate(word):
            coord = (x + dx * index, y + dy * index)
            existing = letters.get(coord)
            if existing is not None:
                if existing != letter or orientation in board.owners[coord]:
                    return 0
                crossings += 1
            elif (coord[0] + dy, coord[1] + dx) in letters or (coord[0] - dy, coord[1] - dx) in letters:
                return 0
        return crossings
