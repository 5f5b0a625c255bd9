import unittest
from itertools import permutations

from brickword.core.constants import Orientation
from brickword.engine.assembler import assemble_cells
from brickword.engine.connectivity import is_connected
from brickword.engine.layout import IntersectionLayoutGenerator, letters_link_all


class IntersectionLayoutTests(unittest.TestCase):
    def test_first_word_goes_across_at_origin(self) -> None:
        placements = IntersectionLayoutGenerator(seed=1).generate(["matej", "anet"])
        first = placements[0]
        self.assertEqual((first.answer, first.startx, first.starty), ("MATEJ", 0, 0))
        self.assertEqual(first.orientation, Orientation.ACROSS)

    def test_crossing_words_form_connected_layout(self) -> None:
        for seed in range(15):
            placements = IntersectionLayoutGenerator(seed=seed).generate(["matej", "anet"])
            self.assertEqual(placements[1].orientation, Orientation.DOWN)
            cells = assemble_cells(placements)
            self.assertEqual(len(cells), 8)
            self.assertTrue(is_connected(cells))

    def test_crossing_letters_agree(self) -> None:
        words = ["planet", "orbit", "comet", "star", "moon"]
        for seed in range(10):
            written = {}
            for placement in IntersectionLayoutGenerator(seed=seed).generate(words):
                for cell in placement.cells:
                    self.assertEqual(written.setdefault(cell.coord, cell.letter), cell.letter)

    def test_cell_before_each_word_stays_empty(self) -> None:
        placements = IntersectionLayoutGenerator(seed=4).generate(["planet", "orbit", "comet", "star"])
        coords = {cell.coord for cell in assemble_cells(placements)}
        for placement in placements:
            before = (
                (placement.startx - 1, placement.starty)
                if placement.orientation == Orientation.ACROSS
                else (placement.startx, placement.starty - 1)
            )
            self.assertNotIn(before, coords)

    def test_every_word_order_connects_when_possible(self) -> None:
        words = ["spiral", "matej", "origin", "brick"]
        for order in permutations(words):
            for seed in range(3):
                placements = IntersectionLayoutGenerator(seed=seed).generate(order)
                self.assertEqual(len(placements), 4)
                self.assertTrue(is_connected(assemble_cells(placements)), order)

    def test_greedy_pass_defers_words_without_crossing(self) -> None:
        generator = IntersectionLayoutGenerator(seed=0, search_limit=0)
        placements = generator.generate(["matej", "origin", "spiral"])
        self.assertEqual([p.answer for p in placements], ["MATEJ", "SPIRAL", "ORIGIN"])
        self.assertTrue(is_connected(assemble_cells(placements)))

    def test_letter_groups(self) -> None:
        self.assertTrue(letters_link_all(["MATEJ", "SPIRAL", "BRICK"]))
        self.assertFalse(letters_link_all(["MATEJ", "SPIRAL", "XYZ"]))

    def test_word_without_common_letters_is_parked_below(self) -> None:
        placements = IntersectionLayoutGenerator(seed=0).generate(["abc", "xyz"])
        self.assertEqual((placements[1].startx, placements[1].starty), (0, 2))
        self.assertFalse(is_connected(assemble_cells(placements)))

    def test_blank_words_are_skipped(self) -> None:
        placements = IntersectionLayoutGenerator(seed=0).generate(["  ", "cat"])
        self.assertEqual([p.answer for p in placements], ["CAT"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
