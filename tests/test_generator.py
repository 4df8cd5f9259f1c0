"""
Test suite for puzzle generation.

Covers:
- Grid helpers (placement checks, writing words, filling)
- Word pool normalization and target counts
- Generated puzzle invariants across many seeds
- Recoverable problems (short pools, exhausted placements)
"""

import random
import string

import pytest

from src.puzzle import (
    Cell,
    can_place_word,
    empty_grid,
    fill_grid,
    generate,
    normalize_words,
    place_word,
    read_word,
    target_word_count,
    verify_puzzle,
)
from src.puzzle.generator import try_place, select_words


FOREST = ["TREE", "LEAF", "BARK", "ROOT", "MOSS", "FERN", "ACORN", "TWIG", "BERRY", "LAKE", "PINE", "STREAM"]


class TestGridHelpers:
    """Test placement primitives on a raw grid."""

    def test_place_word_upwards(self):
        """TREE placed upwards from (5,3) occupies column 3, rows 5 to 2."""
        grid = empty_grid(8)
        cells = place_word(grid, "TREE", Cell(5, 3), 1)

        assert grid[5][3] == "T"
        assert grid[4][3] == "R"
        assert grid[3][3] == "E"
        assert grid[2][3] == "E"
        assert cells == [(5, 3), (4, 3), (3, 3), (2, 3)]

    def test_can_place_in_bounds(self):
        """A word fitting inside an empty grid can be placed."""
        grid = empty_grid(8)
        assert can_place_word(grid, "TREE", Cell(5, 3), 1) is True

    def test_cannot_place_out_of_bounds(self):
        """A word running off the edge is rejected."""
        grid = empty_grid(8)
        assert can_place_word(grid, "TREE", Cell(2, 3), 1) is False
        assert can_place_word(grid, "STREAM", Cell(0, 5), 4) is False

    def test_overlap_with_same_letter_allowed(self):
        """Crossing an existing word is fine where letters agree."""
        grid = empty_grid(8)
        place_word(grid, "TREE", Cell(5, 3), 1)
        # LEAF rightwards along row 3 shares the E at (3, 3)
        assert can_place_word(grid, "LEAF", Cell(3, 2), 4) is True

    def test_overlap_with_different_letter_rejected(self):
        """Crossing an existing word is rejected where letters differ."""
        grid = empty_grid(8)
        place_word(grid, "TREE", Cell(5, 3), 1)
        # MOSS rightwards along row 3 would put O on the E at (3, 3)
        assert can_place_word(grid, "MOSS", Cell(3, 2), 4) is False

    def test_fill_grid_leaves_no_empty_cells(self):
        """Filling replaces every empty cell with an uppercase letter."""
        grid = empty_grid(6)
        place_word(grid, "ROOT", Cell(0, 0), 7)
        fill_grid(grid, random.Random(3))

        for row in grid:
            for letter in row:
                assert letter in string.ascii_uppercase
        assert [grid[i][i] for i in range(4)] == list("ROOT")

    def test_try_place_exhausts_on_blocked_grid(self):
        """A grid full of conflicting letters cannot take the word."""
        grid = [["X"] * 8 for _ in range(8)]
        assert try_place(grid, "TREE", random.Random(1), max_attempts=50) is None

    def test_try_place_succeeds_on_agreeing_grid(self):
        """A grid full of agreeing letters accepts the word anywhere it fits."""
        grid = [["X"] * 8 for _ in range(8)]
        placed = try_place(grid, "XXXX", random.Random(1))
        assert placed is not None
        assert read_word(grid, placed) == "XXXX"


class TestWordPool:
    """Test word pool normalization and sizing."""

    def test_normalize_filters_and_uppercases(self):
        """Only alphabetic 4-8 letter words survive, upper-cased."""
        words = ["tree", "DRY", "influencer", "ice cream", "naïve", "e-mail", "Forest"]
        assert normalize_words(words) == ["TREE", "FOREST"]

    def test_normalize_deduplicates_in_order(self):
        """Duplicates are removed keeping the first occurrence."""
        assert normalize_words(["tree", "LEAF", "TREE", "leaf", "moss"]) == ["TREE", "LEAF", "MOSS"]

    def test_target_count_clamped(self):
        """Target count is clamp(available, 5, 8)."""
        assert target_word_count(0) == 5
        assert target_word_count(3) == 5
        assert target_word_count(6) == 6
        assert target_word_count(12) == 8

    def test_select_words_longest_first(self):
        """Selected words are unique and sorted by descending length."""
        chosen = select_words(FOREST, 8, random.Random(5))
        assert len(chosen) == len(set(chosen)) == 8
        lengths = [len(w) for w in chosen]
        assert lengths == sorted(lengths, reverse=True)

    def test_select_words_small_pool(self):
        """Asking for more words than the pool holds returns the whole pool."""
        chosen = select_words(["TREE", "LEAF"], 5, random.Random(5))
        assert sorted(chosen) == ["LEAF", "TREE"]


class TestGeneratedPuzzles:
    """Test invariants of generated puzzles."""

    @pytest.mark.parametrize("seed", range(40))
    def test_puzzle_invariants(self, seed):
        """Every generated puzzle passes verification."""
        puzzle = generate(FOREST, grid_size=8, rng=random.Random(seed), theme="Forest")
        result = verify_puzzle(puzzle)

        assert result.valid is True, [e.message for e in result.errors]
        assert puzzle.theme == "Forest"
        assert 1 <= len(puzzle.placed_words) <= 8

    @pytest.mark.parametrize("seed", range(20))
    def test_overlapping_words_agree(self, seed):
        """Two placed words share a cell only where their letters agree."""
        puzzle = generate(FOREST, rng=random.Random(seed))

        claimed = {}
        for placed in puzzle.placed_words:
            for cell, letter in zip(placed.cells(), placed.word):
                if cell in claimed:
                    assert claimed[cell] == letter
                claimed[cell] = letter

    def test_placed_words_unique_and_from_pool(self):
        """Placed words come from the pool and never repeat."""
        puzzle = generate(FOREST + ["tree", "Leaf"], rng=random.Random(11))
        words = puzzle.words

        assert len(words) == len(set(words))
        assert set(words) <= set(FOREST)

    def test_placed_words_longest_first(self):
        """Placement order follows descending word length."""
        puzzle = generate(FOREST, rng=random.Random(2))
        lengths = [len(w) for w in puzzle.words]
        assert lengths == sorted(lengths, reverse=True)

    def test_words_start_unfound(self):
        """No word is marked found at generation time."""
        puzzle = generate(FOREST, rng=random.Random(4))
        assert all(not p.found for p in puzzle.placed_words)
        assert puzzle.is_complete is False

    def test_same_seed_same_puzzle(self):
        """Seeded generation is reproducible."""
        a = generate(FOREST, rng=random.Random(42))
        b = generate(FOREST, rng=random.Random(42))

        assert a.grid == b.grid
        assert a.placed_words == b.placed_words

    def test_larger_grid(self):
        """Generation works for other grid sizes."""
        puzzle = generate(FOREST, grid_size=12, rng=random.Random(9))
        assert puzzle.size == 12
        assert verify_puzzle(puzzle).valid is True
        exhausted = [w for w in puzzle.warnings if w.code == "PLACEMENT_EXHAUSTED"]
        assert len(puzzle.placed_words) + len(exhausted) == 8


class TestRecoverableProblems:
    """Test that generation degrades instead of failing."""

    def test_short_pool_places_what_it_has(self):
        """A pool below the minimum still yields a puzzle, with a warning."""
        puzzle = generate(["TREE", "LEAF", "MOSS"], rng=random.Random(1))

        assert sorted(puzzle.words) == ["LEAF", "MOSS", "TREE"]
        assert any(w.code == "SHORT_WORD_POOL" for w in puzzle.warnings)

    def test_unplaceable_word_is_dropped(self):
        """A word longer than the grid is dropped and reported."""
        puzzle = generate(
            ["SCORPION", "TREE", "LEAF", "MOSS", "FERN"],
            grid_size=4,
            rng=random.Random(1),
        )

        assert "SCORPION" not in puzzle.words
        exhausted = [w for w in puzzle.warnings if w.code == "PLACEMENT_EXHAUSTED"]
        assert any(w.word == "SCORPION" for w in exhausted)
        assert verify_puzzle(puzzle).valid is True

    def test_empty_pool(self):
        """No usable words gives a fully random grid with no targets."""
        puzzle = generate(["DRY", "LAB"], rng=random.Random(1))

        assert puzzle.placed_words == []
        assert any(w.code == "NO_WORDS_PLACED" for w in puzzle.warnings)
        assert all(letter in string.ascii_uppercase for row in puzzle.grid for letter in row)

    def test_placed_words_no_empty_warning(self):
        """A puzzle with targets carries no NO_WORDS_PLACED warning."""
        puzzle = generate(FOREST, rng=random.Random(1))
        assert all(w.code != "NO_WORDS_PLACED" for w in puzzle.warnings)

    def test_grid_too_small(self):
        """A grid smaller than the shortest word is a configuration error."""
        with pytest.raises(ValueError):
            generate(FOREST, grid_size=3)
