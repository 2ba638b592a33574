"""Tests for the Game engine: generation loop, validation and hints."""

import pytest

from queens_daily import config
from queens_daily.helpers.Game import Game
from queens_daily.helpers.regions import generate_regions, is_contiguous, region_cells
from queens_daily.helpers.seeded_random import SeededRandom
from queens_daily.queens import is_valid_solution, solve

ROWS_AS_REGIONS = [[r] * 7 for r in range(7)]


class TestGeneratePuzzle:

    def test_some_seed_succeeds(self):
        results = [Game(7, 100).generate_puzzle(seed) for seed in range(10)]
        assert any(result is not None for result in results)

    def test_generated_puzzle_is_valid(self, solvable_seed):
        puzzle = Game(7).generate_puzzle(solvable_seed)
        regions = puzzle["regions"]
        assert puzzle["seed"] == solvable_seed
        assert puzzle["size"] == 7
        assert is_valid_solution(puzzle["solution"], regions)
        assert [r for r, _ in puzzle["solution"]] == list(range(7))
        assert puzzle["region_count"] == len(region_cells(regions))
        for cells in region_cells(regions).values():
            assert is_contiguous(cells)
            assert len(cells) >= 2

    def test_deterministic_per_seed(self, solvable_seed):
        first = Game(7).generate_puzzle(solvable_seed)
        second = Game(7).generate_puzzle(solvable_seed)
        assert first == second

    def test_single_stream_across_attempts(self, solvable_seed):
        puzzle = Game(7).generate_puzzle(solvable_seed)

        rng = SeededRandom(solvable_seed)
        for attempt in range(1, 101):
            regions = generate_regions(7, rng)
            solution = solve(regions)
            if solution is not None:
                break
        assert puzzle["attempts"] == attempt
        assert puzzle["regions"] == regions
        assert puzzle["solution"] == solution

    def test_exhausted_budget_returns_none(self):
        game = Game(7, max_attempts=0)
        assert game.generate_puzzle(1) is None
        assert game.puzzle_data() is None
        assert game.get_solution() is None
        assert game.get_hint([]) is None

    def test_unsolvable_size_returns_none(self):
        # No 3x3 board can hold three non-touching queens
        assert Game(3, max_attempts=5).generate_puzzle(11) is None

    def test_defaults_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "GRID_SIZE", 5)
        monkeypatch.setattr(config, "MAX_ATTEMPTS", 3)
        game = Game()
        assert game.n == 5
        assert game.max_attempts == 3

    def test_time_seed_used_by_default(self, monkeypatch):
        monkeypatch.setattr("queens_daily.helpers.Game.time_seed", lambda window_ms: 17)
        game = Game(7, max_attempts=1)
        game.generate_puzzle()
        assert game.seed == 17

    def test_rejects_bad_arguments(self):
        with pytest.raises(ValueError):
            Game(0)
        with pytest.raises(ValueError):
            Game(7, max_attempts=-1)


class TestValidateBoard:

    def setup_method(self):
        self.game = Game(7)

    def test_empty_board(self):
        result = self.game.validate_board([], ROWS_AS_REGIONS)
        assert result == {"invalid": [], "solved": False}

    def test_full_solution_wins(self):
        solution = solve(ROWS_AS_REGIONS)
        result = self.game.validate_board(solution, ROWS_AS_REGIONS)
        assert result == {"invalid": [], "solved": True}

    def test_same_row(self):
        result = self.game.validate_board([(0, 0), (0, 4)], ROWS_AS_REGIONS)
        assert result["invalid"] == [(0, 0), (0, 4)]
        assert not result["solved"]

    def test_same_column(self):
        result = self.game.validate_board([(0, 3), (4, 3), (6, 0)], ROWS_AS_REGIONS)
        assert result["invalid"] == [(0, 3), (4, 3)]

    def test_same_region(self):
        regions = [[0] * 7] + [[r] * 7 for r in range(1, 7)]
        regions[1][6] = 0
        result = self.game.validate_board([(0, 0), (1, 6)], regions)
        assert result["invalid"] == [(0, 0), (1, 6)]

    def test_touching_diagonally(self):
        result = self.game.validate_board([(2, 2), (3, 3), (5, 0)], ROWS_AS_REGIONS)
        assert result["invalid"] == [(2, 2), (3, 3)]

    def test_partial_valid_board_not_solved(self):
        result = self.game.validate_board([(0, 0), (1, 2)], ROWS_AS_REGIONS)
        assert result == {"invalid": [], "solved": False}

    def test_uses_loaded_puzzle(self, solvable_seed):
        self.game.generate_puzzle(solvable_seed)
        result = self.game.validate_board(self.game.get_solution())
        assert result["solved"]

    def test_no_puzzle_loaded(self):
        with pytest.raises(ValueError):
            self.game.validate_board([(0, 0)])


class TestHints:

    def test_hint_walks_solution_in_row_order(self, solvable_seed):
        game = Game(7)
        game.generate_puzzle(solvable_seed)
        solution = game.get_solution()

        assert game.get_hint([]) == solution[0]
        assert game.get_hint(solution[:3]) == solution[3]
        assert game.get_hint(solution[1:]) == solution[0]
        assert game.get_hint(solution) is None

    def test_wrong_queens_ignored(self, solvable_seed):
        game = Game(7)
        game.generate_puzzle(solvable_seed)
        solution = game.get_solution()
        wrong = [(r, (c + 3) % 7) for r, c in solution]
        assert game.get_hint(wrong) == solution[0]

    def test_str(self, solvable_seed):
        game = Game(7)
        assert "no puzzle" in str(game)
        game.generate_puzzle(solvable_seed)
        lines = str(game).splitlines()
        assert len(lines) == 7
        assert sum(line.count("Q") for line in lines) == 7
