import json
import logging

from .. import config
from ..queens import Queens
from .regions import generate_regions
from .seeded_random import SeededRandom, time_seed

logger = logging.getLogger(__name__)


class Game:
    """
    Core game engine for the daily Queens puzzle.
    Handles seeded puzzle generation, board validation, hints and the solution reveal.
    """

    def __init__(self, n=None, max_attempts=None):
        """
        Initialize a new game engine.

        Args:
            n (int): Board size (n x n). Defaults to config.GRID_SIZE.
            max_attempts (int): Region layouts to try before giving up.
        """
        self.n = config.GRID_SIZE if n is None else n
        self.max_attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
        if self.n < 1:
            raise ValueError("board size must be at least 1")
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be non-negative")
        self.title = "Queens"
        self.rng = SeededRandom()
        self.seed = None
        self.regions = None
        self.latest_solution = None
        self.attempts = 0

    def generate_puzzle(self, seed=None):
        """
        Generate a solvable puzzle from a seed.

        The generator is seeded once and every attempt keeps drawing from the
        same stream, so a given seed always walks the same sequence of
        candidate boards and lands on the same first solvable one.

        Args:
            seed (int | None): Generation seed. Defaults to the current
                5-minute time window.

        Returns:
            dict | None: {
                "seed": int,
                "size": int,
                "regions": list[list[int]],
                "region_count": int,
                "solution": list[tuple[int, int]],
                "attempts": int
            }, or None if no solvable board turned up within max_attempts.
        """
        if seed is None:
            seed = time_seed(window_ms=config.SEED_WINDOW_MS)
        self.rng.set_seed(seed)
        self.seed = seed
        self.regions = None
        self.latest_solution = None
        logger.info("Generating %dx%d puzzle with seed %d", self.n, self.n, seed)

        for attempt in range(1, self.max_attempts + 1):
            regions = generate_regions(self.n, self.rng)
            solution = Queens(regions).solve()
            if solution is not None:
                self.regions = regions
                self.latest_solution = solution
                self.attempts = attempt
                logger.info("Solvable puzzle found on attempt %d", attempt)
                return self.puzzle_data()

        self.attempts = self.max_attempts
        logger.error("Failed to generate solvable puzzle after %d attempts", self.max_attempts)
        return None

    def puzzle_data(self):
        """Return the current puzzle as a plain dict."""
        if self.regions is None:
            return None
        return {
            "seed": self.seed,
            "size": self.n,
            "regions": self.regions,
            "region_count": len({reg for row in self.regions for reg in row}),
            "solution": list(self.latest_solution),
            "attempts": self.attempts,
        }

    def validate_board(self, queens, regions=None):
        """
        Find every queen that breaks a rule and decide whether the board is won.

        A queen is invalid if it shares a row, column or region with another
        queen, or touches one (diagonals included). Both queens of a clash are
        reported.

        Args:
            queens (list[tuple[int, int]]): placed queens as (row, col).
            regions (list[list[int]]): Region map. Defaults to the current puzzle.

        Returns:
            dict: {"invalid": sorted list of (row, col), "solved": bool}
        """
        regions = self.regions if regions is None else regions
        if regions is None:
            raise ValueError("no puzzle loaded")
        n = len(regions)
        queens = list(dict.fromkeys((r, c) for r, c in queens))
        invalid = set()

        by_row, by_col, by_region = {}, {}, {}
        for r, c in queens:
            by_row.setdefault(r, []).append((r, c))
            by_col.setdefault(c, []).append((r, c))
            by_region.setdefault(regions[r][c], []).append((r, c))

        for group in (by_row, by_col, by_region):
            for members in group.values():
                if len(members) > 1:
                    invalid.update(members)

        for i, (r1, c1) in enumerate(queens):
            for r2, c2 in queens[i + 1:]:
                if abs(r1 - r2) <= 1 and abs(c1 - c2) <= 1:
                    invalid.add((r1, c1))
                    invalid.add((r2, c2))

        solved = (
            not invalid and
            len(queens) == n and
            len(by_row) == n and
            len(by_col) == n and
            len(by_region) == n
        )
        return {"invalid": sorted(invalid), "solved": solved}

    def get_hint(self, queens):
        """
        Return the next solution queen the player has not placed yet.

        Args:
            queens (list[tuple[int, int]]): player's placed queens.

        Returns:
            tuple[int, int] | None: (row, col) or None if every solution queen is placed.
        """
        if not self.latest_solution:
            return None

        placed = {(r, c) for r, c in queens}
        for row, col in self.latest_solution:
            if (row, col) not in placed:
                return (row, col)
        return None

    def get_solution(self):
        """Return the full solution, or None if no puzzle is loaded."""
        if self.latest_solution is None:
            return None
        return list(self.latest_solution)

    def __str__(self):
        """
        Return a printable version of the board, regions as letters and queens as 'Q'.

        Returns:
            str: Multi-line text grid representing the board.
        """
        if self.regions is None:
            return f"{self.title} ({self.n}x{self.n}): no puzzle"
        return Queens(self.regions).prettify(self.latest_solution)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    game = Game()
    sample = game.generate_puzzle()
    if sample is None:
        print("No solvable puzzle this window, try again.")
    else:
        print("Sample Puzzle:", json.dumps(sample))
        print(game)
