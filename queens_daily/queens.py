Cell = tuple[int, int]


class Queens:
    def __init__(self, regions: list[list[int]]):
        """
        Initialize a Queens solver for a region grid.

        Args:
            regions (list[list[int]]): n x n grid of region ids.

        Raises:
            ValueError: If the grid is empty or not square.
        """
        n = len(regions)
        if n == 0 or any(len(row) != n for row in regions):
            raise ValueError("region grid must be a non-empty square")
        self.n = n
        self.regions = regions
        self.queens: list[Cell] = []  # placed queens, one per row, in row order
        self.used_cols: set[int] = set()
        self.used_regions: set[int] = set()

    def reset(self):
        """Clear the partial placement."""
        self.queens = []
        self.used_cols = set()
        self.used_regions = set()

    def is_safe(self, row: int, col: int) -> bool:
        """
        Check whether a queen can go on (row, col) given the queens already placed.

        Conflicts checked:
          - column already taken
          - region already taken
          - touching another queen, diagonals included

        Args:
            row (int): Row of the candidate cell.
            col (int): Column of the candidate cell.

        Returns:
            bool: True if the placement breaks no rule.

        Examples:
            >>> q = Queens([[0, 0, 1], [2, 1, 1], [2, 2, 1]])
            >>> q.place(0, 0)
            >>> q.is_safe(1, 1)
            False
            >>> q.is_safe(1, 2)
            True
        """
        if col in self.used_cols:
            return False
        if self.regions[row][col] in self.used_regions:
            return False
        for r, c in self.queens:
            if abs(r - row) <= 1 and abs(c - col) <= 1:
                return False
        return True

    def place(self, row: int, col: int):
        self.queens.append((row, col))
        self.used_cols.add(col)
        self.used_regions.add(self.regions[row][col])

    def remove(self):
        """Undo the most recent place()."""
        row, col = self.queens.pop()
        self.used_cols.remove(col)
        self.used_regions.remove(self.regions[row][col])

    def solve(self) -> list[Cell] | None:
        """
        Find the first valid placement in row-major, left-to-right search order.

        Returns:
            list[tuple[int, int]] | None: (row, col) of each queen, ascending
            by row, or None if the grid has no solution.
        """
        self.reset()
        if self.search(0):
            return list(self.queens)
        return None

    def search(self, row: int = 0) -> bool:
        """
        Recursive backtracking helper.

        Args:
            row (int): Row currently being filled.

        Returns:
            bool: True once every row holds a queen.
        """
        # Base case: all rows filled
        if row == self.n:
            return True

        for col in range(self.n):
            if self.is_safe(row, col):
                self.place(row, col)
                if self.search(row + 1):
                    return True
                self.remove()

        return False

    def prettify(self, solution: list[Cell] | None = None) -> str:
        """
        Render the region grid with queens as a multi-line string.

        Regions are drawn as letters; 'Q' marks a queen.

        Args:
            solution (list[tuple[int, int]] | None): queens to draw. Defaults
                to the current placement.

        Returns:
            str: Multi-line string representation.
        """
        queens = set(self.queens if solution is None else solution)
        rows = []
        for r in range(self.n):
            line = ""
            for c in range(self.n):
                line += "Q" if (r, c) in queens else chr(ord("a") + self.regions[r][c] % 26)
            rows.append(line)
        return "\n".join(rows)

    def __str__(self) -> str:
        solution = self.solve()
        if solution is None:
            return f"{self.n}x{self.n} Queens board has no solution"
        return f"{self.n}x{self.n} Queens board solved:\n{self.prettify(solution)}"


def solve(regions: list[list[int]]) -> list[Cell] | None:
    """Solve a region grid, returning the first solution or None."""
    return Queens(regions).solve()


def is_valid_solution(queens: list[Cell], regions: list[list[int]]) -> bool:
    """
    Check a full placement against every rule.

    Args:
        queens (list[tuple[int, int]]): queen coordinates.
        regions (list[list[int]]): region map.

    Returns:
        bool: True if there are n queens on distinct rows, columns and
        regions, and no two of them touch.
    """
    n = len(regions)
    if len(queens) != n:
        return False
    rows = {r for r, _ in queens}
    cols = {c for _, c in queens}
    regs = {regions[r][c] for r, c in queens}
    if len(rows) != n or len(cols) != n or len(regs) != n:
        return False
    for i, (r1, c1) in enumerate(queens):
        for r2, c2 in queens[i + 1:]:
            if abs(r1 - r2) <= 1 and abs(c1 - c2) <= 1:
                return False
    return True


if __name__ == "__main__":
    rows_as_regions = [[r] * 7 for r in range(7)]
    print(Queens(rows_as_regions))
