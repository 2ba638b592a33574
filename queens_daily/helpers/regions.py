"""
Random region partitioning for Queens boards.

A region grid is an n x n list of lists of non-negative region ids.
Every cell belongs to exactly one region, every region is edge-connected,
and ids run 0..k-1 in creation order.
"""

import logging
from collections import deque

from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)

UNASSIGNED = -1
MIN_REGION_SIZE = 2
MAX_REGION_SIZE = 8
SEED_CELL_ATTEMPTS = 1000

# Fixed check order: up, down, left, right
DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def get_neighbors(r: int, c: int, n: int):
    """Yield the in-bounds 4-directional neighbours of (r, c)."""
    for dr, dc in DIRECTIONS:
        nr, nc = r + dr, c + dc
        if 0 <= nr < n and 0 <= nc < n:
            yield nr, nc


class RegionPartitioner:
    """
    Carve an n x n grid into contiguous regions using draws from a SeededRandom.

    The result is a pure function of the generator state on entry, and the
    generator is left advanced by exactly the draws consumed.
    """

    def __init__(self, n: int, rng: SeededRandom):
        if n < 1:
            raise ValueError("grid size must be at least 1")
        self.n = n
        self.rng = rng
        self.grid = [[UNASSIGNED] * n for _ in range(n)]

    def partition(self) -> list[list[int]]:
        """
        Build a fresh region grid.

        Returns:
            list[list[int]]: region id for each cell.
        """
        self.grid = [[UNASSIGNED] * self.n for _ in range(self.n)]

        region_id = 0
        for target in self.region_size_targets():
            start = self.pick_seed_cell()
            if start is None:
                logger.debug("No free seed cell for a region of %d cells, skipping", target)
                continue
            self.grow_region(start, region_id, target)
            region_id += 1

        self.fill_unassigned()
        merge_small_regions(self.grid)
        return self.grid

    def region_size_targets(self) -> list[int]:
        """Draw the region count and the target size of every region."""
        n = self.n
        region_count = self.rng.randint(3) + (n - 1)
        remaining = n * n

        sizes = []
        for i in range(region_count - 1):
            max_size = min(MAX_REGION_SIZE, remaining // (region_count - i))
            max_size = max(max_size, MIN_REGION_SIZE)
            size = self.rng.randint(max_size - MIN_REGION_SIZE + 1) + MIN_REGION_SIZE
            sizes.append(size)
            remaining -= size

        # Last region takes what is left, unless that would be too small
        if remaining >= MIN_REGION_SIZE or not sizes:
            sizes.append(remaining)
        else:
            sizes[-1] += remaining
        return [size for size in sizes if size > 0]

    def pick_seed_cell(self) -> tuple[int, int] | None:
        """Sample random cells until an unassigned one turns up."""
        for _ in range(SEED_CELL_ATTEMPTS):
            r = self.rng.randint(self.n)
            c = self.rng.randint(self.n)
            if self.grid[r][c] == UNASSIGNED:
                return r, c
        return None

    def unassigned_neighbors(self, r: int, c: int) -> list[tuple[int, int]]:
        return [(nr, nc) for nr, nc in get_neighbors(r, c, self.n)
                if self.grid[nr][nc] == UNASSIGNED]

    def grow_region(self, start: tuple[int, int], region_id: int, target_size: int) -> int:
        """
        Grow one region outward from start until it reaches target_size.

        Growth stops early when no member borders a free cell.

        Returns:
            int: final size of the region.
        """
        r, c = start
        cells = [start]
        self.grid[r][c] = region_id

        while len(cells) < target_size:
            r, c = cells[self.rng.randint(len(cells))]
            neighbors = self.unassigned_neighbors(r, c)

            if not neighbors:
                # Chosen cell is boxed in, look at the whole frontier
                for cr, cc in cells:
                    neighbors.extend(self.unassigned_neighbors(cr, cc))
                if not neighbors:
                    break

            nr, nc = self.rng.choice(neighbors)
            self.grid[nr][nc] = region_id
            cells.append((nr, nc))

        return len(cells)

    def fill_unassigned(self) -> None:
        """Hand every leftover cell to the first assigned neighbour found."""
        changed = True
        while changed:
            changed = False
            for r in range(self.n):
                for c in range(self.n):
                    if self.grid[r][c] != UNASSIGNED:
                        continue
                    for nr, nc in get_neighbors(r, c, self.n):
                        if self.grid[nr][nc] != UNASSIGNED:
                            self.grid[r][c] = self.grid[nr][nc]
                            changed = True
                            break


def generate_regions(n: int, rng: SeededRandom) -> list[list[int]]:
    """Partition an n x n grid into random contiguous regions."""
    return RegionPartitioner(n, rng).partition()


def region_cells(regions: list[list[int]]) -> dict[int, list[tuple[int, int]]]:
    """Group cell coordinates by region id, in row-major order."""
    cells = {}
    for r, row in enumerate(regions):
        for c, reg in enumerate(row):
            cells.setdefault(reg, []).append((r, c))
    return cells


def region_sizes(regions: list[list[int]]) -> dict[int, int]:
    return {reg: len(cells) for reg, cells in region_cells(regions).items()}


def is_contiguous(cells: list[tuple[int, int]]) -> bool:
    """Check that a set of cells is connected under 4-directional adjacency."""
    if not cells:
        return True
    members = set(cells)
    start = cells[0]
    seen = {start}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        for dr, dc in DIRECTIONS:
            nxt = (r + dr, c + dc)
            if nxt in members and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return len(seen) == len(members)


def merge_small_regions(regions: list[list[int]], min_size: int = MIN_REGION_SIZE) -> None:
    """
    Fold every region smaller than min_size into an edge-adjacent region,
    then renumber ids so they stay 0..k-1 in creation order.

    Modifies regions in place.
    """
    n = len(regions)
    while True:
        cells = region_cells(regions)
        if len(cells) < 2:
            break
        small = sorted(reg for reg, members in cells.items() if len(members) < min_size)
        if not small:
            break
        reg = small[0]
        target = None
        for r, c in cells[reg]:
            for nr, nc in get_neighbors(r, c, n):
                if regions[nr][nc] != reg:
                    target = regions[nr][nc]
                    break
            if target is not None:
                break
        for r, c in cells[reg]:
            regions[r][c] = target
        logger.debug("Merged undersized region %d into region %d", reg, target)

    renumber = {old: new for new, old in enumerate(sorted(region_cells(regions)))}
    for row in regions:
        for c, reg in enumerate(row):
            row[c] = renumber[reg]
