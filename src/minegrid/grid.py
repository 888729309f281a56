"""
Grid module for the grid engine.

Implements board generation (mine placement and adjacency numbers),
cell revealing with cascades, flagging, chording and win detection.
The grid never tracks health or game over; callers inspect the cells
returned by each operation and decide what happens.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell


logger = logging.getLogger(__name__)

Position = Tuple[int, int]

LAYOUT_MINE = "*"
LAYOUT_TRAP = "T"
LAYOUT_CURSED = "C"
LAYOUT_SAFE = "."


# ============================================================================
# Configuration
# ============================================================================

class ConfigurationError(ValueError):
    """Raised when grid dimensions or mine count are invalid."""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def max_mines(width: int, height: int) -> int:
    """Largest mine count accepted for a grid of the given size."""
    return width * height - 2


def validate_config(
    width: object, height: object, mine_count: object
) -> Optional[str]:
    """
    Check grid parameters without allocating anything.

    Args:
        width: Number of columns.
        height: Number of rows.
        mine_count: Number of mines to place.

    Returns:
        None if the parameters are valid, otherwise an error message.
    """
    if not _is_int(width) or width <= 0:
        return f"Invalid grid width: {width!r}. Must be a positive integer."
    if not _is_int(height) or height <= 0:
        return f"Invalid grid height: {height!r}. Must be a positive integer."
    if not _is_int(mine_count) or mine_count < 0:
        return (
            f"Invalid mine count: {mine_count!r}. "
            "Must be a non-negative integer."
        )
    limit = max_mines(width, height)
    if mine_count > limit:
        return (
            f"Too many mines ({mine_count}) for grid size {width}x{height} "
            f"({width * height} cells). Maximum mines: {max(limit, 0)}."
        )
    return None


@dataclass(frozen=True)
class GridConfig:
    """
    Validated grid parameters.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 10
    height: int = 10
    mine_count: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        error = validate_config(self.width, self.height, self.mine_count)
        if error is not None:
            logger.debug("Rejected grid configuration: %s", error)
            raise ConfigurationError(error)

    @property
    def total_cells(self) -> int:
        """Number of cells on the grid."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that are not mines."""
        return self.total_cells - self.mine_count


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Minesweeper grid owned by a single board of a run.

    Cells are stored row-major and indexed as ``cells[y][x]``.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Number of mines, fixed at construction.
        cells: Matrix of cells, ``height`` rows of ``width`` cells.
        revealed: Number of non-mine cells revealed so far.
        flagged: Number of cells currently flagged.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Validate parameters, then place mines and compute numbers.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_count: Number of mines to place.
            rng: Random source for mine placement (default: new unseeded Random).

        Raises:
            ConfigurationError: If the parameters are invalid.
        """
        self._init_grid(GridConfig(width, height, mine_count), rng)
        self._place_mines()
        self._calculate_numbers()

    @classmethod
    def from_config(
        cls, config: GridConfig, rng: Optional[random.Random] = None
    ) -> "Grid":
        """Build a grid from an already validated configuration."""
        return cls(config.width, config.height, config.mine_count, rng=rng)

    @classmethod
    def from_layout(cls, rows: Sequence[str]) -> "Grid":
        """
        Build a grid with a fixed mine layout.

        Each string is one row. ``*`` marks a mine, ``T`` a trap,
        ``C`` a cursed cell and ``.`` a plain safe cell.

        Raises:
            ConfigurationError: If rows are ragged, contain unknown
                characters, or the mine count is invalid.
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ConfigurationError("Layout rows must all have the same length")
        allowed = {LAYOUT_MINE, LAYOUT_TRAP, LAYOUT_CURSED, LAYOUT_SAFE}
        for row in rows:
            unknown = set(row) - allowed
            if unknown:
                raise ConfigurationError(
                    f"Unknown layout characters: {''.join(sorted(unknown))}"
                )
        mine_count = sum(row.count(LAYOUT_MINE) for row in rows)

        grid = cls.__new__(cls)
        grid._init_grid(GridConfig(width, height, mine_count), None)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                cell = grid.cells[y][x]
                cell.is_mine = char == LAYOUT_MINE
                cell.is_trap = char == LAYOUT_TRAP
                cell.is_cursed = char == LAYOUT_CURSED
        grid._calculate_numbers()
        return grid

    # ========================================================================
    # Generation (Low-level)
    # ========================================================================

    def _init_grid(
        self, config: GridConfig, rng: Optional[random.Random]
    ) -> None:
        """Set counters and create an empty matrix for a validated config."""
        self.config = config
        self.width = config.width
        self.height = config.height
        self.mine_count = config.mine_count
        self.revealed = 0
        self.flagged = 0
        self._rng = rng if rng is not None else random.Random()
        self.cells = self._create_cells()

    def _create_cells(self) -> List[List[Cell]]:
        """Create the matrix of default cells."""
        return [
            [Cell(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]

    def _place_mines(self) -> None:
        """
        Place mines by rejection sampling.

        Draws random coordinates until ``mine_count`` distinct cells are
        mines. Validation guarantees free cells remain, so this ends.
        """
        placed = 0
        draws = 0
        while placed < self.mine_count:
            x = self._rng.randrange(self.width)
            y = self._rng.randrange(self.height)
            draws += 1
            cell = self.cells[y][x]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
        logger.debug(
            "Placed %d mines on %dx%d grid in %d draws",
            placed, self.width, self.height, draws,
        )

    def _calculate_numbers(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in self.cells:
            for cell in row:
                if not cell.is_mine:
                    cell.number = self._count_adjacent_mines(cell.x, cell.y)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for nx, ny in self.neighbors(x, y) if self.cells[ny][nx].is_mine
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def is_valid(self, x: int, y: int) -> bool:
        """Check if coordinates are within grid bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get in-bounds neighboring positions.

        Args:
            x: Column index of center cell.
            y: Row index of center cell.

        Returns:
            List of (x, y) tuples, up to 8.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.is_valid(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if out of bounds."""
        if not self.is_valid(x, y):
            return None
        return self.cells[y][x]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, x: int, y: int) -> List[Cell]:
        """
        Reveal a cell, cascading through zero-number regions.

        Out-of-bounds, revealed and flagged targets are ignored.
        A revealed mine is returned like any other cell; applying
        damage is up to the caller.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Every cell revealed by this call, target first. Empty if
            nothing changed.
        """
        cell = self.get_cell(x, y)
        if cell is None or cell.is_revealed or cell.is_flagged:
            return []

        self._mark_revealed(cell)
        if cell.is_mine or cell.number > 0:
            return [cell]

        revealed = self._cascade(cell)
        logger.debug(
            "Cascade from (%d, %d) revealed %d cells", x, y, len(revealed)
        )
        return revealed

    def _mark_revealed(self, cell: Cell) -> None:
        """Flip a hidden cell to revealed and keep the counter in step."""
        cell.is_revealed = True
        if not cell.is_mine:
            self.revealed += 1

    def _cascade(self, origin: Cell) -> List[Cell]:
        """
        Flood-fill outward from an already revealed zero cell.

        Expands only through zero cells; numbered cells on the border
        are revealed but not expanded. Flagged cells stop the fill.
        """
        revealed = [origin]
        queue = deque([origin])
        while queue:
            current = queue.popleft()
            for nx, ny in self.neighbors(current.x, current.y):
                neighbor = self.cells[ny][nx]
                if neighbor.is_revealed or neighbor.is_flagged:
                    continue
                self._mark_revealed(neighbor)
                revealed.append(neighbor)
                if neighbor.number == 0 and not neighbor.is_mine:
                    queue.append(neighbor)
        return revealed

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if flag was toggled, False if out of bounds or revealed.
        """
        cell = self.get_cell(x, y)
        if cell is None or cell.is_revealed:
            return False
        cell.is_flagged = not cell.is_flagged
        self.flagged += 1 if cell.is_flagged else -1
        return True

    def chord(self, x: int, y: int) -> List[Cell]:
        """
        Chord action: reveal all unflagged neighbors if flag count matches.

        The target must be revealed with a number above zero and exactly
        that many flagged neighbors. Otherwise nothing happens.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Every cell revealed, including cascades and any mines.
        """
        cell = self.get_cell(x, y)
        if cell is None or not cell.is_revealed or cell.number == 0:
            return []

        # Snapshot before any reveal runs.
        neighbors = [self.cells[ny][nx] for nx, ny in self.neighbors(x, y)]
        flag_count = sum(1 for neighbor in neighbors if neighbor.is_flagged)
        if flag_count != cell.number:
            return []

        revealed = []
        for neighbor in neighbors:
            if not neighbor.is_revealed and not neighbor.is_flagged:
                revealed.extend(self.reveal_cell(neighbor.x, neighbor.y))
        logger.debug("Chord at (%d, %d) revealed %d cells", x, y, len(revealed))
        return revealed

    def is_complete(self) -> bool:
        """Check if every non-mine cell has been revealed."""
        return self.revealed == self.width * self.height - self.mine_count

    def reveal_all_mines(self) -> None:
        """
        Expose every mine. Does not count toward ``revealed``.

        Flags on mines are cleared first so no cell ends up both
        flagged and revealed.
        """
        for cell in self._iter_cells():
            if not cell.is_mine:
                continue
            if cell.is_flagged:
                cell.is_flagged = False
                self.flagged -= 1
            cell.is_revealed = True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def _iter_cells(self) -> Iterable[Cell]:
        for row in self.cells:
            yield from row

    @property
    def safe_remaining(self) -> int:
        """Number of non-mine cells still to reveal."""
        return self.width * self.height - self.mine_count - self.revealed

    def hidden_positions(self) -> List[Position]:
        """
        Get positions that can still be revealed.

        Returns:
            List of (x, y) for cells neither revealed nor flagged.
        """
        return [cell.position for cell in self._iter_cells() if cell.is_hidden]

    def mine_positions(self) -> List[Position]:
        """Get (x, y) of every mine."""
        return [cell.position for cell in self._iter_cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get grid state as a numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self._iter_cells():
            obs[cell.y, cell.x] = cell.to_observation()
        return obs

    def __repr__(self) -> str:
        return (
            f"Grid(width={self.width}, height={self.height}, "
            f"mine_count={self.mine_count}, revealed={self.revealed}, "
            f"flagged={self.flagged})"
        )
