"""
Cell module for the grid engine.

Represents individual cells on the grid with their content
(mine/trap/curse tags, adjacency number) and visibility flags.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(eq=False)
class Cell:
    """
    A single position on the grid.

    Cells are owned by exactly one Grid and never move. Only
    ``is_revealed`` and ``is_flagged`` change after the grid is built;
    the Grid performs those mutations.

    Attributes:
        x: Column index.
        y: Row index.
        is_mine: Whether this cell contains a mine.
        is_trap: Non-lethal hazard tag.
        is_cursed: Resource-penalty tag.
        is_revealed: Whether the cell has been revealed.
        is_flagged: Whether the player flagged this cell.
        number: Count of mines in neighboring cells (0-8), unused for mines.
    """

    x: int
    y: int
    is_mine: bool = False
    is_trap: bool = False
    is_cursed: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    number: int = 0

    @property
    def position(self) -> tuple:
        """(x, y) coordinates of this cell."""
        return self.x, self.y

    @property
    def state(self) -> CellState:
        """Current visual state."""
        if self.is_revealed:
            return CellState.REVEALED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.is_revealed and not self.is_flagged

    def to_observation(self) -> int:
        """
        Convert cell to a snapshot value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.is_revealed:
            return MINE_CODE if self.is_mine else self.number
        if self.is_flagged:
            return FLAGGED_CODE
        return HIDDEN_CODE
