"""
Board progression for a run.

A run is six boards of rising difficulty, the last one a boss board.
Board sizes can be scaled by a difficulty preset, by custom
percentages, or replaced with exact custom dimensions.
"""
import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from .grid import Grid


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_DIMENSION = 6
MAX_DIMENSION = 30
MIN_MINES = 5
# Safe cells kept free on scaled and custom boards.
RESERVED_SAFE_CELLS = 9

DEFAULT_CUSTOM_WIDTH = 10
DEFAULT_CUSTOM_HEIGHT = 10
DEFAULT_CUSTOM_MINES = 15


@dataclass(frozen=True)
class BoardConfig:
    """
    One board of a run.

    Attributes:
        id: Board number, 1-indexed.
        name: Display name.
        width: Number of columns.
        height: Number of rows.
        mines: Number of mines.
        coin_mult: Reward multiplier applied by the economy layer.
        description: Flavor text.
        is_custom_dimensions: True when width/height/mines came from
            custom settings rather than scaling.
        original_size: (width, height, mines) before scaling.
        applied_scales: (size_scale, mine_scale) used, if scaled.
    """

    id: int
    name: str
    width: int
    height: int
    mines: int
    coin_mult: float = 1.0
    description: str = ""
    is_custom_dimensions: bool = False
    original_size: Optional[Tuple[int, int, int]] = None
    applied_scales: Optional[Tuple[float, float]] = None

    def create_grid(self, rng: Optional[random.Random] = None) -> Grid:
        """Build the engine grid for this board."""
        return Grid(self.width, self.height, self.mines, rng=rng)


BOARDS: Tuple[BoardConfig, ...] = (
    BoardConfig(1, "Tutorial", 8, 8, 10, 1.0, "A gentle start"),
    BoardConfig(2, "Easy", 10, 10, 15, 1.0, "Getting warmer"),
    BoardConfig(3, "Normal", 12, 12, 25, 1.5, "Standard challenge"),
    BoardConfig(4, "Hard", 14, 14, 35, 2.0, "Things get serious"),
    BoardConfig(5, "Very Hard", 14, 14, 40, 2.5, "Almost there..."),
    BoardConfig(6, "Boss", 16, 16, 50, 3.0, "The final challenge"),
)


@dataclass(frozen=True)
class DifficultyPreset:
    """Multipliers for board size and mine density."""

    name: str
    size_scale: float
    mine_scale: float


DIFFICULTY_PRESETS: Dict[str, DifficultyPreset] = {
    "easy": DifficultyPreset("Easy", 0.8, 0.8),
    "normal": DifficultyPreset("Normal", 1.0, 1.0),
    "hard": DifficultyPreset("Hard", 1.15, 1.2),
}


@dataclass
class BoardSettings:
    """
    Player difficulty settings.

    Attributes:
        difficulty: "easy", "normal", "hard" or "custom".
        board_size_scale: Size percentage, used for custom scaling.
        mine_density_scale: Mine percentage, used for custom scaling.
        use_custom_dimensions: Use exact custom width/height/mines.
        custom_width: Exact width for custom dimensions.
        custom_height: Exact height for custom dimensions.
        custom_mines: Exact mine count for custom dimensions.
    """

    difficulty: str = "normal"
    board_size_scale: Optional[int] = None
    mine_density_scale: Optional[int] = None
    use_custom_dimensions: bool = False
    custom_width: Optional[int] = None
    custom_height: Optional[int] = None
    custom_mines: Optional[int] = None


@dataclass(frozen=True)
class CustomBoardValidation:
    """Result of checking custom board dimensions."""

    is_valid: bool
    constraints: Dict[str, int] = field(default_factory=dict)


# ============================================================================
# Lookups
# ============================================================================

def get_board_config(board_number: int) -> Optional[BoardConfig]:
    """Get board by 1-indexed number, or None if out of range."""
    if board_number < 1 or board_number > len(BOARDS):
        return None
    return BOARDS[board_number - 1]


def get_total_boards() -> int:
    """Number of boards in a run."""
    return len(BOARDS)


def is_boss_board(board_number: int) -> bool:
    """The last board of a run is the boss."""
    return board_number == len(BOARDS)


def get_difficulty_preset(difficulty: str) -> Optional[DifficultyPreset]:
    """Get preset by name, or None if unknown."""
    return DIFFICULTY_PRESETS.get(difficulty)


# ============================================================================
# Scaling
# ============================================================================

def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    """Round halves away from zero rather than to even."""
    return int(math.floor(value + 0.5))


def _mine_limit(total_cells: int) -> int:
    return total_cells - RESERVED_SAFE_CELLS


def get_scaled_board_config(
    board_number: int, settings: Optional[BoardSettings] = None
) -> Optional[BoardConfig]:
    """
    Get a board scaled by the player's difficulty settings.

    Custom dimensions are clamped to 6-30 per side and 5 to
    (cells - 9) mines. Otherwise size and mine density are scaled
    by a preset or by custom percentages, with the same clamps.

    Args:
        board_number: Board number (1-indexed).
        settings: Difficulty settings (default: normal).

    Returns:
        Scaled board, or None if the board number is invalid.
    """
    base = get_board_config(board_number)
    if base is None:
        return None
    settings = settings or BoardSettings()
    difficulty = settings.difficulty or "normal"
    original = (base.width, base.height, base.mines)

    if difficulty == "custom" and settings.use_custom_dimensions:
        width = _clamp(
            settings.custom_width or DEFAULT_CUSTOM_WIDTH,
            MIN_DIMENSION, MAX_DIMENSION,
        )
        height = _clamp(
            settings.custom_height or DEFAULT_CUSTOM_HEIGHT,
            MIN_DIMENSION, MAX_DIMENSION,
        )
        mines = _clamp(
            settings.custom_mines or DEFAULT_CUSTOM_MINES,
            MIN_MINES, _mine_limit(width * height),
        )
        return replace(
            base,
            width=width,
            height=height,
            mines=mines,
            is_custom_dimensions=True,
            original_size=original,
        )

    if difficulty == "custom":
        size_scale = (settings.board_size_scale or 100) / 100
        mine_scale = (settings.mine_density_scale or 100) / 100
    else:
        preset = DIFFICULTY_PRESETS.get(difficulty)
        if preset is None:
            logger.debug("Unknown difficulty %r, using normal", difficulty)
            preset = DIFFICULTY_PRESETS["normal"]
        size_scale = preset.size_scale
        mine_scale = preset.mine_scale

    width = _clamp(
        _round_half_up(base.width * size_scale), MIN_DIMENSION, MAX_DIMENSION
    )
    height = _clamp(
        _round_half_up(base.height * size_scale), MIN_DIMENSION, MAX_DIMENSION
    )
    total_cells = width * height
    base_density = base.mines / (base.width * base.height)
    mines = _clamp(
        _round_half_up(total_cells * base_density * mine_scale),
        MIN_MINES, _mine_limit(total_cells),
    )
    return replace(
        base,
        width=width,
        height=height,
        mines=mines,
        is_custom_dimensions=False,
        original_size=original,
        applied_scales=(size_scale, mine_scale),
    )


def validate_custom_board(
    width: int, height: int, mines: int
) -> CustomBoardValidation:
    """
    Check custom board settings against the allowed ranges.

    Returns:
        Validation result with the constraints and density percentage.
    """
    total_cells = width * height
    max_mines = _mine_limit(total_cells)
    is_valid = (
        MIN_DIMENSION <= width <= MAX_DIMENSION
        and MIN_DIMENSION <= height <= MAX_DIMENSION
        and MIN_MINES <= mines <= max_mines
    )
    density = _round_half_up(mines / total_cells * 100) if total_cells else 0
    return CustomBoardValidation(
        is_valid=is_valid,
        constraints={
            "min_width": MIN_DIMENSION,
            "max_width": MAX_DIMENSION,
            "min_height": MIN_DIMENSION,
            "max_height": MAX_DIMENSION,
            "min_mines": MIN_MINES,
            "max_mines": max_mines,
            "density": density,
        },
    )
