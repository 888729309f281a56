"""
Minesweeper-style grid engine.

Provides board generation, reveal/flag/chord mechanics, win detection,
run board progression and a Gymnasium wrapper.
"""
from .cell import Cell, CellState
from .grid import (
    ConfigurationError,
    Grid,
    GridConfig,
    max_mines,
    validate_config,
)
from .boards import (
    BOARDS,
    DIFFICULTY_PRESETS,
    BoardConfig,
    BoardSettings,
    CustomBoardValidation,
    DifficultyPreset,
    get_board_config,
    get_difficulty_preset,
    get_scaled_board_config,
    get_total_boards,
    is_boss_board,
    validate_custom_board,
)
from .environment import GridEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "ConfigurationError",
    "Grid",
    "GridConfig",
    "max_mines",
    "validate_config",
    "BOARDS",
    "DIFFICULTY_PRESETS",
    "BoardConfig",
    "BoardSettings",
    "CustomBoardValidation",
    "DifficultyPreset",
    "get_board_config",
    "get_difficulty_preset",
    "get_scaled_board_config",
    "get_total_boards",
    "is_boss_board",
    "validate_custom_board",
    "GridEnv",
    "make_vec_env",
]
