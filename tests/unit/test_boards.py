"""
Unit tests for run board progression and difficulty scaling.
"""
import random

import pytest

from minegrid import (
    BOARDS,
    BoardSettings,
    Grid,
    get_board_config,
    get_difficulty_preset,
    get_scaled_board_config,
    get_total_boards,
    is_boss_board,
    validate_custom_board,
)


# ============================================================================
# Lookup Tests
# ============================================================================

class TestBoardLookup:
    """Test board table access."""

    def test_run_has_six_boards(self) -> None:
        """A run is six boards long."""
        assert get_total_boards() == 6
        assert len(BOARDS) == 6

    @pytest.mark.parametrize(
        "number, width, height, mines",
        [(1, 8, 8, 10), (2, 10, 10, 15), (3, 12, 12, 25),
         (4, 14, 14, 35), (5, 14, 14, 40), (6, 16, 16, 50)],
    )
    def test_board_sizes(
        self, number: int, width: int, height: int, mines: int
    ) -> None:
        """Boards grow in size and mine count."""
        board = get_board_config(number)
        assert (board.width, board.height, board.mines) == (width, height, mines)
        assert board.id == number

    @pytest.mark.parametrize("number", [0, -1, 7])
    def test_invalid_board_number_returns_none(self, number: int) -> None:
        """Out of range board numbers have no config."""
        assert get_board_config(number) is None
        assert get_scaled_board_config(number) is None

    def test_only_last_board_is_boss(self) -> None:
        """Board 6 is the boss."""
        assert is_boss_board(6) is True
        assert not any(is_boss_board(n) for n in range(1, 6))

    def test_difficulty_preset_lookup(self) -> None:
        """Known presets resolve, unknown ones do not."""
        assert get_difficulty_preset("hard").mine_scale == 1.2
        assert get_difficulty_preset("nightmare") is None

    @pytest.mark.parametrize("number", range(1, 7))
    def test_every_board_builds_a_grid(self, number: int) -> None:
        """Board table entries are valid grid configurations."""
        board = get_board_config(number)
        grid = board.create_grid(rng=random.Random(number))
        assert isinstance(grid, Grid)
        assert len(grid.mine_positions()) == board.mines


# ============================================================================
# Scaling Tests
# ============================================================================

class TestScaledBoards:
    """Test difficulty scaling."""

    def test_normal_difficulty_keeps_base_size(self) -> None:
        """Normal settings leave the board unchanged."""
        board = get_scaled_board_config(2)
        assert (board.width, board.height, board.mines) == (10, 10, 15)
        assert board.is_custom_dimensions is False
        assert board.applied_scales == (1.0, 1.0)

    def test_hard_difficulty_scales_boss(self) -> None:
        """Hard grows the boss board and its mine density."""
        board = get_scaled_board_config(6, BoardSettings(difficulty="hard"))
        assert (board.width, board.height) == (18, 18)
        assert board.mines == 76
        assert board.original_size == (16, 16, 50)
        assert board.coin_mult == 3.0

    def test_easy_difficulty_respects_minimum_size(self) -> None:
        """Scaled sides never drop below six cells."""
        board = get_scaled_board_config(1, BoardSettings(difficulty="easy"))
        assert board.width == 6
        assert board.height == 6
        assert board.mines >= 5

    def test_unknown_difficulty_falls_back_to_normal(self) -> None:
        """Unrecognized difficulty names behave like normal."""
        board = get_scaled_board_config(3, BoardSettings(difficulty="weird"))
        assert (board.width, board.height, board.mines) == (12, 12, 25)

    def test_custom_percentages(self) -> None:
        """Custom scaling uses the percentage settings."""
        settings = BoardSettings(
            difficulty="custom", board_size_scale=150, mine_density_scale=100
        )
        board = get_scaled_board_config(2, settings)
        assert (board.width, board.height) == (15, 15)
        assert board.applied_scales == (1.5, 1.0)

    def test_custom_dimensions_are_clamped(self) -> None:
        """Exact dimensions are clamped to the allowed ranges."""
        settings = BoardSettings(
            difficulty="custom",
            use_custom_dimensions=True,
            custom_width=40,
            custom_height=3,
            custom_mines=1000,
        )
        board = get_scaled_board_config(1, settings)
        assert board.width == 30
        assert board.height == 6
        assert board.mines == 30 * 6 - 9
        assert board.is_custom_dimensions is True
        assert board.applied_scales is None

    def test_custom_dimensions_defaults(self) -> None:
        """Missing custom values fall back to 10x10 with 15 mines."""
        settings = BoardSettings(difficulty="custom", use_custom_dimensions=True)
        board = get_scaled_board_config(4, settings)
        assert (board.width, board.height, board.mines) == (10, 10, 15)

    @pytest.mark.parametrize("difficulty", ["easy", "normal", "hard"])
    @pytest.mark.parametrize("number", range(1, 7))
    def test_scaled_boards_build_grids(
        self, difficulty: str, number: int
    ) -> None:
        """Every scaled board is accepted by the grid engine."""
        board = get_scaled_board_config(number, BoardSettings(difficulty))
        grid = board.create_grid(rng=random.Random(0))
        assert grid.mine_count == board.mines


# ============================================================================
# Custom Validation Tests
# ============================================================================

class TestValidateCustomBoard:
    """Test custom board checks."""

    def test_valid_custom_board(self) -> None:
        """A regular board passes with its constraints reported."""
        result = validate_custom_board(10, 10, 15)
        assert result.is_valid is True
        assert result.constraints["max_mines"] == 91
        assert result.constraints["density"] == 15

    @pytest.mark.parametrize(
        "width, height, mines",
        [(5, 10, 10), (10, 31, 10), (10, 10, 4), (10, 10, 92)],
    )
    def test_invalid_custom_boards(
        self, width: int, height: int, mines: int
    ) -> None:
        """Sizes and mine counts outside the ranges are rejected."""
        assert validate_custom_board(width, height, mines).is_valid is False
