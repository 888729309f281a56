"""
Gymnasium environment wrapper for the grid engine.

Drives a Grid the way the progression layer does: reveal, read the
returned cells, check completion, expose mines when the run ends.
"""
import random
from typing import Any, Dict, List, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import Cell, FLAGGED_CODE, HIDDEN_CODE, MINE_CODE
from .grid import Grid, GridConfig


SAFE_CELL_REWARD = 1.0
COMPLETE_REWARD = 10.0
MINE_PENALTY = -10.0
NO_OP_PENALTY = -0.1


# ============================================================================
# Grid Environment
# ============================================================================

class GridEnv(gym.Env):
    """
    Gymnasium environment over a single Grid.

    Observation:
        2D int8 array from ``Grid.get_observation``.

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i % width, i // width).

    Rewards:
        - +1 per safe cell revealed by the step (cascades included)
        - +10 when the grid is complete
        - -10 for revealing a mine
        - -0.1 for a reveal that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Grid configuration (default: 10x10 with 15 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GridConfig()
        self.render_mode = render_mode
        self.grid = Grid.from_config(self.config)

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0
        self._hit_mine = False

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a freshly generated grid.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        grid_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.grid = Grid.from_config(self.config, rng=random.Random(grid_seed))
        self._steps = 0
        self._hit_mine = False

        return self.grid.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one cell.

        Args:
            action: Cell index (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        revealed = self.grid.reveal_cell(x, y)
        reward = self._calculate_reward(revealed)

        terminated = self._hit_mine or self.grid.is_complete()
        if self._hit_mine:
            self.grid.reveal_all_mines()

        return (
            self.grid.get_observation(),
            reward,
            terminated,
            False,
            self._get_info(),
        )

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return action % self.config.width, action // self.config.width

    def _calculate_reward(self, revealed: List[Cell]) -> float:
        """
        Score the cells revealed by one step.

        Args:
            revealed: Cells returned by the reveal.

        Returns:
            Reward value.
        """
        if not revealed:
            return NO_OP_PENALTY
        if any(cell.is_mine for cell in revealed):
            self._hit_mine = True
            return MINE_PENALTY

        reward = SAFE_CELL_REWARD * len(revealed)
        if self.grid.is_complete():
            reward += COMPLETE_REWARD
        return reward

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.grid.revealed,
            "flagged": self.grid.flagged,
            "total_safe": self.config.safe_cells,
            "hit_mine": self._hit_mine,
            "complete": self.grid.is_complete(),
        }

    def render(self) -> Optional[str]:
        """Render the current grid state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render grid as ASCII string."""
        symbols = {HIDDEN_CODE: ".", FLAGGED_CODE: "F", MINE_CODE: "*", 0: " "}
        obs = self.grid.get_observation()
        return "\n".join(
            " ".join(symbols.get(int(val), str(int(val))) for val in row)
            for row in obs
        )

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = cell can still be revealed.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.grid.hidden_positions():
            mask[y * self.config.width + x] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[GridConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel play.

    Args:
        n_envs: Number of parallel environments.
        config: Grid configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> GridEnv:
        return GridEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
