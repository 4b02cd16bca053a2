from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_stack.game import Action, BlockStackGame, GameConfig, ScoringRules, TetrominoType, color_for


# Discrete action index -> game command. Pausing is not exposed to agents.
ENV_ACTIONS: Tuple[Action, ...] = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)


class BlockStackEnv(gym.Env):
    """Single-player environment over :class:`BlockStackGame`.

    Observation is the board with the falling piece overlaid as negative
    kind ids. Reward is the change in game score. Gravity is applied every
    ``gravity_every`` steps so that an agent cannot stall a piece forever.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None, gravity_every: int = 4,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = BlockStackGame(config, rules)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)

        n_kinds = len(TetrominoType)
        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        nxt = self.game.next_piece
        return {
            "score": self.game.score,
            "lines": self.game.lines,
            "level": self.game.level,
            "next_piece": int(nxt.kind) if nxt is not None else 0,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.seed(seed)
        self.game.reset()
        self.game.start()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        before = self.game.score
        self.game.step(ENV_ACTIONS[int(action)])
        self._steps += 1
        if self.gravity_every > 0 and self._steps % self.gravity_every == 0:
            self.game.gravity_tick()

        reward = float(self.game.score - before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self.game.get_state(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        # Create a simple RGB image from the grid
        grid = self.game.get_state()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = abs(int(grid[y, x]))
                if v:
                    hex_color = color_for(TetrominoType(v)).lstrip("#")
                    color = tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
                else:
                    color = (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
