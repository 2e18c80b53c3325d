from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blocks_world.world import BlocksWorld, WorldConfig, count_well_placed, is_well_placed, random_world


logger = logging.getLogger(__name__)


def _compute_action_mask(world: BlocksWorld) -> np.ndarray:
    n = world.num_blocks
    mask = np.zeros((n, n + 1), dtype=np.bool_)
    for m, dest in world.valid_moves():
        # Table -> table is accepted by move but never useful
        if world.is_on_table(m) and dest == 0:
            continue
        mask[m - 1, dest] = True
    return mask


class BlocksWorldEnv(gym.Env):
    """Rearrange towers into a goal configuration one move at a time.

    Action ``(block_idx, dest)`` calls ``move(block_idx + 1, dest)`` where
    ``dest`` 0 is the table. Observations hold the ``below`` vector of the
    current world and of the goal.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(self, config: Optional[WorldConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = -0.01,
                 success_reward: float = 10.0) -> None:
        super().__init__()
        self.config = config or WorldConfig(num_blocks=6)
        self.render_mode = render_mode
        n = self.config.num_blocks
        if n < 1:
            raise ValueError("BlocksWorldEnv needs at least one block")

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.success_reward = float(success_reward)
        self.reward_weights: Dict[str, float] = {
            "well_placed": 1.0,      # per block newly well placed (negative when undone)
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        self.observation_space = spaces.Dict(
            {
                "below": spaces.Box(low=0, high=n, shape=(n,), dtype=np.int64),
                "goal": spaces.Box(low=0, high=n, shape=(n,), dtype=np.int64),
            }
        )
        # Action: (block index, destination id with 0 = table)
        self.action_space = spaces.MultiDiscrete((n, n + 1))

        self.world = BlocksWorld(self.config)
        self.goal = BlocksWorld(self.config)
        self._steps = 0
        self._last_obs: Optional[Dict[str, Any]] = None

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "below": self.world.below_state(),
            "goal": self.goal.below_state(),
        }

    def _get_info(self) -> Dict[str, Any]:
        mask = _compute_action_mask(self.world)
        valid_actions = [(int(i), int(d)) for i, d in zip(*np.nonzero(mask))]
        return {
            "action_mask": mask,
            "valid_actions": valid_actions,
            "well_placed": count_well_placed(self.world, self.goal),
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.world)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        n = self.config.num_blocks
        self.goal = random_world(n, self.np_random)
        self.world = random_world(n, self.np_random)
        # A start equal to the goal is only unavoidable with a single block
        while n > 1 and self.world == self.goal:
            self.world = random_world(n, self.np_random)
        self._steps = 0
        logger.debug("Reset: start=%s goal=%s", self.world.towers(), self.goal.towers())
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int]):
        block_idx, dest = map(int, action)
        block = block_idx + 1

        before = count_well_placed(self.world, self.goal)
        useful = not (self.world.is_on_table(block) and dest == 0)
        success = useful and self.world.move(block, dest)
        after = count_well_placed(self.world, self.goal)

        reward_components: Dict[str, float] = {}
        if success:
            reward_components["well_placed"] = self.reward_weights["well_placed"] * float(after - before)
        else:
            reward_components["invalid"] = self.invalid_action_penalty
        reward_components["step"] = self.step_penalty

        terminated = self.world == self.goal
        if terminated:
            reward_components["success"] = self.success_reward
        self._steps += 1
        truncated = not terminated and self._steps >= self.config.max_episode_steps

        reward = float(sum(reward_components.values()))
        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["move_applied"] = bool(success)
        self._last_obs = obs
        return obs, reward, bool(terminated), bool(truncated), info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        n = self.world.num_blocks
        cell = 12
        img = np.full((n * cell + cell, (n + 1) * cell * 2, 3), 30, dtype=np.uint8)
        # Table strip along the bottom
        img[-cell:, :, :] = (110, 80, 50)
        for col, tower in enumerate(self.world.towers()):
            x0 = col * cell * 2 + cell // 2
            for level, block in enumerate(tower):
                y1 = img.shape[0] - cell - level * cell
                well = is_well_placed(self.world, self.goal, block)
                color = (70, 200, 120) if well else (200, 120, 70)
                img[y1 - cell + 1 : y1, x0 : x0 + cell, :] = color
        return img

    def close(self) -> None:
        pass
