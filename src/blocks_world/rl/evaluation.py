from __future__ import annotations

import logging
import random
from typing import Callable, Dict, Optional

import gymnasium as gym
import numpy as np

# Ensure envs are registered
import blocks_world.env  # noqa: F401
from blocks_world.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from blocks_world.world import WorldConfig, plan_moves


logger = logging.getLogger(__name__)

Policy = Callable[[dict], int]


def make_env(num_blocks: int = 6, seed: int | None = None, resample: bool = True) -> gym.Env:
    env = gym.make("BlocksWorld-v0", config=WorldConfig(num_blocks=num_blocks))
    env = FlattenDiscreteActionWrapper(env)
    # Resample invalid actions for unmasked policies; also forwards get_action_mask
    if resample:
        env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def planner_policy(env: gym.Env) -> Policy:
    """Flat action for the first move of a fresh plan towards the goal."""
    base = env.unwrapped

    def act(obs: dict) -> int:
        plan = plan_moves(base.world, base.goal)
        if not plan:
            raise ValueError("World already matches the goal; no move to make")
        m, dest = plan[0]
        return (m - 1) * (base.world.num_blocks + 1) + dest

    return act


def random_policy(env: gym.Env, seed: Optional[int] = None) -> Policy:
    """Uniform choice among the currently unmasked flat actions."""
    rng = random.Random(seed)

    def act(obs: dict) -> int:
        valid = np.flatnonzero(env.get_action_mask())
        if valid.size == 0:
            return int(env.action_space.sample())
        return int(rng.choice(list(valid)))

    return act


def evaluate(env: gym.Env, policy: Policy, episodes: int = 20, seed: Optional[int] = None,
             max_steps: Optional[int] = None) -> Dict[str, float]:
    """Roll out ``policy`` and report success rate, mean length and mean return.

    An episode whose start already matches the goal counts as solved in
    zero steps.
    """
    base = env.unwrapped
    solved = 0
    lengths = []
    returns = []
    for ep in range(episodes):
        obs, info = env.reset(seed=None if seed is None else seed + ep)
        steps = 0
        total = 0.0
        terminated = base.world == base.goal
        truncated = False
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(policy(obs))
            total += float(reward)
            steps += 1
            if max_steps is not None and steps >= max_steps:
                truncated = True
        solved += int(terminated)
        lengths.append(steps)
        returns.append(total)
    stats = {
        "success_rate": solved / max(1, episodes),
        "avg_length": float(np.mean(lengths)) if lengths else 0.0,
        "avg_return": float(np.mean(returns)) if returns else 0.0,
    }
    logger.debug("Evaluated %d episodes: %s", episodes, stats)
    return stats
