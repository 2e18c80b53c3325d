"""Gymnasium environments for the blocks world."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .blocks_world_env import BlocksWorldEnv

# Register default 6-block rearrangement environment
register(
    id="BlocksWorld-v0",
    entry_point="blocks_world.env.blocks_world_env:BlocksWorldEnv",
)

__all__ = ["BlocksWorldEnv"]
