"""Blocks world towers and a recipe/pantry filter, with a gymnasium env on top."""

from .world import TABLE, BlocksWorld, WorldConfig, create

__all__ = ["TABLE", "BlocksWorld", "WorldConfig", "create"]
