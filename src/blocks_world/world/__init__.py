"""Blocks world model.

Exports the tower model and supporting helpers:
- BlocksWorld: blocks 1..N with above/below relations and the move operation
- WorldConfig: size and episode configuration
- TABLE: sentinel id for the table
- plan_moves / apply_plan: legal move sequences towards a goal world
- random_towers / random_world: random configurations
"""

from .core import TABLE, BlocksWorld, WorldConfig, create
from .planning import (
    apply_plan,
    count_well_placed,
    is_well_placed,
    plan_moves,
    random_towers,
    random_world,
)

__all__ = [
    "TABLE",
    "BlocksWorld",
    "WorldConfig",
    "create",
    "apply_plan",
    "count_well_placed",
    "is_well_placed",
    "plan_moves",
    "random_towers",
    "random_world",
]
