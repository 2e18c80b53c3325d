from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .core import TABLE, BlocksWorld, Move


def random_towers(num_blocks: int, rng: Optional[np.random.Generator] = None) -> List[List[int]]:
    """Randomly partition blocks 1..N into towers (bottom to top)."""
    rng = rng if rng is not None else np.random.default_rng()
    order = [int(b) for b in rng.permutation(np.arange(1, num_blocks + 1))]
    towers: List[List[int]] = []
    for block in order:
        # Start a new tower or stack on top of a random existing one
        choice = int(rng.integers(0, len(towers) + 1))
        if choice == len(towers):
            towers.append([block])
        else:
            towers[choice].append(block)
    return towers


def random_world(num_blocks: int, rng: Optional[np.random.Generator] = None) -> BlocksWorld:
    return BlocksWorld.from_towers(random_towers(num_blocks, rng), num_blocks)


def is_well_placed(world: BlocksWorld, goal: BlocksWorld, m: int) -> bool:
    """A block is well placed when it and everything beneath it match the goal."""
    cur = m
    while cur != TABLE:
        if world.is_on(cur) != goal.is_on(cur):
            return False
        cur = world.is_on(cur)
    return True


def count_well_placed(world: BlocksWorld, goal: BlocksWorld) -> int:
    return sum(1 for m in world.blocks if is_well_placed(world, goal, m))


def plan_moves(world: BlocksWorld, goal: BlocksWorld) -> List[Move]:
    """Return legal moves turning ``world`` into ``goal``.

    Every block that is not well placed is first unstacked onto the table,
    tower by tower from the top down. Goal towers are then rebuilt bottom
    up. At most two moves per block are issued. The input world is not
    modified.
    """
    if len(world) != len(goal):
        raise ValueError(f"World has {len(world)} blocks but goal has {len(goal)}")
    scratch = world.copy()
    plan: List[Move] = []

    for tower in scratch.towers():
        for block in reversed(tower):
            if is_well_placed(scratch, goal, block):
                break
            if not scratch.is_on_table(block):
                scratch.move(block, TABLE)
                plan.append((block, TABLE))

    for tower in goal.towers():
        for block in tower[1:]:
            if is_well_placed(scratch, goal, block):
                continue
            target = goal.is_on(block)
            if not scratch.move(block, target):
                raise ValueError(f"Planner produced an illegal move of {block} onto {target}")
            plan.append((block, target))
    return plan


def apply_plan(world: BlocksWorld, plan: Sequence[Move]) -> int:
    applied = 0
    for m, n in plan:
        if not world.move(m, n):
            raise ValueError(f"Move of {m} onto {n} was rejected after {applied} steps")
        applied += 1
    return applied
