from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np


logger = logging.getLogger(__name__)

TABLE = 0
NOTHING = 0

Move = Tuple[int, int]


@dataclass
class WorldConfig:
    num_blocks: int = 12
    max_episode_steps: int = 200
    random_seed: Optional[int] = None


class BlocksWorld:
    """Fixed set of blocks 1..N stacked in towers on a table.

    ``above[m]`` is the block resting directly on ``m`` (0 when ``m`` is
    open) and ``below[m]`` is the block ``m`` rests on (0 when ``m`` is on
    the table). Both arrays are indexed by block id; slot 0 is unused.
    ``move`` is the only mutation and keeps the two arrays inverse views of
    the same rests-on relation.
    """

    def __init__(self, config: Union[WorldConfig, int, None] = None) -> None:
        if config is None:
            config = WorldConfig()
        elif not isinstance(config, WorldConfig):
            config = WorldConfig(num_blocks=int(config))
        self.config = config
        self.num_blocks = max(int(config.num_blocks), 0)
        self.above = np.zeros(self.num_blocks + 1, dtype=np.int64)
        self.below = np.zeros(self.num_blocks + 1, dtype=np.int64)

    @classmethod
    def from_towers(cls, towers: Iterable[Sequence[int]], num_blocks: Optional[int] = None) -> "BlocksWorld":
        """Build a world from towers listed bottom to top.

        Blocks not mentioned in any tower stay on the table.
        """
        towers = [list(t) for t in towers]
        if num_blocks is None:
            num_blocks = max((max(t) for t in towers if t), default=0)
        listed = [b for t in towers for b in t]
        if len(listed) != len(set(listed)):
            raise ValueError(f"Block listed more than once in {towers}")
        world = cls(num_blocks)
        for tower in towers:
            for lower, upper in zip(tower, tower[1:]):
                if not world.move(upper, lower):
                    raise ValueError(f"Cannot stack block {upper} on {lower} in tower {tower}")
        return world

    def reset(self) -> None:
        self.above.fill(NOTHING)
        self.below.fill(TABLE)

    def copy(self) -> "BlocksWorld":
        new_world = BlocksWorld(WorldConfig(self.num_blocks, self.config.max_episode_steps, self.config.random_seed))
        new_world.above = self.above.copy()
        new_world.below = self.below.copy()
        return new_world

    def __len__(self) -> int:
        return self.num_blocks

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlocksWorld):
            return NotImplemented
        return self.num_blocks == other.num_blocks and bool(np.array_equal(self.below, other.below))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"BlocksWorld(num_blocks={self.num_blocks}, towers={self.towers()})"

    @property
    def blocks(self) -> range:
        return range(1, self.num_blocks + 1)

    def is_block(self, m: int) -> bool:
        return 1 <= m <= self.num_blocks

    # Observers

    def is_on_table(self, m: int) -> bool:
        if not self.is_block(m):
            return False
        return int(self.below[m]) == TABLE

    def is_open(self, m: int) -> bool:
        # The table always has room for another tower
        if m == TABLE:
            return True
        if not self.is_block(m):
            return False
        return int(self.above[m]) == NOTHING

    def is_on(self, m: int) -> int:
        # Out-of-range ids are echoed back unchanged
        if not self.is_block(m):
            return m
        return int(self.below[m])

    def is_above(self, m: int, n: int) -> bool:
        """True if ``n`` is somewhere in the tower beneath ``m``."""
        if not self.is_block(m) or not (0 <= n <= self.num_blocks):
            return False
        cur = int(self.below[m])
        while cur != TABLE:
            if cur == n:
                return True
            cur = int(self.below[cur])
        return False

    # Manipulator

    def can_move(self, m: int, n: int) -> bool:
        if not self.is_block(m) or not (0 <= n <= self.num_blocks):
            return False
        if m == n:
            return False
        return self.is_open(m) and self.is_open(n)

    def move(self, m: int, n: int) -> bool:
        """Put block ``m`` directly on ``n`` (the table when ``n`` is 0).

        Returns False and leaves the world untouched when ``m`` or ``n`` is
        out of range, either is covered, or ``m == n``.
        """
        if not self.can_move(m, n):
            logger.debug("Rejected move of %s onto %s", m, n)
            return False
        old = int(self.below[m])
        if old != TABLE:
            self.above[old] = NOTHING
        self.below[m] = n
        if n != TABLE:
            self.above[n] = m
        return True

    # Derived views

    def valid_moves(self) -> List[Move]:
        moves: List[Move] = []
        for m in self.blocks:
            if not self.is_open(m):
                continue
            for n in range(0, self.num_blocks + 1):
                # includes table -> table, which move accepts as a no-op
                if self.can_move(m, n):
                    moves.append((m, n))
        return moves

    def towers(self) -> List[List[int]]:
        result: List[List[int]] = []
        for base in self.blocks:
            if not self.is_on_table(base):
                continue
            tower = [base]
            cur = int(self.above[base])
            while cur != NOTHING:
                tower.append(cur)
                cur = int(self.above[cur])
            result.append(tower)
        return result

    def height_of(self, m: int) -> int:
        if not self.is_block(m):
            return 0
        height = 0
        cur = int(self.below[m])
        while cur != TABLE:
            height += 1
            cur = int(self.below[cur])
        return height

    def below_state(self) -> np.ndarray:
        return self.below[1:].copy()

    def is_consistent(self) -> bool:
        """Check that ``above``/``below`` agree and every tower reaches the table."""
        for m in self.blocks:
            k = int(self.above[m])
            if k != NOTHING and (not self.is_block(k) or int(self.below[k]) != m):
                return False
            b = int(self.below[m])
            if b != TABLE and (not self.is_block(b) or int(self.above[b]) != m):
                return False
        for m in self.blocks:
            steps = 0
            cur = int(self.below[m])
            while cur != TABLE:
                steps += 1
                if steps > self.num_blocks:
                    return False
                cur = int(self.below[cur])
        return True


def create(num_blocks: int) -> BlocksWorld:
    return BlocksWorld(num_blocks)
