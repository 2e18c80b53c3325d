from __future__ import annotations

import argparse
import logging
from typing import List, Sequence

from blocks_world.logging_config import setup_logging

from .core import BlocksWorld


logger = logging.getLogger(__name__)

DEMO_TOWERS: List[List[int]] = [
    [1, 2, 3],
    [4, 5, 6, 7],
    [8, 9, 10, 11, 12],
]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_demo_world(towers: Sequence[Sequence[int]] = DEMO_TOWERS, num_blocks: int = 12) -> BlocksWorld:
    world = BlocksWorld(num_blocks)
    for tower in towers:
        for lower, upper in zip(tower, tower[1:]):
            world.move(upper, lower)
    return world


def describe_world(world: BlocksWorld) -> List[str]:
    return [
        f"Block {i}: on {world.is_on(i)}, open={_flag(world.is_open(i))}, onTable={_flag(world.is_on_table(i))}"
        for i in world.blocks
    ]


def run_world_demo(num_blocks: int = 12) -> None:
    world = build_demo_world(num_blocks=num_blocks)
    logger.debug("Demo world: %r", world)
    for line in describe_world(world):
        print(line)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Print the three-tower blocks world demo")
    p.add_argument("--blocks", type=int, default=12)
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING"], default="WARNING")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))
    run_world_demo(args.blocks)


if __name__ == "__main__":  # pragma: no cover
    main()
