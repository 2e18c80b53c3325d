from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pygame

from blocks_world.world import BlocksWorld, random_world
from .renderer import Renderer


logger = logging.getLogger(__name__)


def handle_click(world: BlocksWorld, renderer: Renderer, selected: Optional[int], x: int, y: int) -> Optional[int]:
    """Apply one click and return the new selection.

    The first click selects an open block, the second click moves it onto
    the top of the clicked column (or the table for the empty column).
    """
    if selected is None:
        block = renderer.block_at(world, x, y)
        if block is not None and world.is_open(block):
            return block
        return None
    dest = renderer.destination_at(world, x)
    if dest is not None and dest != selected:
        if not world.move(selected, dest):
            logger.info("Cannot move %s onto %s", selected, dest)
    return None


def run(num_blocks: int = 6, seed: Optional[int] = None) -> None:
    pygame.init()
    try:
        rng = np.random.default_rng(seed)
        world = random_world(num_blocks, rng)
        renderer = Renderer(cell_size=40)
        width, height = renderer.surface_size(world)
        margin = renderer.margin
        screen = pygame.display.set_mode((width + margin * 2, height + margin * 2 + 30))
        pygame.display.set_caption("Blocks World - Human Play")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        selected: Optional[int] = None
        moves = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        world = random_world(num_blocks, rng)
                        selected = None
                        moves = 0
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mx, my = event.pos
                    before = world.below_state()
                    selected = handle_click(world, renderer, selected, mx - margin, my - margin)
                    if not np.array_equal(before, world.below_state()):
                        moves += 1

            renderer.draw(screen, world, selected, font)
            status = f"moves {moves}  towers {len(world.towers())}  (click block, click column; N new, ESC quit)"
            txt = font.render(status, True, (230, 230, 230))
            screen.blit(txt, (margin, height + margin + 5))
            pygame.display.flip()
            clock.tick(30)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
