from __future__ import annotations

from typing import Optional, Tuple

import pygame

from blocks_world.world import BlocksWorld


def _color_for_block(block: int, selected: bool = False) -> Tuple[int, int, int]:
    if selected:
        return (255, 255, 255)
    palette = [
        (0, 240, 240),
        (240, 240, 0),
        (160, 0, 240),
        (0, 240, 0),
        (240, 0, 0),
        (0, 0, 240),
        (240, 160, 0),
    ]
    return palette[(block - 1) % len(palette)]


class Renderer:
    """Draws towers side by side on a table strip.

    Column ``i`` holds the ``i``-th tower from ``BlocksWorld.towers()``;
    the last column is always empty so a block can be dropped on the table.
    """

    def __init__(self, cell_size: int = 40, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def surface_size(self, world: BlocksWorld) -> Tuple[int, int]:
        n = max(world.num_blocks, 1)
        width = (n + 1) * self.cell_size * 2
        height = (n + 1) * self.cell_size
        return width, height

    def tower_surface(self, world: BlocksWorld, selected: Optional[int] = None,
                      font: Optional[pygame.font.Font] = None) -> pygame.Surface:
        width, height = self.surface_size(world)
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        table = pygame.Rect(0, height - self.cell_size, width, self.cell_size)
        pygame.draw.rect(surf, (110, 80, 50), table)
        for col, tower in enumerate(world.towers()):
            for level, block in enumerate(tower):
                rect = self._block_rect(col, level, height)
                pygame.draw.rect(surf, _color_for_block(block, block == selected), rect)
                if font is not None:
                    label = font.render(str(block), True, (10, 10, 14))
                    surf.blit(label, label.get_rect(center=rect.center))
        return surf

    def _block_rect(self, col: int, level: int, height: int) -> pygame.Rect:
        x = col * self.cell_size * 2 + self.cell_size // 2
        y = height - self.cell_size * (level + 2)
        return pygame.Rect(x, y, self.cell_size - 1, self.cell_size - 1)

    def column_at(self, x: int) -> int:
        """Tower column under surface x coordinate."""
        if x < 0:
            return -1
        return x // (self.cell_size * 2)

    def block_at(self, world: BlocksWorld, x: int, y: int) -> Optional[int]:
        """Block drawn under surface coordinates, if any."""
        _, height = self.surface_size(world)
        for col, tower in enumerate(world.towers()):
            for level, block in enumerate(tower):
                if self._block_rect(col, level, height).collidepoint(x, y):
                    return block
        return None

    def destination_at(self, world: BlocksWorld, x: int) -> Optional[int]:
        """Top block of the clicked column, or 0 (table) for an empty column."""
        col = self.column_at(x)
        if col < 0:
            return None
        towers = world.towers()
        if col < len(towers):
            return towers[col][-1]
        return 0

    def draw(self, screen: pygame.Surface, world: BlocksWorld, selected: Optional[int] = None,
             font: Optional[pygame.font.Font] = None) -> None:
        surf = self.tower_surface(world, selected, font)
        screen.fill((10, 10, 14))
        screen.blit(surf, (self.margin, self.margin))
