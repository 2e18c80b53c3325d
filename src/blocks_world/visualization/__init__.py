"""pygame views of the blocks world."""

from .renderer import Renderer

__all__ = ["Renderer"]
