"""Pygame front end: renderer and keyboard play loop."""

from .renderer import Renderer

__all__ = ["Renderer"]
