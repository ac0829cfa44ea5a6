from __future__ import annotations

from typing import Protocol, Tuple

import numpy as np
import pygame

from snakegrid.game import Color


class Canvas(Protocol):
    def clear(self, color: Color) -> None: ...
    def draw_square(self, x: float, y: float, side: float, color: Color) -> None: ...


def to_rgba255(color: Color) -> Tuple[int, int, int, int]:
    r, g, b, a = (min(max(c, 0.0), 1.0) for c in color)
    return round(r * 255), round(g * 255), round(b * 255), round(a * 255)


class PygameCanvas:
    """Draws onto a pygame Surface, either the display or an offscreen one."""

    def __init__(self, surface: "pygame.Surface") -> None:
        self.surface = surface

    def clear(self, color: Color) -> None:
        self.surface.fill(to_rgba255(color))

    def draw_square(self, x: float, y: float, side: float, color: Color) -> None:
        rect = pygame.Rect(int(x), int(y), int(side), int(side))
        pygame.draw.rect(self.surface, to_rgba255(color), rect)


class ArrayCanvas:
    """Offscreen RGBA framebuffer of shape (height, width, 4)."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.float32)

    def clear(self, color: Color) -> None:
        self.pixels[:, :] = color

    def draw_square(self, x: float, y: float, side: float, color: Color) -> None:
        # Squares outside the buffer are clipped, the grid itself is unbounded.
        x0 = max(int(x), 0)
        y0 = max(int(y), 0)
        x1 = min(int(x + side), self.width)
        y1 = min(int(y + side), self.height)
        if x0 >= x1 or y0 >= y1:
            return
        self.pixels[y0:y1, x0:x1] = color

    def pixel(self, x: int, y: int) -> Color:
        r, g, b, a = self.pixels[y, x]
        return float(r), float(g), float(b), float(a)
