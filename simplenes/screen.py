"""Frame buffer of scaled virtual pixels that can be blitted onto a surface."""

from __future__ import annotations

from typing import Protocol

Color = tuple[int, int, int, int]


class Surface(Protocol):
    def fill(self, color: Color, rect: tuple[int, int, int, int]) -> object: ...


class VirtualScreen:
    """A grid of virtual pixels, each drawn as a square of pixel_size real pixels."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.pixel_size = 1.0
        self._pixels: list[Color] = []

    def create(self, width: int, height: int, pixel_size: float, color: Color) -> None:
        """Allocate a width x height screen filled with one color."""
        self.width = width
        self.height = height
        self.pixel_size = pixel_size
        self._pixels = [tuple(color)] * (width * height)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Set one virtual pixel; positions beyond the buffer are ignored."""
        index = x * self.height + y
        if x < 0 or y < 0 or index >= len(self._pixels):
            return
        self._pixels[index] = tuple(color)

    def pixel(self, x: int, y: int) -> Color:
        """Return the color of one virtual pixel."""
        index = x * self.height + y
        if x < 0 or y < 0 or index >= len(self._pixels):
            raise IndexError(f"pixel ({x}, {y}) is outside the screen")
        return self._pixels[index]

    def draw(self, surface: Surface) -> None:
        """Paint every virtual pixel onto a surface providing fill(color, rect)."""
        size = self.pixel_size
        edges_x = [int(x * size) for x in range(self.width + 1)]
        edges_y = [int(y * size) for y in range(self.height + 1)]
        pixels = iter(self._pixels)
        for left, right in zip(edges_x, edges_x[1:]):
            for top, bottom in zip(edges_y, edges_y[1:]):
                surface.fill(next(pixels), (left, top, right - left, bottom - top))