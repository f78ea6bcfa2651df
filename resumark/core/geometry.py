"""
Coordinate transforms between screen pixels and unscaled document space,
plus the axis-aligned boxes used for hit testing.
"""
from dataclasses import dataclass
from typing import Tuple

# Approximate glyph box used for text hit testing, relative to font size
TEXT_CHAR_WIDTH = 0.6
TEXT_LINE_HEIGHT = 1.2


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle: x0, y0 (top-left) to x1, y1 (bottom-right)."""
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def contains(self, x: float, y: float) -> bool:
        """Check if a point is within the rectangle, edges included."""
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    @staticmethod
    def from_points(start: Tuple[float, float], end: Tuple[float, float]) -> 'Rect':
        """Normalised rectangle spanned by two corners given in any order."""
        return Rect(
            min(start[0], end[0]),
            min(start[1], end[1]),
            max(start[0], end[0]),
            max(start[1], end[1])
        )


def text_bounds(x: float, y: float, text: str, font_size: float) -> Rect:
    """
    Approximate the box a single line of text occupies.

    Args:
        x, y: Top-left anchor of the text
        text: Display string
        font_size: Unscaled font size

    Returns:
        Bounding rectangle in document coordinates
    """
    width = max(len(text), 1) * font_size * TEXT_CHAR_WIDTH
    return Rect(x, y, x + width, y + font_size * TEXT_LINE_HEIGHT)


@dataclass
class ViewTransform:
    """
    Maps between on-screen pixels and unscaled document coordinates.

    ``document = (screen - origin) / scale`` and the inverse for rendering.
    """
    scale: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0

    def to_document(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        """Convert a screen point to document coordinates."""
        return ((screen_x - self.origin_x) / self.scale,
                (screen_y - self.origin_y) / self.scale)

    def to_screen(self, doc_x: float, doc_y: float) -> Tuple[float, float]:
        """Convert a document point to screen coordinates."""
        return (doc_x * self.scale + self.origin_x,
                doc_y * self.scale + self.origin_y)

    def rect_to_screen(self, rect: Rect) -> Rect:
        x0, y0 = self.to_screen(rect.x0, rect.y0)
        x1, y1 = self.to_screen(rect.x1, rect.y1)
        return Rect(x0, y0, x1, y1)
