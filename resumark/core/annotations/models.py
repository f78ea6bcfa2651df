"""
Annotation records placed over a paginated document.

All coordinates are unscaled document coordinates (100% zoom, top-left
origin). Records are frozen so history snapshots can share them safely.
"""
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Tuple, Union

from ..geometry import Rect, text_bounds

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
YELLOW: Color = (255, 255, 0)


class AnnotationType(Enum):
    TEXT = "text"
    HIGHLIGHT = "highlight"


def parse_color(value: Union[str, Tuple[int, ...], list]) -> Color:
    """
    Normalise a color value to an RGB tuple.

    Args:
        value: Either a ``#rrggbb`` / ``#rgb`` string or a sequence of
            three 0-255 channels

    Returns:
        RGB tuple

    Raises:
        ValueError: If the value cannot be interpreted as a color
    """
    if isinstance(value, str):
        hex_value = value.strip().lstrip('#')
        if len(hex_value) == 3:
            hex_value = ''.join(c * 2 for c in hex_value)
        if len(hex_value) != 6:
            raise ValueError(f"Invalid color: {value!r}")
        try:
            return tuple(int(hex_value[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"Invalid color: {value!r}") from None

    channels = tuple(int(c) for c in value)
    if len(channels) != 3 or any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Invalid color: {value!r}")
    return channels


def color_to_hex(color: Color) -> str:
    """Format an RGB tuple as ``#rrggbb``."""
    return '#{:02x}{:02x}{:02x}'.format(*color)


@dataclass(frozen=True)
class Annotation(ABC):
    """Fields shared by every annotation variant."""
    id: str
    page: int  # 0-based page index, fixed for the annotation's lifetime
    x: float
    y: float

    @property
    @abstractmethod
    def annotation_type(self) -> AnnotationType:
        """Variant tag written as ``type`` when serializing."""

    @abstractmethod
    def bounds(self) -> Rect:
        """Bounding box in unscaled document coordinates."""

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a document-space point falls within this annotation."""
        return self.bounds().contains(x, y)

    def to_dict(self) -> Dict[str, Any]:
        """Convert annotation to a dictionary for serialization."""
        data = asdict(self)
        data['type'] = self.annotation_type.value
        data['color'] = list(data['color'])
        return data


@dataclass(frozen=True)
class TextAnnotation(Annotation):
    """A free-standing text label."""
    text: str = "New Text"
    font_size: float = 14.0
    color: Color = field(default=BLACK)

    @property
    def annotation_type(self) -> AnnotationType:
        return AnnotationType.TEXT

    def bounds(self) -> Rect:
        # Glyph metrics are not modelled, the box is sized from font_size
        return text_bounds(self.x, self.y, self.text, self.font_size)

    def with_text(self, text: str) -> 'TextAnnotation':
        return replace(self, text=text)


@dataclass(frozen=True)
class HighlightAnnotation(Annotation):
    """A translucent rectangle."""
    width: float = 0.0
    height: float = 0.0
    color: Color = field(default=YELLOW)

    @property
    def annotation_type(self) -> AnnotationType:
        return AnnotationType.HIGHLIGHT

    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.x + self.width, self.y + self.height)


def annotation_from_dict(data: Dict[str, Any]) -> Annotation:
    """
    Create an annotation from a dictionary produced by ``to_dict``.

    Args:
        data: Serialized annotation with a ``type`` discriminant

    Returns:
        The matching annotation record

    Raises:
        ValueError: If the type is unknown
    """
    annotation_type = AnnotationType(data['type'])
    common = {
        'id': data['id'],
        'page': int(data['page']),
        'x': float(data['x']),
        'y': float(data['y']),
    }

    if annotation_type == AnnotationType.TEXT:
        return TextAnnotation(
            text=data.get('text', ''),
            font_size=float(data.get('font_size', 14.0)),
            color=parse_color(data.get('color', BLACK)),
            **common
        )

    return HighlightAnnotation(
        width=float(data['width']),
        height=float(data['height']),
        color=parse_color(data.get('color', YELLOW)),
        **common
    )
