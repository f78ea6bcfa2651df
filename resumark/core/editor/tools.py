"""
Tool modes and the pointer contract of each tool.

Every tool receives pointer events already converted to unscaled document
coordinates by the session. A "click" is delivered after press/release
when the pointer barely moved.
"""
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from ..geometry import Rect

if TYPE_CHECKING:
    from .session import EditorSession


class ToolMode(Enum):
    SELECT = "select"
    PLACE_TEXT = "text"
    DRAW_HIGHLIGHT = "highlight"


class Tool:
    """Base tool: ignores every pointer event."""

    mode: ToolMode
    cursor: str = "arrow"

    def __init__(self, session: 'EditorSession'):
        self.session = session

    def on_press(self, x: float, y: float) -> None:
        pass

    def on_move(self, x: float, y: float) -> None:
        pass

    def on_release(self, x: float, y: float) -> None:
        pass

    def on_click(self, x: float, y: float) -> None:
        pass

    def cancel(self) -> None:
        """Abandon any gesture in progress."""

    def _select_hit(self, x: float, y: float) -> bool:
        """Select the annotation under the point and fall back to Select."""
        hit = self.session.annotation_at(x, y)
        if hit is None:
            return False
        self.session.set_tool(ToolMode.SELECT)
        self.session.select(hit.id)
        return True


class SelectTool(Tool):
    """Clicking an annotation selects it, clicking empty canvas clears."""

    mode = ToolMode.SELECT

    def on_click(self, x: float, y: float) -> None:
        hit = self.session.annotation_at(x, y)
        self.session.select(hit.id if hit else None)


class PlaceTextTool(Tool):
    """One-shot text placement: a click drops a label and returns to Select."""

    mode = ToolMode.PLACE_TEXT
    cursor = "text"

    def on_click(self, x: float, y: float) -> None:
        if self._select_hit(x, y):
            return
        # create_text selects the new label and switches back to Select
        self.session.create_text(self.session.current_page, x, y)


class HighlightTool(Tool):
    """Press-drag-release draws a highlight; the tool stays active."""

    mode = ToolMode.DRAW_HIGHLIGHT
    cursor = "crosshair"

    def __init__(self, session: 'EditorSession'):
        super().__init__(session)
        self.drag_start: Optional[Tuple[float, float]] = None
        self.drag_end: Optional[Tuple[float, float]] = None

    @property
    def is_drawing(self) -> bool:
        return self.drag_start is not None

    def on_press(self, x: float, y: float) -> None:
        self.drag_start = (x, y)
        self.drag_end = (x, y)

    def on_move(self, x: float, y: float) -> None:
        if self.is_drawing:
            self.drag_end = (x, y)

    def on_release(self, x: float, y: float) -> None:
        if not self.is_drawing:
            return
        start = self.drag_start
        self.cancel()
        self.session.create_highlight_from_drag(start, (x, y))

    def on_click(self, x: float, y: float) -> None:
        self._select_hit(x, y)

    def cancel(self) -> None:
        self.drag_start = None
        self.drag_end = None

    def preview_rect(self) -> Optional[Rect]:
        """Rectangle of the drag in progress, for rubber-band painting."""
        if self.drag_start is None or self.drag_end is None:
            return None
        return Rect.from_points(self.drag_start, self.drag_end)
