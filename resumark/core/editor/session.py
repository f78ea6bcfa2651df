"""
Editor session: the single owner of annotation data, tool mode, page,
zoom and selection for one open document.

Nothing here touches Qt. The controller layer wraps a session and turns
its results into signals.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ...config import EditorConfig
from ..annotations.manager import AnnotationManager
from ..annotations.models import Annotation, Color, TextAnnotation, parse_color
from ..exceptions import SaveError
from ..geometry import Rect, ViewTransform
from .tools import HighlightTool, PlaceTextTool, SelectTool, Tool, ToolMode

log = logging.getLogger(__name__)

# Anything accepting the finalized list; False or an exception means failure
PersistenceSink = Callable[[List[Annotation]], Any]


@dataclass
class EditorState:
    """Serializable, non-persisted state of an editing session."""
    tool: ToolMode = ToolMode.SELECT
    page: int = 0
    page_count: int = 1
    scale: float = 1.0
    selected_id: Optional[str] = None
    history_index: int = 0
    is_saving: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['tool'] = self.tool.value
        return data


class EditorSession:
    """
    Annotation editor state machine.

    All mutation goes through the methods below. Operations that cannot
    apply (unknown ids, degenerate geometry, history boundaries, a save in
    flight) are silent no-ops reported through the return value.
    """

    def __init__(self, page_count: int = 1, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()
        self.manager = AnnotationManager(
            min_highlight_size=self.config.min_highlight_size,
            history_limit=self.config.history_limit
        )
        self.state = EditorState(
            page_count=max(0, page_count),
            scale=self.config.clamp_scale(self.config.default_scale)
        )
        self.transform = ViewTransform(scale=self.state.scale)

        # Options applied to newly created annotations
        self.text_value: str = ""
        self.font_size: float = self.config.default_font_size
        self.text_color: Color = self.config.default_text_color
        self.highlight_color: Color = self.config.default_highlight_color

        self.last_save_error: Optional[str] = None

        self._tools: Dict[ToolMode, Tool] = {
            ToolMode.SELECT: SelectTool(self),
            ToolMode.PLACE_TEXT: PlaceTextTool(self),
            ToolMode.DRAW_HIGHLIGHT: HighlightTool(self),
        }

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def tool(self) -> ToolMode:
        return self.state.tool

    @property
    def active_tool(self) -> Tool:
        return self._tools[self.state.tool]

    @property
    def current_page(self) -> int:
        return self.state.page

    @property
    def page_count(self) -> int:
        return self.state.page_count

    @property
    def scale(self) -> float:
        return self.state.scale

    @property
    def selected_id(self) -> Optional[str]:
        return self.state.selected_id

    @property
    def is_saving(self) -> bool:
        return self.state.is_saving

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return tuple(self.manager.annotations)

    @property
    def selected_annotation(self) -> Optional[Annotation]:
        return self.manager.get(self.state.selected_id)

    @property
    def has_unsaved_changes(self) -> bool:
        return self.manager.has_unsaved_changes

    def visible_annotations(self) -> List[Annotation]:
        """Annotations anchored to the current page, in paint order."""
        return self.manager.get_annotations_for_page(self.state.page)

    def annotation_at(self, x: float, y: float) -> Optional[Annotation]:
        """Topmost annotation on the current page under a document point."""
        return self.manager.get_annotation_at_point(self.state.page, x, y)

    def can_undo(self) -> bool:
        return not self.state.is_saving and self.manager.can_undo()

    def can_redo(self) -> bool:
        return not self.state.is_saving and self.manager.can_redo()

    def _sync_state(self) -> None:
        self.state.history_index = self.manager.history.index
        if self.manager.get(self.state.selected_id) is None:
            self.state.selected_id = None

    def _blocked(self, operation: str) -> bool:
        if self.state.is_saving:
            log.debug("Ignoring %s while a save is pending", operation)
            return True
        return False

    # ------------------------------------------------------------------
    # Tool mode, page and zoom
    # ------------------------------------------------------------------

    def set_tool(self, mode: ToolMode) -> None:
        """Switch the active tool, abandoning any gesture in progress."""
        if mode == self.state.tool:
            return
        self.active_tool.cancel()
        self.commit_text_edit()
        self.state.tool = mode

    def set_page_count(self, page_count: int) -> None:
        """Update the page count reported by the document source."""
        self.state.page_count = max(0, page_count)
        if self.state.page_count == 0:
            self.active_tool.cancel()
            self.state.page = 0
            self.clear_selection()
        elif self.state.page >= self.state.page_count:
            self.set_page(self.state.page_count - 1)

    def set_page(self, page: int) -> bool:
        """
        Change the displayed page.

        Args:
            page: 0-based page index reported by the document source

        Returns:
            True if the page changed
        """
        if not 0 <= page < self.state.page_count or page == self.state.page:
            return False
        self.active_tool.cancel()
        self.commit_text_edit()
        self.state.page = page
        self.state.selected_id = None
        return True

    def next_page(self) -> bool:
        return self.set_page(self.state.page + 1)

    def previous_page(self) -> bool:
        return self.set_page(self.state.page - 1)

    def set_scale(self, scale: float) -> float:
        """
        Set the zoom scale within the configured bounds.

        Annotation data is untouched; only the rendering transform changes.

        Returns:
            The scale actually applied
        """
        self.state.scale = self.config.clamp_scale(scale)
        self.transform.scale = self.state.scale
        return self.state.scale

    def zoom_in(self) -> float:
        return self.set_scale(self.state.scale + self.config.zoom_step)

    def zoom_out(self) -> float:
        return self.set_scale(self.state.scale - self.config.zoom_step)

    def set_origin(self, x: float, y: float) -> None:
        """Set the screen position of the page's top-left corner."""
        self.transform.origin_x = x
        self.transform.origin_y = y

    # ------------------------------------------------------------------
    # Tool options
    # ------------------------------------------------------------------

    def set_text_options(self, text: Optional[str] = None,
                         font_size: Optional[float] = None,
                         color: Optional[Any] = None) -> None:
        """Set the text, size and color used for the next text label."""
        if text is not None:
            self.text_value = text
        if font_size is not None:
            self.font_size = self.config.clamp_font_size(font_size)
        if color is not None:
            self.text_color = parse_color(color)

    def set_highlight_color(self, color: Any) -> None:
        self.highlight_color = parse_color(color)

    # ------------------------------------------------------------------
    # Pointer input (screen coordinates)
    # ------------------------------------------------------------------

    def press(self, screen_x: float, screen_y: float) -> None:
        self.active_tool.on_press(*self.transform.to_document(screen_x, screen_y))

    def move(self, screen_x: float, screen_y: float) -> None:
        self.active_tool.on_move(*self.transform.to_document(screen_x, screen_y))

    def release(self, screen_x: float, screen_y: float) -> None:
        self.active_tool.on_release(*self.transform.to_document(screen_x, screen_y))

    def click(self, screen_x: float, screen_y: float) -> None:
        self.active_tool.on_click(*self.transform.to_document(screen_x, screen_y))

    def drag_preview(self) -> Optional[Rect]:
        """Document-space rectangle of a highlight drag in progress."""
        tool = self.active_tool
        if isinstance(tool, HighlightTool):
            return tool.preview_rect()
        return None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, annotation_id: Optional[str]) -> bool:
        """
        Select an annotation on the current page, or clear with None.

        Returns:
            True if the selection now matches the request
        """
        if annotation_id is None:
            self.clear_selection()
            return True

        annotation = self.manager.get(annotation_id)
        if annotation is None or annotation.page != self.state.page:
            return False
        if annotation_id != self.state.selected_id:
            self.commit_text_edit()
        self.state.selected_id = annotation_id
        return True

    def clear_selection(self) -> None:
        if self.state.selected_id is not None:
            self.commit_text_edit()
        self.state.selected_id = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_text(self, page: int, x: float, y: float, text: Optional[str] = None,
                    font_size: Optional[float] = None,
                    color: Optional[Any] = None) -> Optional[str]:
        """
        Place a text label and return to the Select tool.

        The new label is selected when it lands on the displayed page.

        Args:
            page: 0-based page index, must be valid for the document
            x, y: Unscaled document coordinates
            text: Display string, defaults to the current tool text
            font_size: Unscaled size, defaults to the current tool size
            color: Color value, defaults to the current tool color

        Returns:
            The new annotation id, or None if nothing was created
        """
        if self._blocked("create_text") or not 0 <= page < self.state.page_count:
            return None

        if text is None:
            text = self.text_value or self.config.default_text
        font_size = self.config.clamp_font_size(
            self.font_size if font_size is None else font_size)
        color = self.text_color if color is None else parse_color(color)

        annotation_id = self.manager.create_text(page, x, y, text, font_size, color)
        if annotation_id is not None:
            if page == self.state.page:
                self.state.selected_id = annotation_id
            if self.state.tool == ToolMode.PLACE_TEXT:
                self.state.tool = ToolMode.SELECT
        self._sync_state()
        return annotation_id

    def create_highlight(self, page: int, x: float, y: float, width: float,
                         height: float, color: Optional[Any] = None) -> Optional[str]:
        """
        Add a highlight rectangle unless it is degenerate.

        Returns:
            The new annotation id, or None for a no-op
        """
        if self._blocked("create_highlight") or not 0 <= page < self.state.page_count:
            return None

        color = self.highlight_color if color is None else parse_color(color)
        annotation_id = self.manager.create_highlight(page, x, y, width, height, color)
        self._sync_state()
        return annotation_id

    def create_highlight_from_drag(self, start: Tuple[float, float],
                                   end: Tuple[float, float]) -> Optional[str]:
        """Create a highlight on the current page from two drag corners."""
        rect = Rect.from_points(start, end)
        return self.create_highlight(self.state.page, rect.x0, rect.y0,
                                     rect.width, rect.height)

    def update_text(self, annotation_id: str, text: str) -> bool:
        """
        Edit a text label in place.

        The change is not a history step of its own; it is recorded as one
        entry when the edit is committed.
        """
        if self._blocked("update_text"):
            return False
        return self.manager.update_text(annotation_id, text)

    def update_selected_text(self, text: str) -> bool:
        if self.state.selected_id is None:
            return False
        return self.update_text(self.state.selected_id, text)

    def commit_text_edit(self) -> bool:
        """Record a pending text edit as a single history entry."""
        committed = self.manager.commit_text_edit()
        self._sync_state()
        return committed

    def delete(self, annotation_id: Optional[str]) -> bool:
        """
        Remove an annotation, clearing the selection if it was selected.

        Returns:
            True if an annotation was removed
        """
        if annotation_id is None or self._blocked("delete"):
            return False
        removed = self.manager.delete(annotation_id)
        if removed and self.state.selected_id == annotation_id:
            self.state.selected_id = None
        self._sync_state()
        return removed

    def delete_selected(self) -> bool:
        return self.delete(self.state.selected_id)

    def undo(self) -> bool:
        if self._blocked("undo"):
            return False
        changed = self.manager.undo()
        self._sync_state()
        return changed

    def redo(self) -> bool:
        if self._blocked("redo"):
            return False
        changed = self.manager.redo()
        self._sync_state()
        return changed

    def selected_text(self) -> Optional[str]:
        """Text of the selected label, if a text label is selected."""
        annotation = self.selected_annotation
        if isinstance(annotation, TextAnnotation):
            return annotation.text
        return None

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def begin_save(self) -> Optional[List[Annotation]]:
        """
        Freeze the session for a save.

        Returns:
            The list to hand to the sink, or None if a save is already pending
        """
        if self.state.is_saving:
            return None
        self.active_tool.cancel()
        self.commit_text_edit()
        self.state.is_saving = True
        return list(self.manager.annotations)

    def finish_save(self, success: bool, message: str = "",
                    saved: Optional[Sequence[Annotation]] = None) -> None:
        """
        Unfreeze the session after the sink has answered.

        Args:
            success: Whether the sink accepted the list
            message: Error text on failure
            saved: The list that was handed to the sink
        """
        self.state.is_saving = False
        if success:
            self.manager.mark_saved(saved)
            self.last_save_error = None
        else:
            self.last_save_error = message or "Save failed"
            log.warning("Saving annotations failed: %s", self.last_save_error)

    def save(self, sink: PersistenceSink) -> None:
        """
        Hand the annotation list to a sink and wait for it.

        Raises:
            SaveError: If the sink returns False or raises; the session keeps
                its annotations and history so the save can be retried
        """
        annotations = self.begin_save()
        if annotations is None:
            raise SaveError("A save is already in progress")

        try:
            result = sink(annotations)
        except Exception as e:
            self.finish_save(False, str(e))
            raise SaveError(str(e)) from e

        if result is False:
            self.finish_save(False, "The annotations could not be stored")
            raise SaveError(self.last_save_error)

        self.finish_save(True, saved=annotations)
