"""
Controller for managing annotation editing operations.
"""
import logging
from typing import Callable, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from ..core.annotations.models import Annotation
from ..core.editor import EditorSession, ToolMode
from ..core.export.save_worker import SaveWorker

log = logging.getLogger(__name__)


class EditorController(QObject):
    """Wraps an EditorSession and announces its changes through signals."""

    # Signals
    annotations_changed = pyqtSignal()  # Emitted when the annotation list changes
    selection_changed = pyqtSignal(object)  # Selected annotation or None
    tool_changed = pyqtSignal(object)  # ToolMode
    page_changed = pyqtSignal(int)
    zoom_changed = pyqtSignal(float)
    history_changed = pyqtSignal(bool, bool)  # can_undo, can_redo
    save_started = pyqtSignal()
    save_finished = pyqtSignal(bool, str)  # success, message

    def __init__(self, session: EditorSession, parent: QObject = None):
        super().__init__(parent)
        self.session = session
        self.save_worker: Optional[SaveWorker] = None
        self._pending_save: Optional[List[Annotation]] = None

    def _snapshot(self):
        return (
            self.session.annotations,
            self.session.selected_id,
            self.session.tool,
            self.session.current_page,
            self.session.scale,
            self.session.can_undo(),
            self.session.can_redo(),
        )

    def _apply(self, operation: Callable, *args):
        """
        Run a session operation and emit a signal for each thing it changed.

        Returns:
            Whatever the session operation returned
        """
        before = self._snapshot()
        result = operation(*args)
        after = self._snapshot()

        annotations, selected, tool, page, scale, can_undo, can_redo = after
        if before[0] != annotations:
            self.annotations_changed.emit()
        if before[1] != selected:
            self.selection_changed.emit(self.session.selected_annotation)
        if before[2] != tool:
            self.tool_changed.emit(tool)
        if before[3] != page:
            self.page_changed.emit(page)
        if before[4] != scale:
            self.zoom_changed.emit(scale)
        if before[5:] != after[5:]:
            self.history_changed.emit(can_undo, can_redo)
        return result

    # Tool mode, page and zoom

    def set_tool(self, mode: ToolMode) -> None:
        self._apply(self.session.set_tool, mode)

    def set_page(self, page: int) -> bool:
        return self._apply(self.session.set_page, page)

    def next_page(self) -> bool:
        return self._apply(self.session.next_page)

    def previous_page(self) -> bool:
        return self._apply(self.session.previous_page)

    def zoom_in(self) -> float:
        return self._apply(self.session.zoom_in)

    def zoom_out(self) -> float:
        return self._apply(self.session.zoom_out)

    def set_scale(self, scale: float) -> float:
        return self._apply(self.session.set_scale, scale)

    # Pointer input

    def press(self, x: float, y: float) -> None:
        self._apply(self.session.press, x, y)

    def move(self, x: float, y: float) -> None:
        # Only the drag preview changes, the canvas repaints itself
        self.session.move(x, y)

    def release(self, x: float, y: float) -> None:
        self._apply(self.session.release, x, y)

    def click(self, x: float, y: float) -> None:
        self._apply(self.session.click, x, y)

    # Annotation operations

    def select(self, annotation_id: Optional[str]) -> bool:
        return self._apply(self.session.select, annotation_id)

    def update_selected_text(self, text: str) -> bool:
        return self._apply(self.session.update_selected_text, text)

    def commit_text_edit(self) -> bool:
        return self._apply(self.session.commit_text_edit)

    def delete_selected(self) -> bool:
        return self._apply(self.session.delete_selected)

    def undo(self) -> bool:
        """
        Undo the last annotation action.

        Returns:
            True if undo was successful
        """
        return self._apply(self.session.undo)

    def redo(self) -> bool:
        """
        Redo the last undone annotation action.

        Returns:
            True if redo was successful
        """
        return self._apply(self.session.redo)

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.session.can_undo()

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.session.can_redo()

    # Saving

    @property
    def is_saving(self) -> bool:
        return self.session.is_saving

    def save(self, sink: Callable[[List[Annotation]], object]) -> bool:
        """
        Hand the annotations to a sink on a background thread.

        Args:
            sink: Persistence sink to call with the annotation list

        Returns:
            True if a save was started
        """
        annotations = self._apply(self.session.begin_save)
        if annotations is None:
            return False

        self._pending_save = annotations
        self.save_worker = SaveWorker(sink, annotations)
        self.save_worker.save_done.connect(self._on_save_finished)
        self.save_started.emit()
        self.save_worker.start()
        return True

    def _on_save_finished(self, success: bool, message: str) -> None:
        """Handle the worker's answer and unfreeze the session."""
        self.session.finish_save(success, message, self._pending_save)
        self._pending_save = None

        if self.save_worker is not None:
            # save_done is emitted before run() returns, join the thread before
            # dropping the last reference to it
            self.save_worker.wait()
            self.save_worker.deleteLater()
            self.save_worker = None

        log.info("Save finished: %s (%s)", "ok" if success else "failed", message)
        self.history_changed.emit(self.can_undo(), self.can_redo())
        self.save_finished.emit(success, message)
