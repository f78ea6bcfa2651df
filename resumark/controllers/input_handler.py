import logging

import pyperclip
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence

from ..core.editor import ToolMode

log = logging.getLogger(__name__)

TOOL_KEYS = {
    Qt.Key_V: ToolMode.SELECT,
    Qt.Key_T: ToolMode.PLACE_TEXT,
    Qt.Key_H: ToolMode.DRAW_HIGHLIGHT,
}


class UserInputHandler:
    """
    Handles keyboard shortcuts for the annotation editor window.
    """
    def __init__(self, editor_window):
        """
        Initializes the handler with a reference to the editor window.

        Args:
            editor_window (EditorWindow): The window owning the controller.
        """
        self.editor_window = editor_window

    @property
    def controller(self):
        return self.editor_window.controller

    def handle_key_press(self, event):
        """
        Handles key press events for the editor window.

        Returns:
            bool: True if the event was consumed.
        """
        controller = self.controller
        modifiers = event.modifiers()

        if event.matches(QKeySequence.Undo):
            controller.undo()
        elif event.matches(QKeySequence.Redo) or (
                modifiers & Qt.ControlModifier and event.key() == Qt.Key_Y):
            controller.redo()
        elif event.matches(QKeySequence.Save):
            self.editor_window.save_annotations()
        elif event.matches(QKeySequence.Copy):
            self.copy_selected_text()
        elif event.matches(QKeySequence.ZoomIn) or (
                modifiers & Qt.ControlModifier and event.key() == Qt.Key_Equal):
            controller.zoom_in()
        elif event.matches(QKeySequence.ZoomOut):
            controller.zoom_out()
        elif event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            controller.delete_selected()
        elif event.key() == Qt.Key_PageDown:
            controller.next_page()
        elif event.key() == Qt.Key_PageUp:
            controller.previous_page()
        elif event.key() == Qt.Key_Escape:
            controller.set_tool(ToolMode.SELECT)
            controller.select(None)
        elif not modifiers and event.key() in TOOL_KEYS:
            controller.set_tool(TOOL_KEYS[event.key()])
        else:
            event.ignore()
            return False

        event.accept()
        return True

    def copy_selected_text(self):
        """Copy the selected text label to the clipboard."""
        text = self.controller.session.selected_text()
        if text is None:
            return False
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            log.warning("Clipboard unavailable: %s", e)
            return False
        return True
