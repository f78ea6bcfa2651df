from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QButtonGroup, QFrame, QHBoxLayout, QLabel, QToolButton, QWidget
)

from ...core.editor import ToolMode

TOOL_BUTTONS = [
    (ToolMode.SELECT, "Select", "Select (V)"),
    (ToolMode.PLACE_TEXT, "Text", "Add Text (T)"),
    (ToolMode.DRAW_HIGHLIGHT, "Highlight", "Highlight (H)"),
]


class EditorToolbar(QFrame):
    """Main editor toolbar: tools, history, zoom, paging and actions."""

    tool_requested = pyqtSignal(object)  # ToolMode
    undo_requested = pyqtSignal()
    redo_requested = pyqtSignal()
    zoom_in_requested = pyqtSignal()
    zoom_out_requested = pyqtSignal()
    previous_page_requested = pyqtSignal()
    next_page_requested = pyqtSignal()
    delete_requested = pyqtSignal()
    save_requested = pyqtSignal()
    export_requested = pyqtSignal()
    close_requested = pyqtSignal()

    def __init__(self, title: str = "", parent=None):
        super().__init__(parent)
        self.setObjectName("EditorToolbar")
        self.tool_buttons = {}
        self.setup_ui(title)

    def _button(self, text: str, tooltip: str, signal=None) -> QToolButton:
        btn = QToolButton(self)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.setFixedHeight(32)
        if signal is not None:
            btn.clicked.connect(signal.emit)
        return btn

    def _separator(self) -> QWidget:
        line = QFrame(self)
        line.setFrameShape(QFrame.VLine)
        line.setFrameShadow(QFrame.Sunken)
        return line

    def setup_ui(self, title: str):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.setSpacing(6)

        self.title_label = QLabel(title, self)
        self.title_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(self.title_label)
        layout.addStretch()

        # Tool buttons, one checked at a time
        self.tool_group = QButtonGroup(self)
        self.tool_group.setExclusive(True)
        for mode, text, tooltip in TOOL_BUTTONS:
            btn = self._button(text, tooltip)
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked, m=mode: self.tool_requested.emit(m))
            self.tool_group.addButton(btn)
            self.tool_buttons[mode] = btn
            layout.addWidget(btn)
        self.tool_buttons[ToolMode.SELECT].setChecked(True)

        layout.addWidget(self._separator())

        self.undo_button = self._button("Undo", "Undo (Ctrl+Z)", self.undo_requested)
        self.redo_button = self._button("Redo", "Redo (Ctrl+Y)", self.redo_requested)
        self.undo_button.setEnabled(False)
        self.redo_button.setEnabled(False)
        layout.addWidget(self.undo_button)
        layout.addWidget(self.redo_button)

        layout.addWidget(self._separator())

        self.zoom_out_button = self._button("-", "Zoom Out", self.zoom_out_requested)
        self.zoom_label = QLabel("100%", self)
        self.zoom_label.setFixedWidth(44)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        self.zoom_in_button = self._button("+", "Zoom In", self.zoom_in_requested)
        layout.addWidget(self.zoom_out_button)
        layout.addWidget(self.zoom_label)
        layout.addWidget(self.zoom_in_button)

        layout.addWidget(self._separator())

        self.prev_button = self._button("<", "Previous Page (PgUp)",
                                        self.previous_page_requested)
        self.page_label = QLabel("1 / 1", self)
        self.page_label.setAlignment(Qt.AlignCenter)
        self.next_button = self._button(">", "Next Page (PgDown)", self.next_page_requested)
        layout.addWidget(self.prev_button)
        layout.addWidget(self.page_label)
        layout.addWidget(self.next_button)

        layout.addStretch()

        self.delete_button = self._button("Delete", "Delete selected annotation",
                                          self.delete_requested)
        self.delete_button.setStyleSheet("QToolButton { color: #dc2626; }")
        self.delete_button.hide()
        layout.addWidget(self.delete_button)

        self.save_button = self._button("Save", "Save annotations (Ctrl+S)",
                                        self.save_requested)
        self.export_button = self._button("Export PDF", "Export an annotated PDF copy",
                                          self.export_requested)
        self.close_button = self._button("✕", "Close editor", self.close_requested)
        layout.addWidget(self.save_button)
        layout.addWidget(self.export_button)
        layout.addWidget(self.close_button)

    # Slots

    def set_tool(self, mode: ToolMode):
        self.tool_buttons[mode].setChecked(True)

    def set_history(self, can_undo: bool, can_redo: bool):
        self.undo_button.setEnabled(can_undo)
        self.redo_button.setEnabled(can_redo)

    def set_zoom(self, scale: float):
        self.zoom_label.setText(f"{round(scale * 100)}%")

    def set_page(self, page: int, page_count: int):
        shown = page + 1 if page_count else 0
        self.page_label.setText(f"{shown} / {page_count}")
        self.prev_button.setEnabled(page > 0)
        self.next_button.setEnabled(page < page_count - 1)

    def set_selection(self, annotation):
        self.delete_button.setVisible(annotation is not None)

    def set_saving(self, saving: bool):
        """Show the busy state while a save is pending."""
        self.save_button.setText("Saving..." if saving else "Save")
        for btn in (self.save_button, self.export_button, self.delete_button):
            btn.setEnabled(not saving)

    def set_document_available(self, available: bool):
        """Disable everything but Close when there is no document to annotate."""
        for btn in self.findChildren(QToolButton):
            if btn is not self.close_button:
                btn.setEnabled(available)
