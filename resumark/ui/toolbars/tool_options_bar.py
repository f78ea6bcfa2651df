from typing import Tuple

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QColorDialog, QFrame, QHBoxLayout, QLabel, QLineEdit, QSpinBox,
    QToolButton, QVBoxLayout, QWidget
)

from ...core.annotations.models import TextAnnotation
from ...core.editor import ToolMode


class ColorButton(QToolButton):
    """Swatch button that opens a color picker."""

    color_changed = pyqtSignal(tuple)

    def __init__(self, color, title: str, parent=None):
        super().__init__(parent)
        self.current_color = tuple(color)
        self.title = title
        self.setFixedSize(28, 28)
        self.setToolTip("Choose color")
        self.clicked.connect(self._choose_color)
        self._update_color_button()

    def _choose_color(self):
        """Open color picker dialog."""
        initial_color = QColor(*self.current_color)
        color = QColorDialog.getColor(initial_color, self, self.title)

        if color.isValid():
            self.current_color = (color.red(), color.green(), color.blue())
            self._update_color_button()
            self.color_changed.emit(self.current_color)

    def _update_color_button(self):
        """Update the button to show the current color."""
        r, g, b = self.current_color
        self.setStyleSheet(f"""
            QToolButton {{
                background-color: rgb({r}, {g}, {b});
                border: 2px solid #555555;
                border-radius: 4px;
            }}
            QToolButton:hover {{
                border: 2px solid #777777;
            }}
        """)


class ToolOptionsBar(QFrame):
    """
    Option rows under the main toolbar.

    Shows the text options while placing text, the color while
    highlighting, and an inline editor when a text label is selected.
    """

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.setObjectName("ToolOptionsBar")
        self.controller = controller
        self.setup_ui()

        controller.tool_changed.connect(self._refresh)
        controller.selection_changed.connect(self._refresh)
        controller.annotations_changed.connect(self._refresh)
        self._refresh()

    @property
    def session(self):
        return self.controller.session

    def _row(self) -> Tuple[QWidget, QHBoxLayout]:
        row = QWidget(self)
        layout = QHBoxLayout(row)
        layout.setContentsMargins(10, 4, 10, 4)
        layout.setSpacing(8)
        return row, layout

    def setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        config = self.session.config

        # Text placement options
        self.text_row, layout = self._row()
        layout.addWidget(QLabel("Text:", self.text_row))
        self.text_input = QLineEdit(self.text_row)
        self.text_input.setPlaceholderText("Enter text...")
        self.text_input.textChanged.connect(
            lambda text: self.session.set_text_options(text=text))
        layout.addWidget(self.text_input)

        layout.addWidget(QLabel("Size:", self.text_row))
        self.size_spinbox = QSpinBox(self.text_row)
        self.size_spinbox.setRange(int(config.min_font_size), int(config.max_font_size))
        self.size_spinbox.setValue(int(self.session.font_size))
        self.size_spinbox.valueChanged.connect(
            lambda size: self.session.set_text_options(font_size=size))
        layout.addWidget(self.size_spinbox)

        layout.addWidget(QLabel("Color:", self.text_row))
        self.text_color_button = ColorButton(self.session.text_color, "Choose Text Color",
                                             self.text_row)
        self.text_color_button.color_changed.connect(
            lambda color: self.session.set_text_options(color=color))
        layout.addWidget(self.text_color_button)
        layout.addWidget(QLabel("Click on the page to place", self.text_row))
        layout.addStretch()
        main_layout.addWidget(self.text_row)

        # Highlight options
        self.highlight_row, layout = self._row()
        layout.addWidget(QLabel("Color:", self.highlight_row))
        self.highlight_color_button = ColorButton(
            self.session.highlight_color, "Choose Highlight Color", self.highlight_row)
        self.highlight_color_button.color_changed.connect(self.session.set_highlight_color)
        layout.addWidget(self.highlight_color_button)
        layout.addWidget(QLabel("Drag to highlight", self.highlight_row))
        layout.addStretch()
        main_layout.addWidget(self.highlight_row)

        # Inline editor for the selected text label
        self.edit_row, layout = self._row()
        layout.addWidget(QLabel("Edit:", self.edit_row))
        self.edit_input = QLineEdit(self.edit_row)
        self.edit_input.textEdited.connect(self.controller.update_selected_text)
        self.edit_input.editingFinished.connect(self.controller.commit_text_edit)
        layout.addWidget(self.edit_input)
        layout.addStretch()
        main_layout.addWidget(self.edit_row)

    def _refresh(self, *_):
        tool = self.session.tool
        self.text_row.setVisible(tool == ToolMode.PLACE_TEXT)
        self.highlight_row.setVisible(tool == ToolMode.DRAW_HIGHLIGHT)

        selected = self.session.selected_annotation
        is_text = isinstance(selected, TextAnnotation)
        self.edit_row.setVisible(is_text)
        if is_text and self.edit_input.text() != selected.text:
            self.edit_input.setText(selected.text)
