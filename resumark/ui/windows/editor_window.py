import logging
import os
from typing import Callable, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QApplication, QFileDialog, QMainWindow, QMessageBox, QScrollArea,
    QVBoxLayout, QWidget
)

from ...config import EditorConfig
from ...controllers import EditorController, UserInputHandler
from ...core.annotations.persistence import JsonAnnotationSink
from ...core.document import PDFDocumentReader, PdfExportSink
from ...core.editor import EditorSession
from ...utils.warning_manager import warning_manager
from ..toolbars import EditorToolbar, ToolOptionsBar
from ..widgets import AnnotationCanvas

log = logging.getLogger(__name__)


class EditorWindow(QMainWindow):
    """
    Full-window annotation editor for one PDF.

    Closing discards everything that was not saved. A save runs in the
    background; the window closes when it succeeds and stays open with all
    annotations intact when it fails.
    """

    def __init__(self, file_path: str, config: Optional[EditorConfig] = None,
                 sink: Optional[Callable] = None):
        super().__init__()
        self.file_path = file_path
        self.setWindowTitle(f"Resumark - {os.path.basename(file_path)}")

        self.pdf_reader = PDFDocumentReader()
        self.loaded, page_count = self.pdf_reader.load_pdf(file_path)

        self.session = EditorSession(page_count=page_count, config=config)
        self.controller = EditorController(self.session, self)
        self.input_handler = UserInputHandler(self)
        self.sink = sink or JsonAnnotationSink(file_path)
        self._last_sink = self.sink
        self._close_on_success = False
        self._close_after_save = False

        self.setup_ui()
        self._connect_signals()

        if self.loaded:
            self.canvas.render_page()
        else:
            QMessageBox.critical(self, "Error", f"Error loading PDF: {file_path}")
            self._disable_editing()

    def setup_ui(self):
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.toolbar = EditorToolbar(os.path.basename(self.file_path), central)
        layout.addWidget(self.toolbar)

        self.options_bar = ToolOptionsBar(self.controller, central)
        layout.addWidget(self.options_bar)

        self.scroll_area = QScrollArea(central)
        self.scroll_area.setAlignment(Qt.AlignHCenter | Qt.AlignTop)
        self.scroll_area.setWidgetResizable(False)
        self.canvas = AnnotationCanvas(self.controller, self.pdf_reader)
        self.scroll_area.setWidget(self.canvas)
        layout.addWidget(self.scroll_area, 1)

        self.setCentralWidget(central)
        self.statusBar()

        self.toolbar.set_page(self.session.current_page, self.session.page_count)
        self.toolbar.set_zoom(self.session.scale)

    def _connect_signals(self):
        toolbar = self.toolbar
        controller = self.controller

        toolbar.tool_requested.connect(controller.set_tool)
        toolbar.undo_requested.connect(controller.undo)
        toolbar.redo_requested.connect(controller.redo)
        toolbar.zoom_in_requested.connect(controller.zoom_in)
        toolbar.zoom_out_requested.connect(controller.zoom_out)
        toolbar.previous_page_requested.connect(controller.previous_page)
        toolbar.next_page_requested.connect(controller.next_page)
        toolbar.delete_requested.connect(controller.delete_selected)
        toolbar.save_requested.connect(self.save_annotations)
        toolbar.export_requested.connect(self.export_annotated_pdf)
        toolbar.close_requested.connect(self.close)

        controller.tool_changed.connect(toolbar.set_tool)
        controller.history_changed.connect(toolbar.set_history)
        controller.zoom_changed.connect(toolbar.set_zoom)
        controller.page_changed.connect(
            lambda page: toolbar.set_page(page, self.session.page_count))
        controller.selection_changed.connect(toolbar.set_selection)
        controller.save_started.connect(self._on_save_started)
        controller.save_finished.connect(self._on_save_finished)

    def _disable_editing(self):
        """Leave only Close usable when the document could not be opened."""
        self.toolbar.set_document_available(False)
        self.options_bar.setEnabled(False)
        self.canvas.setEnabled(False)
        self.statusBar().showMessage("No document loaded")

    def keyPressEvent(self, event):
        if not self.input_handler.handle_key_press(event):
            super().keyPressEvent(event)

    # Saving

    def save_annotations(self):
        """Hand the annotations to the configured sink and close on success."""
        self._start_save(self.sink, close_on_success=True)

    def export_annotated_pdf(self):
        """Write an annotated copy of the PDF chosen by the user."""
        base, ext = os.path.splitext(self.file_path)
        output_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Annotated PDF",
            f"{base}-annotated{ext or '.pdf'}",
            "PDF Files (*.pdf)"
        )
        if not output_path:
            return

        sink = PdfExportSink(self.file_path, output_path)
        sink.exporter.progress_signal.connect(self._on_export_progress)
        self._start_save(sink, close_on_success=False)

    def _start_save(self, sink, close_on_success: bool):
        if self.controller.is_saving or not self.loaded:
            return
        self._last_sink = sink
        self._close_on_success = close_on_success
        self.controller.save(sink)

    def _on_save_started(self):
        self.toolbar.set_saving(True)
        self.statusBar().showMessage("Saving annotations...")
        QApplication.setOverrideCursor(Qt.BusyCursor)

    def _on_export_progress(self, done: int, total: int):
        self.statusBar().showMessage(f"Exporting annotations: {done}/{total} pages")

    def _on_save_finished(self, success: bool, message: str):
        QApplication.restoreOverrideCursor()
        self.toolbar.set_saving(False)
        self.statusBar().showMessage(message, 5000)

        if success:
            if self._close_on_success:
                self._close_after_save = True
                self.close()
            return

        if warning_manager.ask_retry_save(self, message):
            self._start_save(self._last_sink, self._close_on_success)

    def closeEvent(self, event):
        """Close the editor, discarding unsaved annotations after confirmation."""
        if self.controller.is_saving:
            event.ignore()
            return

        if (not self._close_after_save and self.session.has_unsaved_changes
                and not warning_manager.confirm_discard(self)):
            event.ignore()
            return

        self.pdf_reader.close_document()
        event.accept()
