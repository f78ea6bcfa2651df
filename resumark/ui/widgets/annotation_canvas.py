"""
Page widget showing the rendered PDF page with the annotation overlay.
"""
from typing import Optional

from PyQt5.QtCore import QPoint, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QFont, QMouseEvent, QPainter, QPen
from PyQt5.QtWidgets import QLabel

from ...controllers.editor_controller import EditorController
from ...core.annotations.models import Annotation, HighlightAnnotation, TextAnnotation
from ...core.document.pdf_reader import PDFDocumentReader

SELECTION_COLOR = QColor(59, 130, 246)
CLICK_TOLERANCE = 4  # pixels a press may travel and still count as a click

CURSORS = {
    "arrow": Qt.ArrowCursor,
    "text": Qt.IBeamCursor,
    "crosshair": Qt.CrossCursor,
}


class AnnotationCanvas(QLabel):
    """
    Displays one page and routes pointer input to the editor controller.

    The widget's top-left corner is the canvas origin, so event positions
    are already canvas-relative screen coordinates.
    """

    def __init__(self, controller: EditorController, reader: PDFDocumentReader,
                 parent=None):
        super().__init__(parent)
        self.controller = controller
        self.reader = reader
        self._press_pos: Optional[QPoint] = None

        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setMouseTracking(True)

        controller.annotations_changed.connect(self.update)
        controller.selection_changed.connect(self.update)
        controller.tool_changed.connect(self._update_cursor)
        controller.page_changed.connect(self.render_page)
        controller.zoom_changed.connect(self.render_page)

        self._update_cursor()

    @property
    def session(self):
        return self.controller.session

    def render_page(self, *_):
        """Render the current page at the current scale."""
        pixmap = self.reader.render_page(
            self.session.current_page,
            self.session.scale,
            self.session.config.render_resolution
        )
        if pixmap is None:
            self.clear()
            return
        self.setPixmap(pixmap)
        ratio = pixmap.devicePixelRatio()
        self.setFixedSize(int(pixmap.width() / ratio), int(pixmap.height() / ratio))
        self.update()

    def _update_cursor(self, *_):
        self.setCursor(CURSORS.get(self.session.active_tool.cursor, Qt.ArrowCursor))

    # Mouse event handlers

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        self.setFocus()
        self._press_pos = event.pos()
        self.controller.press(event.x(), event.y())
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent):
        if event.buttons() & Qt.LeftButton:
            self.controller.move(event.x(), event.y())
            self.update()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)

        self.controller.release(event.x(), event.y())
        if (self._press_pos is not None
                and (event.pos() - self._press_pos).manhattanLength() < CLICK_TOLERANCE):
            self.controller.click(event.x(), event.y())
        self._press_pos = None
        self.update()

    # Paint methods

    def paintEvent(self, event):
        super().paintEvent(event)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        try:
            for annotation in self.session.visible_annotations():
                self._paint_annotation(painter, annotation)
            self._paint_drag_preview(painter)
        finally:
            painter.end()

    def _screen_rect(self, annotation: Annotation) -> QRectF:
        rect = self.session.transform.rect_to_screen(annotation.bounds())
        return QRectF(rect.x0, rect.y0, rect.width, rect.height)

    def _paint_annotation(self, painter: QPainter, annotation: Annotation):
        screen_rect = self._screen_rect(annotation)

        if isinstance(annotation, HighlightAnnotation):
            self._paint_highlight(painter, annotation, screen_rect)
        elif isinstance(annotation, TextAnnotation):
            self._paint_text(painter, annotation, screen_rect)

        if annotation.id == self.session.selected_id:
            painter.setBrush(Qt.NoBrush)
            painter.setPen(QPen(SELECTION_COLOR, 2))
            painter.drawRect(screen_rect)

    def _paint_highlight(self, painter: QPainter, ann: HighlightAnnotation,
                         screen_rect: QRectF):
        """Paint a highlight annotation."""
        alpha = int(255 * self.session.config.highlight_opacity)
        painter.setBrush(QBrush(QColor(ann.color[0], ann.color[1], ann.color[2], alpha)))
        painter.setPen(Qt.NoPen)
        painter.drawRect(screen_rect)

    def _paint_text(self, painter: QPainter, ann: TextAnnotation, screen_rect: QRectF):
        """Paint a text label."""
        font = QFont(painter.font())
        font.setPixelSize(max(1, int(round(ann.font_size * self.session.scale))))
        painter.setFont(font)
        painter.setPen(QColor(ann.color[0], ann.color[1], ann.color[2]))
        painter.drawText(screen_rect, Qt.AlignLeft | Qt.AlignTop | Qt.TextSingleLine,
                         ann.text)

    def _paint_drag_preview(self, painter: QPainter):
        """Paint the highlight drag in progress."""
        preview = self.session.drag_preview()
        if preview is None:
            return

        rect = self.session.transform.rect_to_screen(preview)
        color = self.session.highlight_color
        painter.setBrush(QBrush(QColor(color[0], color[1], color[2], 60)))
        painter.setPen(QPen(QColor(color[0], color[1], color[2]), 1, Qt.DashLine))
        painter.drawRect(QRectF(rect.x0, rect.y0, rect.width, rect.height))
