"""
Writes editor annotations into a copy of the PDF with PyMuPDF.
"""
import logging
import os
import tempfile
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import fitz  # PyMuPDF
from PyQt5.QtCore import QObject, pyqtSignal

from ..annotations.models import Annotation, HighlightAnnotation, TextAnnotation

log = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_OPACITY = 0.4


def _pdf_color(color) -> List[float]:
    # PyMuPDF uses 0-1 channels
    return [c / 255.0 for c in color]


class PDFExporter(QObject):
    """Handles exporting annotations to PDF files."""

    progress_signal = pyqtSignal(int, int)  # pages done, pages total

    def __init__(self, highlight_opacity: float = DEFAULT_HIGHLIGHT_OPACITY):
        super().__init__()
        self.highlight_opacity = highlight_opacity

    def export_annotations_to_pdf(self, source_pdf_path: str, output_pdf_path: str,
                                  annotations: Sequence[Annotation]) -> bool:
        """
        Export annotations to a PDF file.

        Writing over the source goes through a temporary file in the same
        directory so a failed export leaves the original untouched.

        Args:
            source_pdf_path: Path to the original PDF
            output_pdf_path: Path where the annotated PDF should be saved
            annotations: Annotations to add

        Returns:
            True if successful, False otherwise
        """
        same_file = os.path.abspath(source_pdf_path) == os.path.abspath(output_pdf_path)
        target = output_pdf_path
        if same_file:
            fd, target = tempfile.mkstemp(
                suffix='.pdf', dir=os.path.dirname(os.path.abspath(output_pdf_path)))
            os.close(fd)

        try:
            doc = fitz.open(source_pdf_path)
            try:
                self._annotate(doc, annotations)
                doc.save(target, garbage=4, deflate=True)
            finally:
                doc.close()
            if same_file:
                os.replace(target, output_pdf_path)
        except (OSError, RuntimeError, ValueError):
            log.exception("Failed to export annotations to %s", output_pdf_path)
            if same_file and os.path.exists(target):
                os.remove(target)
            return False

        log.info("Exported %d annotations to %s", len(annotations), output_pdf_path)
        return True

    def _annotate(self, doc: fitz.Document, annotations: Sequence[Annotation]) -> None:
        annotations_by_page: Dict[int, List[Annotation]] = defaultdict(list)
        for ann in annotations:
            annotations_by_page[ann.page].append(ann)

        total_pages = len(annotations_by_page)
        for done, page_idx in enumerate(sorted(annotations_by_page), 1):
            if page_idx >= len(doc):
                log.warning("Skipping annotations for missing page %d", page_idx)
                continue

            page = doc[page_idx]
            for ann in annotations_by_page[page_idx]:
                self._add_annotation_to_page(page, ann)
            self.progress_signal.emit(done, total_pages)

    def _add_annotation_to_page(self, page: fitz.Page, annotation: Annotation) -> None:
        """Add a single annotation to a PDF page."""
        bounds = annotation.bounds()
        color = _pdf_color(annotation.color)

        if isinstance(annotation, HighlightAnnotation):
            highlight = page.add_highlight_annot(
                fitz.Rect(bounds.x0, bounds.y0, bounds.x1, bounds.y1))
            highlight.set_colors(stroke=color)
            highlight.set_opacity(self.highlight_opacity)
            highlight.update()

        elif isinstance(annotation, TextAnnotation):
            # Pad the estimated box so the last glyph is not clipped
            rect = fitz.Rect(bounds.x0, bounds.y0,
                             bounds.x1 + annotation.font_size, bounds.y1)
            free_text = page.add_freetext_annot(
                rect,
                annotation.text,
                fontsize=annotation.font_size,
                text_color=color
            )
            free_text.update()


class PdfExportSink:
    """Persistence sink that writes an annotated copy of the document."""

    def __init__(self, source_pdf_path: str, output_pdf_path: str,
                 exporter: Optional[PDFExporter] = None):
        self.source_pdf_path = source_pdf_path
        self.output_pdf_path = output_pdf_path
        self.exporter = exporter or PDFExporter()

    def __call__(self, annotations: Sequence[Annotation]) -> bool:
        return self.exporter.export_annotations_to_pdf(
            self.source_pdf_path, self.output_pdf_path, annotations)
