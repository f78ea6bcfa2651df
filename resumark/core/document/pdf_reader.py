"""
PDF document reading and rendering functionality.
"""
import logging
from typing import Optional, Tuple

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage, QPixmap

log = logging.getLogger(__name__)


class PDFDocumentReader:
    """Handles PDF document loading and page rendering for the editor."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0
        self.current_file_path: Optional[str] = None

    def load_pdf(self, file_path: str) -> Tuple[bool, int]:
        """
        Load a PDF document from disk.

        Args:
            file_path: Path to the PDF file

        Returns:
            Tuple of (success flag, number of pages)
        """
        return self._open(file_path, lambda: fitz.open(file_path))

    def load_bytes(self, data: bytes, name: str = "document.pdf") -> Tuple[bool, int]:
        """
        Load a PDF document from memory, e.g. a downloaded file.

        Args:
            data: Raw PDF bytes
            name: Display name used as the document handle

        Returns:
            Tuple of (success flag, number of pages)
        """
        return self._open(name, lambda: fitz.open(stream=data, filetype="pdf"))

    def _open(self, handle: str, opener) -> Tuple[bool, int]:
        if self.doc:
            self.close_document()

        try:
            self.doc = opener()
        except (OSError, RuntimeError, ValueError) as e:
            # PyMuPDF raises RuntimeError subclasses for unreadable files
            log.error("Error loading PDF %s: %s", handle, e)
            self.doc = None
            return False, 0

        self.total_pages = self.doc.page_count
        self.current_file_path = handle
        log.info("Loaded %s (%d pages)", handle, self.total_pages)
        return True, self.total_pages

    def close_document(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None

        self.total_pages = 0
        self.current_file_path = None

    def page_size(self, page_index: int) -> Tuple[float, float]:
        """
        Get the unscaled size of a page.

        Args:
            page_index: 0-based index of the page

        Returns:
            Tuple of (width, height) in document units, (0, 0) if invalid
        """
        if not self.doc or not 0 <= page_index < self.total_pages:
            return 0.0, 0.0
        rect = self.doc.load_page(page_index).rect
        return rect.width, rect.height

    def render_page(self, page_index: int, scale: float,
                    resolution: float = 1.0) -> Optional[QPixmap]:
        """
        Render a single page of the PDF to a pixmap.

        Args:
            page_index: 0-based index of the page to render
            scale: Current zoom scale
            resolution: Device pixel multiplier for sharper output

        Returns:
            Pixmap whose logical size is the page size times scale, or None
        """
        if not self.doc or not 0 <= page_index < self.total_pages:
            return None

        page = self.doc.load_page(page_index)
        mat = fitz.Matrix(scale * resolution, scale * resolution)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        img = QImage(pix.samples, pix.width, pix.height, pix.stride,
                     QImage.Format_RGB888)

        # QImage does not own pix.samples, copy before pix goes away
        pixmap = QPixmap.fromImage(img.copy())
        pixmap.setDevicePixelRatio(resolution)
        return pixmap
