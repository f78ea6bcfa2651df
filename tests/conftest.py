import os

import fitz
import pytest

# Widgets and pixmaps need a GUI application; render off screen
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5.QtWidgets import QApplication  # noqa: E402

from resumark.config import EditorConfig  # noqa: E402
from resumark.core.editor import EditorSession  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def config():
    return EditorConfig()


@pytest.fixture
def session(config):
    return EditorSession(page_count=3, config=config)


@pytest.fixture
def blank_pdf(tmp_path):
    """Three empty US-letter pages."""
    path = tmp_path / "blank.pdf"
    doc = fitz.open()
    for _ in range(3):
        doc.new_page(width=612, height=792)
    doc.save(str(path))
    doc.close()
    return path
