import pytest

from resumark.core.document import PDFDocumentReader


def test_load_reports_page_count(blank_pdf):
    reader = PDFDocumentReader()

    assert reader.load_pdf(str(blank_pdf)) == (True, 3)
    assert reader.page_size(0) == pytest.approx((612, 792))
    assert reader.page_size(3) == (0.0, 0.0)

    reader.close_document()
    assert reader.total_pages == 0
    assert reader.page_size(0) == (0.0, 0.0)


def test_load_from_bytes(blank_pdf):
    reader = PDFDocumentReader()

    assert reader.load_bytes(blank_pdf.read_bytes(), "cv.pdf") == (True, 3)
    assert reader.current_file_path == "cv.pdf"


def test_load_missing_file(tmp_path):
    reader = PDFDocumentReader()

    assert reader.load_pdf(str(tmp_path / "missing.pdf")) == (False, 0)
    assert reader.doc is None


def test_load_garbage_bytes():
    assert PDFDocumentReader().load_bytes(b"not a pdf") == (False, 0)


def test_render_out_of_range_page_is_none(blank_pdf):
    reader = PDFDocumentReader()
    reader.load_pdf(str(blank_pdf))

    assert reader.render_page(7, 1.0) is None
