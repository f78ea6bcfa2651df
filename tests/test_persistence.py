import json

import fitz

from resumark.core.annotations import (
    AnnotationPersistence, HighlightAnnotation, JsonAnnotationSink, TextAnnotation
)
from resumark.core.document import PDFExporter, PdfExportSink

TEXT = TextAnnotation(id="text-aaaaaaaaaaaa", page=0, x=72, y=72, text="Hello",
                      font_size=14, color=(255, 0, 0))
HIGHLIGHT = HighlightAnnotation(id="highlight-bbbbbbbbbbbb", page=1, x=100, y=100,
                                width=200, height=30)


def test_json_round_trip(tmp_path):
    persistence = AnnotationPersistence(storage_dir=tmp_path)

    assert persistence.save_to_json([TEXT, HIGHLIGHT], "/docs/cv.pdf")

    annotations, ok = persistence.load_from_json("/docs/cv.pdf")
    assert ok
    assert annotations == [TEXT, HIGHLIGHT]
    assert persistence.has_saved_annotations("/docs/cv.pdf")
    assert not persistence.has_saved_annotations("/docs/other.pdf")


def test_json_file_layout(tmp_path):
    target = tmp_path / "out.json"

    AnnotationPersistence(storage_dir=tmp_path).save_to_json([TEXT], "cv.pdf", target)

    data = json.loads(target.read_text())
    assert data["document"] == "cv.pdf"
    assert data["annotations"][0]["type"] == "text"
    assert data["annotations"][0]["color"] == [255, 0, 0]


def test_load_missing_file(tmp_path):
    annotations, ok = AnnotationPersistence(storage_dir=tmp_path).load_from_json("x.pdf")

    assert annotations == []
    assert not ok


def test_load_corrupt_file(tmp_path):
    target = tmp_path / "broken.json"
    target.write_text("{not json")

    annotations, ok = AnnotationPersistence(storage_dir=tmp_path).load_from_json(
        "x.pdf", target)

    assert annotations == []
    assert not ok


def test_json_sink_reports_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    sink = JsonAnnotationSink("cv.pdf", AnnotationPersistence(storage_dir=tmp_path),
                              file_path=blocker / "nested" / "out.json")

    assert sink([TEXT]) is False


def test_json_sink_writes(tmp_path):
    sink = JsonAnnotationSink("cv.pdf", AnnotationPersistence(storage_dir=tmp_path))

    assert sink([TEXT]) is True


def test_pdf_export_adds_annotations(qapp, blank_pdf, tmp_path):
    output = tmp_path / "annotated.pdf"
    progress = []
    exporter = PDFExporter()
    exporter.progress_signal.connect(lambda done, total: progress.append((done, total)))

    assert exporter.export_annotations_to_pdf(str(blank_pdf), str(output),
                                              [TEXT, HIGHLIGHT])

    doc = fitz.open(str(output))
    try:
        first = [annot.type[1] for annot in doc[0].annots()]
        second = [annot.type[1] for annot in doc[1].annots()]
        assert first == ["FreeText"]
        assert second == ["Highlight"]
        assert next(doc[0].annots()).info["content"] == "Hello"
    finally:
        doc.close()
    assert progress == [(1, 2), (2, 2)]


def test_pdf_export_over_source(qapp, blank_pdf):
    sink = PdfExportSink(str(blank_pdf), str(blank_pdf))

    assert sink([HIGHLIGHT])

    doc = fitz.open(str(blank_pdf))
    try:
        assert len(list(doc[1].annots())) == 1
    finally:
        doc.close()


def test_pdf_export_skips_missing_pages(qapp, blank_pdf, tmp_path):
    stray = HighlightAnnotation(id="highlight-cccccccccccc", page=9, x=0, y=0,
                                width=50, height=50)

    assert PdfExportSink(str(blank_pdf), str(tmp_path / "out.pdf"))([stray])


def test_pdf_export_missing_source(qapp, tmp_path):
    sink = PdfExportSink(str(tmp_path / "missing.pdf"), str(tmp_path / "out.pdf"))

    assert sink([TEXT]) is False
