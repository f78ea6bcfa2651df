"""
Document access: reading pages and exporting annotated copies.
"""
from .pdf_reader import PDFDocumentReader
from .pdf_exporter import PDFExporter, PdfExportSink

__all__ = ['PDFDocumentReader', 'PDFExporter', 'PdfExportSink']
