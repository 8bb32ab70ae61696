import pymupdf

from paged_content.pdf.base import BasePdfInspector
from paged_content.pdf.exceptions import PdfInspectionError


class PyMuPdfInspector(BasePdfInspector):
    """Inspects PDFs using PyMuPDF."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return doc.page_count
        except Exception as exc:
            raise PdfInspectionError(f"pymupdf could not read PDF: {exc}") from exc
