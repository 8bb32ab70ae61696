import io

import pdfplumber

from paged_content.pdf.base import BasePdfInspector
from paged_content.pdf.exceptions import PdfInspectionError


class PdfPlumberInspector(BasePdfInspector):
    """Inspects PDFs using pdfplumber."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as exc:
            raise PdfInspectionError(f"pdfplumber could not read PDF: {exc}") from exc
