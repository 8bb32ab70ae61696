from abc import ABC, abstractmethod


class BasePdfInspector(ABC):
    """Contract for adapters that read structure out of finished PDFs."""

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        """Count the pages of a PDF.

        Raises:
            PdfInspectionError: if the bytes are not a readable PDF.
        """
