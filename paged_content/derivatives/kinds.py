from enum import Enum

OBJ = "OBJ"


class Capability(Enum):
    """External backends a derivative may depend on."""

    IMAGE = "image"
    PDF = "pdf"
    OCR = "ocr"


class DerivativeKind(Enum):
    """The closed set of derivatives, each with its source and backend.

    Every kind is derived from exactly one source datastream.
    """

    PDF = ("PDF", OBJ, Capability.PDF, "application/pdf", "PDF")
    OCR = ("OCR", OBJ, Capability.OCR, "text/plain", "OCR")
    HOCR = ("HOCR", OBJ, Capability.OCR, "text/html", "HOCR")
    TN = ("TN", OBJ, Capability.IMAGE, "image/jpeg", "Thumbnail")
    JPG = ("JPG", OBJ, Capability.IMAGE, "image/jpeg", "Medium sized JPEG")
    JP2 = ("JP2", OBJ, Capability.IMAGE, "image/jp2", "JPEG 2000")

    def __init__(
        self,
        code: str,
        source: str,
        capability: Capability,
        mime_type: str,
        label: str,
    ) -> None:
        self.code = code
        self.source = source
        self.capability = capability
        self.mime_type = mime_type
        self.label = label

    @classmethod
    def parse(cls, code: str) -> "DerivativeKind":
        """Look a kind up by datastream code, case-insensitively.

        Raises:
            ValueError: for codes outside the known set.
        """
        normalized = code.strip().upper()
        for kind in cls:
            if kind.code == normalized:
                return kind
        raise ValueError(
            f"Unknown derivative kind '{code}'. Choose from: {[k.code for k in cls]}"
        )
