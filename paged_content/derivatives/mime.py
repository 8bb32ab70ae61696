import mimetypes
from pathlib import Path

# Types the platform tables often lack or map to an unwanted extension.
_EXTENSIONS: dict[str, str] = {
    "image/jp2": ".jp2",
    "image/jpeg": ".jpg",
    "image/tiff": ".tif",
    "text/plain": ".txt",
    "text/html": ".html",
    "application/pdf": ".pdf",
}
_MIME_TYPES: dict[str, str] = {
    ".jp2": "image/jp2",
    ".hocr": "text/html",
}


class MimeResolver:
    """Maps MIME types to file extensions and back."""

    def extension_for(self, mime_type: str) -> str:
        """Return an extension with a leading dot, or ``.bin`` when unknown."""
        normalized = mime_type.split(";")[0].strip().lower()
        if normalized in _EXTENSIONS:
            return _EXTENSIONS[normalized]
        return mimetypes.guess_extension(normalized) or ".bin"

    def mime_for(self, path: Path) -> str:
        suffix = path.suffix.lower()
        if suffix in _MIME_TYPES:
            return _MIME_TYPES[suffix]
        mime_type, _ = mimetypes.guess_type(path.name)
        return mime_type or "application/octet-stream"
