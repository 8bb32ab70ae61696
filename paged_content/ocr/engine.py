from pathlib import Path

from paged_content.config.settings import Settings
from paged_content.process.runner import CommandRunner

PREPROCESS_ARGUMENTS = (
    "-colorspace", "Gray",
    "-normalize",
    "-despeckle",
    "-deskew", "40%",
    "-sharpen", "0x1",
)


class TesseractEngine:
    """Command-line contract of the OCR engine and its cleanup pass.

    Each method returns the produced file, or None when the tool failed or
    wrote nothing. Produced files belong to the caller.
    """

    def __init__(self, runner: CommandRunner, settings: Settings) -> None:
        self._runner = runner
        self._settings = settings

    def preprocess(self, image: Path) -> Path | None:
        output = Path(f"{image}_preprocessed.tif")
        result = self._runner.run(
            [self._settings.convert_binary, str(image), *PREPROCESS_ARGUMENTS, str(output)]
        )
        return _produced(output, result.succeeded)

    def extract_text(self, image: Path, language: str) -> Path | None:
        base = Path(f"{image}_ocr")
        result = self._runner.run(
            [self._settings.tesseract_binary, str(image), str(base), "-l", language]
        )
        return _produced(Path(f"{base}.txt"), result.succeeded)

    def extract_hocr(self, image: Path, language: str) -> Path | None:
        base = Path(f"{image}_hocr")
        result = self._runner.run(
            [self._settings.tesseract_binary, str(image), str(base), "-l", language, "hocr"]
        )
        # Tesseract 3.x names its HOCR output .html instead of .hocr.
        for candidate in (Path(f"{base}.hocr"), Path(f"{base}.html")):
            if candidate.exists():
                return _produced(candidate, result.succeeded)
        return None

    @staticmethod
    def outputs_for(image: Path) -> list[Path]:
        """Every file the engine may leave behind for ``image``."""
        return [
            Path(f"{image}_preprocessed.tif"),
            Path(f"{image}_ocr.txt"),
            Path(f"{image}_hocr.hocr"),
            Path(f"{image}_hocr.html"),
        ]


def _produced(path: Path, succeeded: bool) -> Path | None:
    if succeeded and path.exists():
        return path
    return None
