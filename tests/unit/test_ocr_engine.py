from pathlib import Path
from unittest.mock import MagicMock

from paged_content.config.settings import Settings
from paged_content.ocr.engine import PREPROCESS_ARGUMENTS, TesseractEngine
from paged_content.process.runner import CommandResult


def _make_image(tmp_path: Path) -> Path:
    image = tmp_path / "page.tif"
    image.write_bytes(b"image")
    return image


class TestExtractText:
    def test_runs_tesseract_with_language(self, make_runner, tmp_path) -> None:
        runner = make_runner()
        image = _make_image(tmp_path)

        produced = TesseractEngine(runner, Settings()).extract_text(image, "fra")

        assert produced == tmp_path / "page.tif_ocr.txt"
        assert produced.read_text() == "The Cat"
        assert runner.commands == [("tesseract", str(image), f"{image}_ocr", "-l", "fra")]

    def test_failure_returns_none(self, make_runner, tmp_path) -> None:
        runner = make_runner(fail_if=lambda args: True)

        assert TesseractEngine(runner, Settings()).extract_text(_make_image(tmp_path), "eng") is None


class TestExtractHocr:
    def test_produces_hocr_file(self, make_runner, sample_hocr, tmp_path) -> None:
        runner = make_runner()
        image = _make_image(tmp_path)

        produced = TesseractEngine(runner, Settings()).extract_hocr(image, "eng")

        assert produced == tmp_path / "page.tif_hocr.hocr"
        assert produced.read_bytes() == sample_hocr
        assert runner.commands[0][-1] == "hocr"

    def test_accepts_html_output_name(self, tmp_path) -> None:
        image = _make_image(tmp_path)

        def run(command):
            Path(f"{command[2]}.html").write_text("<html/>")
            return CommandResult(tuple(command), 0)

        runner = MagicMock()
        runner.run.side_effect = run

        produced = TesseractEngine(runner, Settings()).extract_hocr(image, "eng")

        assert produced == tmp_path / "page.tif_hocr.html"

    def test_no_output_returns_none(self, tmp_path) -> None:
        runner = MagicMock()
        runner.run.return_value = CommandResult(("tesseract",), 0)

        assert TesseractEngine(runner, Settings()).extract_hocr(_make_image(tmp_path), "eng") is None


class TestPreprocess:
    def test_runs_cleanup_pass(self, make_runner, tmp_path) -> None:
        runner = make_runner()
        image = _make_image(tmp_path)

        produced = TesseractEngine(runner, Settings()).preprocess(image)

        assert produced == tmp_path / "page.tif_preprocessed.tif"
        assert runner.commands == [
            ("convert", str(image), *PREPROCESS_ARGUMENTS, str(produced))
        ]

    def test_failure_returns_none(self, make_runner, tmp_path) -> None:
        runner = make_runner(fail_if=lambda args: True)

        assert TesseractEngine(runner, Settings()).preprocess(_make_image(tmp_path)) is None


def test_outputs_for_lists_every_engine_file(tmp_path) -> None:
    image = tmp_path / "page.tif"

    assert TesseractEngine.outputs_for(image) == [
        tmp_path / "page.tif_preprocessed.tif",
        tmp_path / "page.tif_ocr.txt",
        tmp_path / "page.tif_hocr.hocr",
        tmp_path / "page.tif_hocr.html",
    ]
