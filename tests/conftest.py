import io
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from paged_content.config.settings import Settings
from paged_content.derivatives.capabilities import CapabilityProbe
from paged_content.objects.models import BOOK, BOOK_PAGE, Datastream, RepositoryObject
from paged_content.pages.enumerator import PageEnumerator
from paged_content.process.runner import CommandResult
from paged_content.store.memory_store import InMemoryRepositoryStore

SAMPLE_HOCR = b"""<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
 <body>
  <div class="ocr_page" title="image &quot;page.tif&quot;; bbox 0 0 2550 3300; ppageno 0">
   <span class="ocr_line" title="bbox 10 20 300 60">
    <span class="ocrx_word" title="bbox 10 20 80 60; x_wconf 91"><strong>The</strong></span>
    <span class="ocrx_word" title="bbox 90 20 150 60; x_wconf 88"><strong>Cat</strong></span>
   </span>
  </div>
 </body>
</html>
"""


class FakeRunner:
    """Stands in for CommandRunner and writes the files each binary would."""

    def __init__(self, fail_if: Callable[[tuple[str, ...]], bool] | None = None) -> None:
        self.commands: list[tuple[str, ...]] = []
        self._fail_if = fail_if

    def run(self, command: Sequence[str | Path]) -> CommandResult:
        args = tuple(str(part) for part in command)
        self.commands.append(args)
        if self._fail_if is not None and self._fail_if(args):
            return CommandResult(args, 1, "simulated failure")
        binary = args[0]
        if binary == "gs":
            output = next(a for a in args if a.startswith("-sOutputFile="))
            inputs = [a for a in args[1:] if not a.startswith("-")]
            Path(output.split("=", 1)[1]).write_bytes(
                b"".join(Path(path).read_bytes() for path in inputs)
            )
        elif binary == "tesseract":
            base = args[2]
            if args[-1] == "hocr":
                Path(f"{base}.hocr").write_bytes(SAMPLE_HOCR)
            else:
                Path(f"{base}.txt").write_text("The Cat")
        elif binary == "convert":
            Path(args[-1]).write_bytes(b"converted " + Path(args[-2]).name.encode())
        return CommandResult(args, 0, "")

    def binaries(self) -> list[str]:
        return [command[0] for command in self.commands]


@pytest.fixture()
def make_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture()
def sample_hocr() -> bytes:
    return SAMPLE_HOCR


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(temp_dir=str(tmp_path / "work"))


@pytest.fixture()
def probe(settings: Settings) -> CapabilityProbe:
    return CapabilityProbe(settings, which=lambda binary: f"/usr/bin/{binary}")


def _pdf(pages: int) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for number in range(1, pages + 1):
        c.drawString(72, 720, f"Page {number}")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page PDF."""
    return _pdf(1)


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """A three-page PDF."""
    return _pdf(3)


@pytest.fixture()
def store() -> InMemoryRepositoryStore:
    return InMemoryRepositoryStore()


@pytest.fixture()
def book(store: InMemoryRepositoryStore) -> RepositoryObject:
    """A book with pages book:1-p1..p3, each carrying an OBJ image."""
    obj = RepositoryObject(id="book:1", label="A Book", models=frozenset({BOOK}))
    store.save_object(obj)
    enumerator = PageEnumerator(store)
    for number in (1, 2, 3):
        page = RepositoryObject(
            id=f"book:1-p{number}",
            label=f"Page {number}",
            models=frozenset({BOOK_PAGE}),
            datastreams={
                "OBJ": Datastream("OBJ", f"image {number}".encode(), "image/tiff", "OBJ"),
            },
        )
        store.save_object(page)
        enumerator.set_page_number(page.id, obj.id, number)
    return obj
