"""PDF derivatives: per-page conversion and paged-content assembly.

Page PDFs are converted independently, then merged in page order into the
parent's PDF. Every temporary file is removed on every exit path.
"""

import shutil
from collections.abc import Sequence
from pathlib import Path

from paged_content.config.settings import Settings
from paged_content.derivatives.capabilities import CapabilityProbe
from paged_content.derivatives.kinds import DerivativeKind
from paged_content.derivatives.materializer import SourceMaterializer, temp_file_name
from paged_content.derivatives.results import DerivationResult
from paged_content.derivatives.writer import DatastreamWriter
from paged_content.logging.logger import Log
from paged_content.objects.models import RepositoryObject
from paged_content.pages.enumerator import PageEnumerator
from paged_content.pdf.base import BasePdfInspector
from paged_content.pdf.exceptions import PdfInspectionError
from paged_content.process.runner import CommandRunner, render_options
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.exceptions import ObjectNotFoundError

MERGE_FLAGS = ("-dBATCH", "-dNOPAUSE", "-q", "-sDEVICE=pdfwrite")


class PdfPipeline:
    def __init__(
        self,
        store: BaseRepositoryStore,
        materializer: SourceMaterializer,
        writer: DatastreamWriter,
        runner: CommandRunner,
        enumerator: PageEnumerator,
        inspector: BasePdfInspector,
        probe: CapabilityProbe,
        settings: Settings,
    ) -> None:
        self._store = store
        self._materializer = materializer
        self._writer = writer
        self._runner = runner
        self._enumerator = enumerator
        self._inspector = inspector
        self._probe = probe
        self._settings = settings

    def derive_pdf_for_page(
        self,
        page: RepositoryObject,
        options: dict[str, str] | None = None,
    ) -> DerivationResult:
        """Convert the page's OBJ image to PDF and store it as its PDF datastream."""
        kind = DerivativeKind.PDF
        result = DerivationResult(kind.code, page.id)
        source = self._materializer.materialize(page, kind)
        result.record("materialize", source is not None)
        if source is None:
            return result

        output = Path(f"{source}.pdf")
        convert_options = options if options is not None else self._settings.pdf_convert_options
        try:
            converted = self._runner.run(
                [
                    self._settings.convert_binary,
                    *render_options(convert_options),
                    str(source),
                    str(output),
                ]
            )
        finally:
            source.unlink(missing_ok=True)

        try:
            if not result.record("convert", converted.succeeded, detail=converted.output):
                return result
            result.record(
                "store",
                self._writer.write_file(
                    page.id, kind.code, output, kind.label, kind.mime_type
                ),
            )
        finally:
            output.unlink(missing_ok=True)
        return result

    def combine_pdfs(self, files: Sequence[Path], output: Path) -> bool:
        """Merge ``files`` in the given order into ``output``."""
        merged = self._runner.run(
            [
                self._settings.gs_binary,
                *MERGE_FLAGS,
                f"-sOutputFile={output}",
                *[str(path) for path in files],
            ]
        )
        return merged.succeeded

    def append_pdf(self, existing: Path, new_files: Sequence[Path]) -> bool:
        """Append ``new_files`` to ``existing`` in place.

        The merge reads from a copy of the original so the tool never reads
        the file it is overwriting. The copy is always removed.
        """
        temp_copy = Path(f"{existing}.temp.pdf")
        try:
            shutil.copyfile(existing, temp_copy)
            return self.combine_pdfs([temp_copy, *new_files], existing)
        except OSError as exc:
            Log.error(f"Cannot copy {existing} for appending: {exc}")
            return False
        finally:
            temp_copy.unlink(missing_ok=True)

    def derive_paged_content_pdf(
        self,
        object_id: str,
        options: dict[str, str] | None = None,
    ) -> DerivationResult:
        """Build the parent's PDF from its pages' PDFs, in page order.

        Pages without a PDF get one derived first. Pages that still have
        none are left out and reported.
        """
        result = DerivationResult(DerivativeKind.PDF.code, object_id)
        try:
            obj = self._store.get_object(object_id)
        except ObjectNotFoundError as exc:
            Log.error(str(exc))
            result.record("object", False, detail=str(exc))
            return result
        if not result.record("paged_content", obj.is_paged_content()):
            return result
        if not result.record("merge_backend", self._probe.can_merge_pdfs()):
            return result

        page_files: list[Path] = []
        output = self._materializer.temp_dir / temp_file_name(object_id, "PDF", ".pdf")
        try:
            for page in self._enumerator.get_pages(object_id):
                page_file = self._page_pdf(page.id, options, result)
                if page_file is not None:
                    page_files.append(page_file)

            if not result.record("collect", bool(page_files)):
                return result
            if not result.record("combine", self.combine_pdfs(page_files, output)):
                return result
            if not result.record("inspect", self._has_pages(output, len(page_files))):
                return result
            result.record(
                "store",
                self._writer.write_file(
                    object_id,
                    DerivativeKind.PDF.code,
                    output,
                    DerivativeKind.PDF.label,
                    DerivativeKind.PDF.mime_type,
                ),
            )
        finally:
            for path in [*page_files, output]:
                path.unlink(missing_ok=True)
        return result

    def _page_pdf(
        self,
        page_id: str,
        options: dict[str, str] | None,
        result: DerivationResult,
    ) -> Path | None:
        page = self._store.get_object(page_id)
        if not page.has_datastream(DerivativeKind.PDF.code):
            derived = self.derive_pdf_for_page(page, options)
            result.record(f"page:{page_id}", derived.succeeded, required=False)
            if not derived:
                Log.skipped(page_id, f"no PDF ({', '.join(derived.failed_steps)} failed)")
                return None
            page = self._store.get_object(page_id)
        return self._materializer.materialize_datastream(page, DerivativeKind.PDF.code)

    def _has_pages(self, path: Path, merged_count: int) -> bool:
        try:
            page_count = self._inspector.page_count(path.read_bytes())
        except (OSError, PdfInspectionError) as exc:
            Log.error(f"Combined PDF {path} is unreadable: {exc}")
            return False
        Log.info(f"Combined {merged_count} page PDFs into {page_count} pages")
        return page_count > 0
