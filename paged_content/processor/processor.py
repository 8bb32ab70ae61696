from collections.abc import Sequence
from pathlib import Path

from paged_content.config.settings import Settings
from paged_content.derivatives.capabilities import CapabilityProbe
from paged_content.derivatives.eligibility import EligibilityResolver
from paged_content.derivatives.images import ImageDerivativePipeline
from paged_content.derivatives.kinds import Capability, DerivativeKind
from paged_content.derivatives.materializer import SourceMaterializer
from paged_content.derivatives.mime import MimeResolver
from paged_content.derivatives.results import DerivationResult
from paged_content.derivatives.writer import DatastreamWriter
from paged_content.logging.logger import Log
from paged_content.objects.models import RepositoryObject
from paged_content.ocr.engine import TesseractEngine
from paged_content.ocr.pipeline import OcrPipeline
from paged_content.pages.enumerator import PageEnumerator
from paged_content.pdf.factory import PdfInspectorFactory
from paged_content.pdf.pipeline import PdfPipeline
from paged_content.processor.models import BatchEntry, BatchReport
from paged_content.process.runner import CommandRunner
from paged_content.relationships.relations import RelationshipAdapter
from paged_content.store.base import BaseRepositoryStore
from paged_content.thumbnail.updater import ThumbnailUpdater


class Processor:
    """Runs the derivative pipelines over every page of a paged content object.

    Pipeline: enumerate pages -> derive per page -> assemble PDF -> thumbnail.
    A failing page is recorded and the run moves on to the next one.
    """

    def __init__(
        self,
        store: BaseRepositoryStore,
        enumerator: PageEnumerator,
        resolver: EligibilityResolver,
        probe: CapabilityProbe,
        pdf_pipeline: PdfPipeline,
        ocr_pipeline: OcrPipeline,
        image_pipeline: ImageDerivativePipeline,
        thumbnail_updater: ThumbnailUpdater,
    ) -> None:
        self._store = store
        self._enumerator = enumerator
        self._resolver = resolver
        self._probe = probe
        self._pdf = pdf_pipeline
        self._ocr = ocr_pipeline
        self._images = image_pipeline
        self._thumbnail = thumbnail_updater

    def process(
        self,
        object_id: str,
        kinds: Sequence[DerivativeKind] | None = None,
    ) -> BatchReport:
        requested = list(kinds) if kinds is not None else [
            kind for kind in DerivativeKind if self._probe.is_enabled(kind)
        ]
        page_kinds = _per_page_kinds(requested)
        pages = self._enumerator.get_pages(object_id)
        Log.info(
            f"Processing {len(pages)} pages of {object_id} for "
            f"{[kind.code for kind in page_kinds]}"
        )

        report = BatchReport(object_id=object_id)
        for page in pages:
            try:
                page_obj = self._store.get_object(page.id)
                for kind in page_kinds:
                    self._derive_page(page_obj, kind, report)
            except Exception as exc:
                Log.error(f"Page {page.id} of {object_id} failed: {exc}")
                report.fail(page.id, "*", str(exc))

        if DerivativeKind.PDF in requested:
            report.add_result(self._pdf.derive_paged_content_pdf(object_id))

        if DerivativeKind.TN in requested and self._thumbnail.can_update_thumbnail(object_id):
            if self._thumbnail.update_thumbnail(object_id):
                report.derived.append(BatchEntry(object_id, DerivativeKind.TN.code))
            else:
                report.fail(object_id, DerivativeKind.TN.code, "thumbnail update failed")

        Log.info(
            f"Finished {object_id}: {len(report.derived)} derived, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report

    def _derive_page(
        self,
        page: RepositoryObject,
        kind: DerivativeKind,
        report: BatchReport,
    ) -> None:
        if not self._resolver.can_derive(page, kind):
            reason = self._resolver.reason(page, kind)
            Log.skipped(page.id, f"{kind.code}: {reason}")
            report.skip(page.id, kind.code, reason)
            return
        report.add_result(self._run(page, kind))

    def _run(self, page: RepositoryObject, kind: DerivativeKind) -> DerivationResult:
        if kind is DerivativeKind.PDF:
            return self._pdf.derive_pdf_for_page(page)
        if kind.capability is Capability.OCR:
            return self._ocr.derive_ocr_for_page(page)
        return self._images.derive(page, kind)


def _per_page_kinds(kinds: Sequence[DerivativeKind]) -> list[DerivativeKind]:
    # OCR and HOCR come out of a single OCR run.
    ordered: list[DerivativeKind] = []
    for kind in kinds:
        if kind is DerivativeKind.HOCR:
            kind = DerivativeKind.OCR
        if kind not in ordered:
            ordered.append(kind)
    return ordered


def build_processor(
    settings: Settings,
    store: BaseRepositoryStore,
    temp_dir: Path | None = None,
) -> Processor:
    """Build a Processor with all pipelines wired to one store."""
    if temp_dir is None and settings.temp_dir:
        temp_dir = Path(settings.temp_dir)
    probe = CapabilityProbe(settings)
    resolver = EligibilityResolver(probe)
    mime = MimeResolver()
    materializer = SourceMaterializer(resolver, mime, temp_dir=temp_dir)
    writer = DatastreamWriter(store, mime)
    runner = CommandRunner()
    enumerator = PageEnumerator(store)
    relations = RelationshipAdapter(store)
    return Processor(
        store=store,
        enumerator=enumerator,
        resolver=resolver,
        probe=probe,
        pdf_pipeline=PdfPipeline(
            store=store,
            materializer=materializer,
            writer=writer,
            runner=runner,
            enumerator=enumerator,
            inspector=PdfInspectorFactory.create(settings),
            probe=probe,
            settings=settings,
        ),
        ocr_pipeline=OcrPipeline(
            resolver=resolver,
            materializer=materializer,
            writer=writer,
            engine=TesseractEngine(runner, settings),
            relations=relations,
            settings=settings,
        ),
        image_pipeline=ImageDerivativePipeline(materializer, writer, runner, settings),
        thumbnail_updater=ThumbnailUpdater(store, enumerator, materializer, writer, settings),
    )
