"""OCR text and HOCR derivation for a single page."""

from dataclasses import dataclass
from pathlib import Path

from paged_content.config.settings import Settings
from paged_content.derivatives.eligibility import EligibilityResolver
from paged_content.derivatives.kinds import DerivativeKind
from paged_content.derivatives.materializer import SourceMaterializer
from paged_content.derivatives.results import DerivationResult
from paged_content.derivatives.writer import DatastreamWriter
from paged_content.logging.logger import Log
from paged_content.objects.models import RepositoryObject
from paged_content.ocr.engine import TesseractEngine
from paged_content.relationships.relations import (
    HAS_LANGUAGE,
    ISLANDORA_RELS_EXT,
    PREPROCESS,
    RelationshipAdapter,
)

PERSIST_ALWAYS = "always"
PERSIST_ON_PARTIAL_SUCCESS = "on_partial_success"
PERSIST_ON_SUCCESS = "on_success"
PERSISTENCE_POLICIES = (PERSIST_ALWAYS, PERSIST_ON_PARTIAL_SUCCESS, PERSIST_ON_SUCCESS)


@dataclass(frozen=True)
class OcrSettings:
    """Options an OCR run was made with."""

    language: str = "eng"
    preprocess: bool = False


class OcrPipeline:
    def __init__(
        self,
        resolver: EligibilityResolver,
        materializer: SourceMaterializer,
        writer: DatastreamWriter,
        engine: TesseractEngine,
        relations: RelationshipAdapter,
        settings: Settings,
    ) -> None:
        if settings.ocr_settings_persistence not in PERSISTENCE_POLICIES:
            raise ValueError(
                f"Unknown OCR settings persistence '{settings.ocr_settings_persistence}'. "
                f"Choose from: {list(PERSISTENCE_POLICIES)}"
            )
        self._resolver = resolver
        self._materializer = materializer
        self._writer = writer
        self._engine = engine
        self._relations = relations
        self._settings = settings

    def get_settings(self, object_id: str) -> OcrSettings:
        """Return the options persisted on the object, with defaults."""
        language = self._relations.get_literal(object_id, ISLANDORA_RELS_EXT, HAS_LANGUAGE)
        preprocess = self._relations.get_literal(object_id, ISLANDORA_RELS_EXT, PREPROCESS)
        return OcrSettings(
            language=language or self._settings.ocr_default_language,
            preprocess=(
                preprocess.strip().lower() == "true"
                if preprocess is not None
                else self._settings.ocr_default_preprocess
            ),
        )

    def derive_ocr_for_page(
        self,
        page: RepositoryObject,
        options: OcrSettings | None = None,
    ) -> DerivationResult:
        """Run OCR and HOCR extraction over the page's OBJ image.

        Without ``options`` the previously persisted settings are reused.
        Both halves run independently; success needs both to be stored.
        """
        if options is None:
            options = self.get_settings(page.id)
        result = DerivationResult(DerivativeKind.OCR.code, page.id)

        if not self._resolver.can_derive(page, DerivativeKind.HOCR):
            result.record("eligible", False)
            return result
        source = self._materializer.materialize(page, DerivativeKind.OCR)
        result.record("materialize", source is not None)
        if source is None:
            return result

        temporaries = [source, *self._engine.outputs_for(source)]
        try:
            image = source
            if options.preprocess:
                cleaned = self._engine.preprocess(source)
                result.record("preprocess", cleaned is not None, required=False)
                if cleaned is not None:
                    temporaries.extend(self._engine.outputs_for(cleaned))
                    image = cleaned
                else:
                    Log.warning(f"Preprocessing failed for {page.id}; using original image")

            text_file = self._engine.extract_text(image, options.language)
            if result.record("ocr", text_file is not None):
                result.record("store_ocr", self._store(page, DerivativeKind.OCR, text_file))
            hocr_file = self._engine.extract_hocr(image, options.language)
            if result.record("hocr", hocr_file is not None):
                result.record("store_hocr", self._store(page, DerivativeKind.HOCR, hocr_file))

            if self._should_persist(result):
                self.persist_settings(page.id, options)
        finally:
            for path in temporaries:
                path.unlink(missing_ok=True)

        if result.succeeded:
            Log.info(f"Derived OCR and HOCR for {page.id} ({options.language})")
        return result

    def persist_settings(self, object_id: str, options: OcrSettings) -> None:
        """Record the options used, replacing any earlier values."""
        self._relations.set_literal(
            object_id, ISLANDORA_RELS_EXT, HAS_LANGUAGE, options.language
        )
        self._relations.set_literal(
            object_id, ISLANDORA_RELS_EXT, PREPROCESS, "true" if options.preprocess else "false"
        )

    def _store(self, page: RepositoryObject, kind: DerivativeKind, path: Path | None) -> bool:
        if path is None:
            return False
        return self._writer.write_file(page.id, kind.code, path, kind.label, kind.mime_type)

    def _should_persist(self, result: DerivationResult) -> bool:
        policy = self._settings.ocr_settings_persistence
        if policy == PERSIST_ALWAYS:
            return True
        if policy == PERSIST_ON_SUCCESS:
            return result.succeeded
        return any(
            step.succeeded for step in result.steps if step.name in ("store_ocr", "store_hocr")
        )
