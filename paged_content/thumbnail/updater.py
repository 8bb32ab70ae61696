from paged_content.config.settings import Settings
from paged_content.derivatives.kinds import DerivativeKind
from paged_content.derivatives.materializer import SourceMaterializer
from paged_content.derivatives.writer import DatastreamWriter
from paged_content.logging.logger import Log
from paged_content.pages.enumerator import PageEnumerator
from paged_content.store.base import BaseRepositoryStore


class ThumbnailUpdater:
    """Copies the first page's thumbnail onto the paged content object."""

    def __init__(
        self,
        store: BaseRepositoryStore,
        enumerator: PageEnumerator,
        materializer: SourceMaterializer,
        writer: DatastreamWriter,
        settings: Settings,
    ) -> None:
        self._store = store
        self._enumerator = enumerator
        self._materializer = materializer
        self._writer = writer
        self._settings = settings

    def can_update_thumbnail(self, object_id: str) -> bool:
        first = self._enumerator.first_page(object_id)
        if first is None:
            return False
        return self._store.get_object(first.id).has_datastream(DerivativeKind.TN.code)

    def update_thumbnail(self, object_id: str) -> bool:
        first = self._enumerator.first_page(object_id)
        if first is None:
            Log.skipped(object_id, "no pages to take a thumbnail from")
            return False
        page = self._store.get_object(first.id)
        path = self._materializer.materialize_datastream(page, DerivativeKind.TN.code)
        if path is None:
            Log.skipped(object_id, f"first page {first.id} has no thumbnail")
            return False
        try:
            return self._writer.write_file(
                object_id,
                DerivativeKind.TN.code,
                path,
                self._settings.thumbnail_label,
                page.datastreams[DerivativeKind.TN.code].mime_type,
            )
        finally:
            path.unlink(missing_ok=True)
