from pathlib import Path

from paged_content.derivatives.mime import MimeResolver
from paged_content.logging.logger import Log
from paged_content.objects.models import Datastream
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.exceptions import StoreError


class DatastreamWriter:
    """Stores local derivative files as managed datastreams."""

    def __init__(self, store: BaseRepositoryStore, mime: MimeResolver) -> None:
        self._store = store
        self._mime = mime

    def write_file(
        self,
        object_id: str,
        dsid: str,
        path: Path,
        label: str,
        mime_type: str | None = None,
    ) -> bool:
        """Create or overwrite ``dsid`` with the file's bytes.

        Returns False when the file is missing or the store rejects the write.
        """
        try:
            content = path.read_bytes()
        except OSError as exc:
            Log.error(f"Cannot read derivative {path} for {object_id}/{dsid}: {exc}")
            return False
        datastream = Datastream(
            id=dsid,
            content=content,
            mime_type=mime_type or self._mime.mime_for(path),
            label=label,
        )
        try:
            self._store.write_datastream(object_id, datastream)
        except StoreError as exc:
            Log.error(f"Failed to store {dsid} on {object_id}: {exc}")
            return False
        Log.info(f"Stored {dsid} ({len(content)} bytes) on {object_id}")
        return True
