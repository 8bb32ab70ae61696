import hashlib
import re
import tempfile
from pathlib import Path

from paged_content.derivatives.eligibility import EligibilityResolver
from paged_content.derivatives.kinds import DerivativeKind
from paged_content.derivatives.mime import MimeResolver
from paged_content.logging.logger import Log
from paged_content.objects.models import RepositoryObject

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def temp_file_name(object_id: str, dsid: str, extension: str) -> str:
    """Build a file name unique to one object and datastream.

    The digest keeps ids that differ only in unsafe characters apart.
    """
    digest = hashlib.sha1(object_id.encode()).hexdigest()[:8]
    return f"{_UNSAFE_CHARS.sub('_', object_id)}_{digest}_{dsid}{extension}"


class SourceMaterializer:
    """Copies datastream bytes to local files for external tools to read.

    Callers own the returned files and must delete them.
    """

    def __init__(
        self,
        resolver: EligibilityResolver,
        mime: MimeResolver,
        temp_dir: Path | None = None,
    ) -> None:
        self._resolver = resolver
        self._mime = mime
        self._temp_dir = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())

    @property
    def temp_dir(self) -> Path:
        return self._temp_dir

    def materialize(self, obj: RepositoryObject, kind: DerivativeKind) -> Path | None:
        """Write the source datastream for ``kind`` to disk.

        Returns None when the derivative cannot be generated for ``obj``.
        """
        if not self._resolver.can_derive(obj, kind):
            Log.debug(f"Not materializing {kind.source} of {obj.id}: {kind.code} not derivable")
            return None
        return self.materialize_datastream(obj, kind.source)

    def materialize_datastream(self, obj: RepositoryObject, dsid: str) -> Path | None:
        """Write any datastream of ``obj`` to disk, or return None if absent."""
        datastream = obj.datastreams.get(dsid)
        if datastream is None:
            return None
        extension = self._mime.extension_for(datastream.mime_type)
        self._temp_dir.mkdir(parents=True, exist_ok=True)
        path = self._temp_dir / temp_file_name(obj.id, dsid, extension)
        path.write_bytes(datastream.content)
        Log.debug(f"Materialized {obj.id}/{dsid} to {path}")
        return path
