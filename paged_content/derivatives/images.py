from pathlib import Path

from paged_content.config.settings import Settings
from paged_content.derivatives.kinds import Capability, DerivativeKind
from paged_content.derivatives.materializer import SourceMaterializer
from paged_content.derivatives.results import DerivationResult
from paged_content.derivatives.writer import DatastreamWriter
from paged_content.objects.models import RepositoryObject
from paged_content.process.runner import CommandRunner


class ImageDerivativePipeline:
    """Generates TN, JPG and JP2 datastreams from a page's OBJ image."""

    def __init__(
        self,
        materializer: SourceMaterializer,
        writer: DatastreamWriter,
        runner: CommandRunner,
        settings: Settings,
    ) -> None:
        self._materializer = materializer
        self._writer = writer
        self._runner = runner
        self._settings = settings

    def convert_arguments(self, kind: DerivativeKind) -> list[str]:
        if kind is DerivativeKind.TN:
            return ["-thumbnail", self._settings.tn_size]
        if kind is DerivativeKind.JPG:
            return ["-resize", self._settings.jpg_size]
        if kind is DerivativeKind.JP2:
            return ["-define", "jp2:rate=0.5"]
        raise ValueError(f"{kind.code} is not an image derivative")

    def derive(self, obj: RepositoryObject, kind: DerivativeKind) -> DerivationResult:
        if kind.capability is not Capability.IMAGE:
            raise ValueError(f"{kind.code} is not an image derivative")
        result = DerivationResult(kind.code, obj.id)
        source = self._materializer.materialize(obj, kind)
        result.record("materialize", source is not None)
        if source is None:
            return result

        extension = ".jp2" if kind is DerivativeKind.JP2 else ".jpg"
        output = Path(f"{source}.{kind.code.lower()}{extension}")
        try:
            # [0] selects the first frame of multi-page sources.
            converted = self._runner.run(
                [
                    self._settings.convert_binary,
                    f"{source}[0]",
                    *self.convert_arguments(kind),
                    str(output),
                ]
            )
            if result.record("convert", converted.succeeded, detail=converted.output):
                result.record(
                    "store",
                    self._writer.write_file(
                        obj.id, kind.code, output, kind.label, kind.mime_type
                    ),
                )
        finally:
            source.unlink(missing_ok=True)
            output.unlink(missing_ok=True)
        return result
