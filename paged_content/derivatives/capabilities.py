import shutil
from collections.abc import Callable

from paged_content.config.settings import Settings
from paged_content.derivatives.kinds import Capability, DerivativeKind


class CapabilityProbe:
    """Answers whether a derivative backend is installed and a kind is enabled.

    Binary lookups are cached for the lifetime of the probe.
    """

    def __init__(
        self,
        settings: Settings,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._settings = settings
        self._which = which
        self._enabled = frozenset(code.upper() for code in settings.enabled_derivatives)
        self._cache: dict[str, bool] = {}

    def binaries_for(self, capability: Capability) -> tuple[str, ...]:
        if capability is Capability.OCR:
            return (self._settings.tesseract_binary,)
        return (self._settings.convert_binary,)

    def is_available(self, capability: Capability) -> bool:
        return all(self.has_binary(binary) for binary in self.binaries_for(capability))

    def can_merge_pdfs(self) -> bool:
        return self.has_binary(self._settings.gs_binary)

    def is_enabled(self, kind: DerivativeKind) -> bool:
        return kind.code in self._enabled

    def has_binary(self, binary: str) -> bool:
        if binary not in self._cache:
            self._cache[binary] = self._which(binary) is not None
        return self._cache[binary]
