from paged_content.derivatives.capabilities import CapabilityProbe
from paged_content.derivatives.kinds import DerivativeKind
from paged_content.logging.logger import Log
from paged_content.objects.models import RECOGNIZED_MODELS, RepositoryObject


class EligibilityResolver:
    """Decides whether a derivative can be generated for an object.

    Never raises for an ineligible object; batch callers skip on False.
    """

    def __init__(self, probe: CapabilityProbe) -> None:
        self._probe = probe

    def can_derive(self, obj: RepositoryObject, kind: DerivativeKind | str) -> bool:
        if isinstance(kind, str):
            try:
                kind = DerivativeKind.parse(kind)
            except ValueError:
                Log.debug(f"Unknown derivative '{kind}' requested for {obj.id}")
                return False
        if not obj.models & RECOGNIZED_MODELS:
            return False
        if not (self._probe.is_enabled(kind) and self._probe.is_available(kind.capability)):
            return False
        return obj.has_datastream(kind.source)

    def reason(self, obj: RepositoryObject, kind: DerivativeKind) -> str:
        """Explain the first failing precondition, or an empty string."""
        if not obj.models & RECOGNIZED_MODELS:
            return "object is not paged content or a page"
        if not self._probe.is_enabled(kind):
            return f"{kind.code} derivation is disabled"
        if not self._probe.is_available(kind.capability):
            return f"{kind.capability.value} backend is not installed"
        if not obj.has_datastream(kind.source):
            return f"missing {kind.source} datastream"
        return ""
