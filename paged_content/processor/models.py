from dataclasses import dataclass, field

from paged_content.derivatives.results import DerivationResult


@dataclass(frozen=True)
class BatchEntry:
    """One object/derivative pair handled by a batch run."""

    object_id: str
    kind: str
    detail: str = ""


@dataclass
class BatchReport:
    """Accumulates per-page outcomes of a batch run."""

    object_id: str
    derived: list[BatchEntry] = field(default_factory=list)
    skipped: list[BatchEntry] = field(default_factory=list)
    failed: list[BatchEntry] = field(default_factory=list)

    def add_result(self, result: DerivationResult) -> None:
        if result.succeeded:
            self.derived.append(BatchEntry(result.object_id, result.kind))
        else:
            detail = ", ".join(result.failed_steps)
            self.failed.append(BatchEntry(result.object_id, result.kind, detail))

    def skip(self, object_id: str, kind: str, reason: str) -> None:
        self.skipped.append(BatchEntry(object_id, kind, reason))

    def fail(self, object_id: str, kind: str, reason: str) -> None:
        self.failed.append(BatchEntry(object_id, kind, reason))

    @property
    def succeeded(self) -> bool:
        return not self.failed
