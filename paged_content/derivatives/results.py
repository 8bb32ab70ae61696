from dataclasses import dataclass, field


@dataclass(frozen=True)
class StepOutcome:
    """Outcome of one sub-step of a derivation."""

    name: str
    succeeded: bool
    required: bool = True
    detail: str = ""


@dataclass
class DerivationResult:
    """Accumulates sub-step outcomes into a single verdict.

    All required steps must succeed. With no required steps recorded, any
    successful optional step is enough.
    """

    kind: str
    object_id: str
    steps: list[StepOutcome] = field(default_factory=list)

    def record(
        self,
        name: str,
        succeeded: bool,
        required: bool = True,
        detail: str = "",
    ) -> bool:
        self.steps.append(StepOutcome(name, succeeded, required, detail))
        return succeeded

    @property
    def succeeded(self) -> bool:
        required = [step for step in self.steps if step.required]
        if required:
            return all(step.succeeded for step in required)
        return any(step.succeeded for step in self.steps)

    @property
    def failed_steps(self) -> list[str]:
        return [step.name for step in self.steps if step.required and not step.succeeded]

    def __bool__(self) -> bool:
        return self.succeeded
