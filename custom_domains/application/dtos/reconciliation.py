"""DTOs for the reconciliation sweep."""

from dataclasses import dataclass, field


@dataclass
class SweepResult:
    """Counts from one ReconciliationSweep.run() pass."""

    checked: int = 0
    skipped: int = 0
    activated: int = 0
    failed: int = 0
    errored: int = 0
    errored_tenants: list[str] = field(default_factory=list)
