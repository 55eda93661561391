"""
Trial outcome types.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, Tuple


class Verdict(Enum):
    """Result of running a property predicate once."""
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    RETRY = "retry"


@dataclass(frozen=True)
class TrialOutcome:
    """Outcome of a single trial.

    Attributes:
        verdict: PASS/FAIL/ERROR/RETRY
        inputs: Bound values for the trial (None if drawing them raised)
        labels: Labels attached by the predicate
        error: Text of the caught exception for ERROR verdicts
        forced: True if the inputs were replayed rather than generated
    """
    verdict: Verdict
    inputs: Optional[Dict[str, Any]] = None
    labels: Tuple[str, ...] = ()
    error: Optional[str] = None
    forced: bool = False

    @property
    def failed(self) -> bool:
        return self.verdict in (Verdict.FAIL, Verdict.ERROR)

    def __str__(self) -> str:
        if self.verdict == Verdict.ERROR:
            return f"Trial error: {self.error}"
        inputs = ", ".join(f"{k}={v!r}" for k, v in sorted((self.inputs or {}).items()))
        return f"Trial {self.verdict.value}: {inputs}"
