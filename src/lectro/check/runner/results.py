"""
Property check results and their text rendering.
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any, List


@dataclass(frozen=True)
class Results:
    """Outcome of checking one property.

    A check ends in exactly one state: success, incomplete (retry budget
    exhausted, truth unknown) or falsified (counterexample and/or caught
    error present).

    Attributes:
        name: Property name
        number: Sequence number used in reports
        success: True if every trial passed
        attempts: Trials that ran to a pass/fail outcome (retries excluded)
        counterexample: Variable values of the failing trial
        error: Text of the exception that failed the trial, if any
        incomplete: Reason the check was aborted, if it was
        labels: Trial count per label combination (successful checks only)
    """
    name: str
    number: int
    success: bool = False
    attempts: int = 0
    counterexample: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    incomplete: Optional[str] = None
    labels: Optional[Dict[str, int]] = None

    def __post_init__(self):
        if self.success and (self.counterexample is not None or self.incomplete or self.error):
            raise ValueError("Successful results cannot carry a counterexample, error or incomplete reason")
        if self.incomplete and self.counterexample is not None:
            raise ValueError("Incomplete results cannot carry a counterexample")
        if not self.success and not self.incomplete and self.counterexample is None and not self.error:
            raise ValueError("Failed results need a counterexample or an error")
        if self.labels and not self.success:
            raise ValueError("Label counts are only kept for successful checks")

    @property
    def falsified(self) -> bool:
        return not self.success and not self.incomplete

    def summary(self) -> str:
        """One-line outcome, without a trailing newline."""
        if self.success:
            return f"ok {self.number} - '{self.name}' ({self.attempts} attempts)"
        if self.incomplete:
            return f"not ok {self.number} - '{self.name}' incomplete ({self.incomplete})"
        return f"not ok {self.number} - '{self.name}' falsified in {self.attempts} attempts"

    def label_frequencies(self) -> str:
        """Percentage of trials per label combination, most frequent first.

        Percentages are rounded half up. Returns an empty string when no
        trial was labeled.
        """
        if not self.labels or not self.attempts:
            return ""
        total = self.attempts
        ordered = sorted(self.labels.items(), key=lambda kv: (-kv[1], kv[0]))
        lines = ["% 3d%% %s" % ((200 * count + total) // (2 * total), label)
                 for label, count in ordered]
        return "\n".join(lines) + "\n"

    def counterexample_text(self) -> str:
        if self.counterexample is None:
            return ""
        lines: List[str] = ["Counterexample:"]
        for var, val in sorted(self.counterexample.items()):
            lines.append(f"{var} = {val!r}")
        return "\n".join(lines) + "\n"

    def details(self) -> str:
        """Summary line plus label frequencies, counterexample and caught error.

        Extra lines are prefixed with ``# `` so harnesses treat them as
        comments. The result always ends with a newline.
        """
        extras = self.label_frequencies() + self.counterexample_text()
        if self.error:
            extras += f"Caught exception: {self.error}\n"
        commented = "".join("# " + line for line in extras.splitlines(keepends=True))
        if commented and not commented.endswith("\n"):
            commented += "\n"
        return self.summary() + "\n" + commented

    def __str__(self) -> str:
        return self.summary()
