"""
Per-trial controller handed to property predicates.
"""
from typing import List


class TrialController:
    """Lets a predicate reject its inputs or label the current trial.

    A fresh controller is created for every trial and discarded once the
    trial's outcome has been recorded.

    Attributes:
        retried: True once ``retry`` has been called
        labels: Labels attached during this trial, in call order
    """

    def __init__(self):
        self.retried: bool = False
        self.labels: List[str] = []

    def retry(self) -> None:
        """Discard this trial and re-run it with fresh inputs.

        Returns None so predicates can write ``return tcon.retry()``.
        """
        self.retried = True

    def label(self, *labels: str) -> None:
        """Attach labels to the trial. Empty labels are ignored."""
        for lbl in labels:
            if lbl:
                self.labels.append(str(lbl))

    def trivial(self) -> None:
        """Shorthand for ``label("trivial")``."""
        self.label("trivial")

    def __repr__(self) -> str:
        return f"TrialController(retried={self.retried}, labels={self.labels!r})"
