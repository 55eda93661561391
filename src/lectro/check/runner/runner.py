"""
Test runner: drives sized, retried, labeled trials of a property.

For each binding set of a property the runner first replays recorded
counterexamples, then runs the configured number of random trials. The
check stops at the first failing trial, or aborts as incomplete once the
retry budget is used up.
"""

from __future__ import annotations

from collections import Counter
import logging
import random
import sys
from typing import Any, Dict, Iterable, List, Optional, TextIO

from ..property import Property, TrialOutcome, Verdict
from .config import RunnerConfig
from .results import Results

logger = logging.getLogger(__name__)


class TestRunner:
    """Checks properties by running repeated random trials.

    The report sequence number is owned by the runner instance: each
    ``run`` without an explicit number takes the next one.

    Attributes:
        config: Settings in effect
        number: Number the next property check will receive
        rng: Random source shared by all checks of this runner
    """

    __test__ = False

    def __init__(self, config: Optional[RunnerConfig] = None, **options: Any):
        if options:
            config = RunnerConfig.from_options(config, **options)
        self.config = config or RunnerConfig()
        self.number = self.config.number
        self.rng = random.Random(self.config.seed)
        self._playback = self.config.playback_store()
        self._record = self.config.record_store()

    @property
    def trials(self) -> int:
        return self.config.trials

    @property
    def retries(self) -> int:
        return self.config.retries

    @property
    def verbose(self) -> bool:
        return self.config.verbose

    def run(self, prop: Property, number: Optional[int] = None) -> Results:
        """Check whether a property holds.

        Args:
            prop: Property to check
            number: Report number; the runner's next number if omitted

        Returns:
            Results of the check. Exceptions raised by generators or the
            predicate are reported in the results, never propagated.
        """
        if number is None:
            number = self.number
            self.number += 1

        cfg = self.config
        replays = self._load_playback(prop)
        label_counts: Counter = Counter()
        attempts = 0

        logger.debug("Checking property '%s' (#%d): %d binding set(s), %d replay(s)",
                     prop.name, number, len(prop.binding_sets), len(replays))

        for idx in range(len(prop.binding_sets)):
            retries = 0
            base = 0
            plan: List[Optional[Dict[str, Any]]] = list(replays) + [None] * cfg.trials

            for forced in plan:
                while True:
                    if forced is None:
                        base += 1
                        outcome = prop.run_trial(idx, int(cfg.scalefn(base)), self.rng)
                    else:
                        outcome = prop.run_trial(idx, 0, self.rng, forced=forced)

                    if outcome.verdict != Verdict.RETRY:
                        break
                    retries += 1
                    if retries >= cfg.retries:
                        logger.debug("Property '%s' exhausted %d retries", prop.name, retries)
                        return Results(prop.name, number, attempts=attempts,
                                       incomplete=f"{retries} retries exceeded")
                    if forced is not None:
                        # A rejected replay is dropped, not redrawn.
                        break

                if outcome.verdict == Verdict.RETRY:
                    continue

                attempts += 1
                if outcome.labels:
                    label_counts[" & ".join(sorted(outcome.labels))] += 1

                if outcome.failed:
                    return self._falsified(prop, number, attempts, outcome)

        logger.debug("Property '%s' held for %d attempts", prop.name, attempts)
        return Results(prop.name, number, success=True, attempts=attempts,
                       labels=dict(label_counts) or None)

    def run_suite(self,
                  properties: Iterable[Property],
                  out: Optional[TextIO] = None,
                  verbose: Optional[bool] = None) -> bool:
        """Check several properties, writing harness-style output.

        Numbering restarts at 1. Each property produces its summary line, or
        its full details when verbose.

        Args:
            properties: Properties to check, in order
            out: Stream to write to (stdout by default)
            verbose: Override the configured verbosity

        Returns:
            True if every property held
        """
        out = out or sys.stdout
        verbose = self.config.verbose if verbose is None else verbose
        props = list(properties)

        self.number = 1
        out.write(f"1..{len(props)}\n")
        success = True
        for prop in props:
            results = self.run(prop)
            out.write(results.details() if verbose else results.summary() + "\n")
            success = success and results.success
        out.flush()
        return success

    def _load_playback(self, prop: Property) -> List[Dict[str, Any]]:
        if self._playback is None:
            return []
        expected = set(prop.variables)
        replays = []
        for entry in self._playback.load(prop.name):
            if set(entry) != expected:
                logger.warning("Skipping recorded inputs for '%s': variables %s do not match %s",
                               prop.name, sorted(entry), sorted(expected))
                continue
            replays.append(entry)
        return replays

    def _falsified(self, prop: Property, number: int, attempts: int, outcome: TrialOutcome) -> Results:
        logger.debug("Property '%s' falsified after %d attempts: %s", prop.name, attempts, outcome)
        if outcome.inputs is not None and not outcome.forced:
            self._record_failure(prop.name, outcome.inputs)
        return Results(prop.name, number, attempts=attempts,
                       counterexample=outcome.inputs, error=outcome.error)

    def _record_failure(self, name: str, inputs: Dict[str, Any]) -> None:
        if self._record is None:
            return
        try:
            self._record.append(name, inputs)
        except (TypeError, OSError) as e:
            logger.warning("Counterexample for '%s' could not be recorded: %s", name, e)
