"""Runner configuration.

Defaults can be overridden from the environment:

    LECTRO_TRIALS       trials per binding set
    LECTRO_RETRIES      retry budget per property check
    LECTRO_SEED         seed for the runner's random source
    LECTRO_PLAYBACK     regression file to replay
    LECTRO_RECORD       regression file to append new failures to
    LECTRO_REGRESSIONS  sets both LECTRO_PLAYBACK and LECTRO_RECORD
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import os
from typing import Any, Callable, Mapping, Optional, Union

from ..regression import FailureRecorder, RegressionStore

StoreSpec = Union[str, Path, RegressionStore]

_ENV_PREFIX = "LECTRO_"


def default_scale(base: int) -> int:
    """Default size scaling: grow at roughly half the rate of attempts."""
    return base // 2 + 1


def resolve_store(spec: Optional[StoreSpec]) -> Optional[RegressionStore]:
    """Turn a path or store object into a regression store."""
    if spec is None:
        return None
    if isinstance(spec, (str, Path)):
        return FailureRecorder(spec)
    if hasattr(spec, "load") and hasattr(spec, "append"):
        return spec
    raise TypeError(f"Expected a path or regression store, got {type(spec).__name__}")


def _positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class RunnerConfig:
    """Settings for a TestRunner.

    Attributes:
        trials: Random trials per binding set
        retries: Retries allowed per binding set before the check is
            aborted as incomplete
        scalefn: Maps the attempt-indexed size base to a generator size
        verbose: Whether suite output includes label and counterexample details
        number: Number given to the next property check
        seed: Seed for the random source (None for an unseeded source)
        playback: Path or store replayed before random trials
        record: Path or store new counterexamples are appended to
    """

    trials: int = 1000
    retries: int = 20000
    scalefn: Callable[[int], int] = default_scale
    verbose: bool = True
    number: int = 1
    seed: Optional[int] = None
    playback: Optional[StoreSpec] = None
    record: Optional[StoreSpec] = None

    def __post_init__(self):
        _positive_int("trials", self.trials)
        _positive_int("retries", self.retries)
        _positive_int("number", self.number)
        if not callable(self.scalefn):
            raise ValueError("scalefn must be callable")

    @classmethod
    def from_options(cls, base: Optional["RunnerConfig"] = None, **options: Any) -> "RunnerConfig":
        """Build a config from keyword options.

        ``regressions`` sets ``playback`` and ``record`` together; explicit
        ``playback``/``record`` options win over it.

        Raises:
            TypeError: For unrecognized options
        """
        known = {f.name for f in fields(cls)}
        regressions = options.pop("regressions", None)
        unknown = sorted(set(options) - known)
        if unknown:
            raise TypeError(f"Unrecognized runner options: {', '.join(unknown)}")
        if regressions is not None:
            options.setdefault("playback", regressions)
            options.setdefault("record", regressions)
        return replace(base, **options) if base is not None else cls(**options)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "RunnerConfig":
        """Build a config from ``LECTRO_*`` environment variables, then apply overrides."""
        env = os.environ if environ is None else environ
        options: dict = {}

        for key in ("trials", "retries", "seed"):
            raw = env.get(_ENV_PREFIX + key.upper())
            if raw:
                try:
                    options[key] = int(raw)
                except ValueError:
                    raise ValueError(f"{_ENV_PREFIX}{key.upper()} must be an integer, got {raw!r}") from None

        regressions = env.get(_ENV_PREFIX + "REGRESSIONS")
        if regressions:
            options["playback"] = options["record"] = regressions
        for key in ("playback", "record"):
            raw = env.get(_ENV_PREFIX + key.upper())
            if raw:
                options[key] = raw

        if "regressions" in overrides:
            options.pop("playback", None)
            options.pop("record", None)
        options.update(overrides)
        return cls.from_options(**options)

    def playback_store(self) -> Optional[RegressionStore]:
        return resolve_store(self.playback)

    def record_store(self) -> Optional[RegressionStore]:
        return resolve_store(self.record)
