"""
Randomized property checking.

State invariants as properties over generated inputs; the runner draws many
sized random samples and reports success or the first counterexample, and
a regression recorder replays past counterexamples on later runs.
"""

__version__ = "0.1.0"

from .generator import (
    Generator,
    GenerationError,
    unit,
    integers,
    floats,
    booleans,
    chars,
    strings,
    lists,
    dicts,
    elements,
    optional,
    each,
    apply,
    concat,
    map_gen,
    concat_map,
    flatten,
    one_of,
    frequency,
    sized,
    resize,
)
from .property import (
    Property,
    BindingSet,
    PropertyError,
    TrialController,
    TrialOutcome,
    Verdict,
)
from .regression import FailureRecorder, MemoryRecorder, RegressionStore
from .runner import Results, RunnerConfig, TestRunner
from .check import check_property, holds, assert_holds

__all__ = [
    "Generator",
    "GenerationError",
    "unit",
    "integers",
    "floats",
    "booleans",
    "chars",
    "strings",
    "lists",
    "dicts",
    "elements",
    "optional",
    "each",
    "apply",
    "concat",
    "map_gen",
    "concat_map",
    "flatten",
    "one_of",
    "frequency",
    "sized",
    "resize",
    "Property",
    "BindingSet",
    "PropertyError",
    "TrialController",
    "TrialOutcome",
    "Verdict",
    "FailureRecorder",
    "MemoryRecorder",
    "RegressionStore",
    "Results",
    "RunnerConfig",
    "TestRunner",
    "check_property",
    "holds",
    "assert_holds",
]
