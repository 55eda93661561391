"""
Property model: named binding sets plus a predicate.

All configuration problems are reported as PropertyError when the Property
is constructed, never later while trials are running.
"""
import copy
import logging
import random
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..generator import Generator
from .controller import TrialController
from .outcome import TrialOutcome, Verdict

logger = logging.getLogger(__name__)

RESERVED_NAME = "tcon"

_OPTION_KEYS = ("inputs", "test", "name")


class PropertyError(ValueError):
    """Malformed property definition."""


class BindingSet(Mapping):
    """Immutable mapping of variable name to Generator.

    Can be built from a mapping, a sequence of ``(name, generator)`` tuples,
    or a flat alternating sequence ``name, generator, name, generator``.
    """

    def __init__(self, spec: Any = ()):
        self._bindings: Dict[str, Generator] = {}
        for name, gen in self._pairs(spec):
            self._bind(name, gen)

    @staticmethod
    def _pairs(spec: Any) -> List[Tuple[Any, Any]]:
        if isinstance(spec, Mapping):
            return list(spec.items())
        if isinstance(spec, (str, bytes)) or not isinstance(spec, Sequence):
            raise PropertyError(f"Cannot build bindings from {type(spec).__name__}")
        items = list(spec)
        if all(isinstance(item, tuple) for item in items):
            for item in items:
                if len(item) != 2:
                    raise PropertyError(f"Binding pair must be (name, generator), got {item!r}")
            return [tuple(item) for item in items]
        if len(items) % 2:
            raise PropertyError(
                f"Flat binding list must alternate name and generator, got {len(items)} items")
        return list(zip(items[0::2], items[1::2]))

    def _bind(self, name: Any, gen: Any) -> None:
        if not isinstance(name, str) or not name.isidentifier():
            raise PropertyError(f"Variable name must be an identifier string, got {name!r}")
        if name == RESERVED_NAME:
            raise PropertyError(f"'{RESERVED_NAME}' is reserved for the trial controller")
        if name in self._bindings:
            raise PropertyError(f"Variable '{name}' is bound twice")
        if not isinstance(gen, Generator):
            raise PropertyError(f"Variable '{name}' must be bound to a Generator, got {type(gen).__name__}")
        self._bindings[name] = gen

    def __getitem__(self, name: str) -> Generator:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={g.name}" for k, g in self._bindings.items())
        return f"BindingSet({inner})"


def _binding_sets(inputs: Any) -> Tuple[BindingSet, ...]:
    if inputs is None:
        raise PropertyError("Property requires inputs (one or more binding sets)")
    if isinstance(inputs, Mapping):
        return (BindingSet(inputs),)
    if isinstance(inputs, (str, bytes)) or not isinstance(inputs, Sequence):
        raise PropertyError(f"Property inputs must be a mapping or a list, got {type(inputs).__name__}")
    if not inputs:
        raise PropertyError("Property requires at least one binding set")
    if all(isinstance(item, (Mapping, list)) for item in inputs):
        return tuple(BindingSet(item) for item in inputs)
    return (BindingSet(inputs),)


class Property:
    """A named predicate over variables bound to generators.

    Attributes:
        name: Identity used for reporting and regression records
        binding_sets: Binding sets, tried in order by the runner
        test: Predicate called as ``test(tcon, **values)``
        variables: Sorted variable names shared by every binding set
    """

    def __init__(self, name: str, inputs: Any, test: Callable[..., Any]):
        if test is None or not callable(test):
            raise PropertyError("Property requires a callable test predicate")
        if not isinstance(name, str) or not name:
            raise PropertyError(f"Property name must be a non-empty string, got {name!r}")

        sets = _binding_sets(inputs)
        variables = frozenset(sets[0])
        for idx, bset in enumerate(sets[1:], start=1):
            if frozenset(bset) != variables:
                raise PropertyError(
                    f"Binding set {idx} binds {sorted(bset)} but binding set 0 binds {sorted(variables)}")

        self._name = name
        self._test = test
        self._binding_sets = sets
        self._variables = tuple(sorted(variables))

    @classmethod
    def from_options(cls, **options: Any) -> "Property":
        """Build a Property from keyword options ``inputs``, ``test`` and ``name``.

        ``name`` defaults to the predicate's ``__name__``. Unrecognized
        options raise PropertyError.
        """
        unknown = sorted(set(options) - set(_OPTION_KEYS))
        if unknown:
            raise PropertyError(f"Unrecognized property options: {', '.join(unknown)}")
        test = options.get("test")
        if test is None:
            raise PropertyError("Property requires a 'test' predicate")
        name = options.get("name") or getattr(test, "__name__", "unnamed property")
        return cls(name, options.get("inputs"), test)

    @property
    def name(self) -> str:
        return self._name

    @property
    def test(self) -> Callable[..., Any]:
        return self._test

    @property
    def binding_sets(self) -> Tuple[BindingSet, ...]:
        return self._binding_sets

    @property
    def variables(self) -> Tuple[str, ...]:
        return self._variables

    def run_trial(self,
                  binding_index: int,
                  size: int,
                  rng: random.Random,
                  forced: Optional[Dict[str, Any]] = None) -> TrialOutcome:
        """Run the predicate once.

        Args:
            binding_index: Which binding set supplies the generators
            size: Sizing hint for the generators
            rng: Random source
            forced: Fixed input values to use instead of drawing

        Returns:
            TrialOutcome; RETRY whenever the controller's retry flag was set,
            ERROR if drawing or the predicate raised
        """
        bset = self._binding_sets[binding_index]
        tcon = TrialController()
        inputs: Optional[Dict[str, Any]] = None
        try:
            if forced is None:
                inputs = {var: bset[var].generate(size, rng) for var in self._variables}
            else:
                inputs = copy.deepcopy(dict(forced))
            ok = self._test(tcon, **inputs)
        except Exception as exc:
            if tcon.retried:
                return TrialOutcome(Verdict.RETRY, inputs=inputs, forced=forced is not None)
            logger.debug("Property '%s' raised during trial", self._name, exc_info=True)
            return TrialOutcome(
                Verdict.ERROR,
                inputs=inputs,
                labels=tuple(tcon.labels),
                error=f"{type(exc).__name__}: {exc}",
                forced=forced is not None,
            )

        if tcon.retried:
            return TrialOutcome(Verdict.RETRY, inputs=inputs, forced=forced is not None)
        return TrialOutcome(
            Verdict.PASS if ok else Verdict.FAIL,
            inputs=inputs,
            labels=tuple(tcon.labels),
            forced=forced is not None,
        )

    def __repr__(self) -> str:
        return f"Property({self._name!r}, variables={list(self._variables)}, binding_sets={len(self._binding_sets)})"
