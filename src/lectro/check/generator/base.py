"""
Core generator type.

A generator is a pure function of (size, random source) producing a value.
All combinators in this package build new generators out of existing ones.
"""
import random
from typing import Any, Callable, Optional


class GenerationError(RuntimeError):
    """Raised when a generator cannot produce an acceptable value."""


class Generator:
    """Sized random value producer.

    Wraps a callable taking ``(size, rng)``. The generator keeps no state of
    its own, so two draws with the same size and an identically seeded
    ``random.Random`` yield the same value.

    Attributes:
        fn: Underlying ``(size, rng) -> value`` callable
        name: Optional description used in ``repr``
    """

    def __init__(self, fn: Callable[[int, random.Random], Any], name: Optional[str] = None):
        if not callable(fn):
            raise TypeError(f"Generator expects a callable, got {type(fn).__name__}")
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "generator")

    def generate(self, size: int, rng: Optional[random.Random] = None) -> Any:
        """Draw one value.

        Args:
            size: Non-negative sizing hint
            rng: Random source (a fresh unseeded one if omitted)

        Returns:
            The generated value

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"Generator size must be non-negative, got {size}")
        if rng is None:
            rng = random.Random()
        return self.fn(size, rng)

    __call__ = generate

    def map(self, fn: Callable[[Any], Any]) -> "Generator":
        """Transform every produced value through ``fn``."""
        return Generator(lambda size, rng: fn(self.fn(size, rng)), name=f"map({self.name})")

    def concat_map(self, fn: Callable[[Any], "Generator"]) -> "Generator":
        """Feed each produced value to ``fn`` and draw from the generator it returns."""

        def draw(size: int, rng: random.Random) -> Any:
            inner = fn(self.fn(size, rng))
            if not isinstance(inner, Generator):
                raise TypeError(f"concat_map function must return a Generator, got {type(inner).__name__}")
            return inner.fn(size, rng)

        return Generator(draw, name=f"concat_map({self.name})")

    flat_map = concat_map

    def such_that(self, predicate: Callable[[Any], bool], max_tries: int = 100) -> "Generator":
        """Keep drawing until ``predicate`` accepts a value.

        Args:
            predicate: Acceptance test for drawn values
            max_tries: Draws allowed before giving up

        Returns:
            Generator of accepted values; raises GenerationError when
            ``max_tries`` draws are all rejected
        """
        if max_tries < 1:
            raise ValueError("max_tries must be at least 1")

        def draw(size: int, rng: random.Random) -> Any:
            for _ in range(max_tries):
                value = self.fn(size, rng)
                if predicate(value):
                    return value
            raise GenerationError(f"{self.name}: no value satisfied predicate in {max_tries} tries")

        return Generator(draw, name=f"such_that({self.name})")

    def __repr__(self) -> str:
        return f"Generator({self.name})"
