"""
Primitive generators: constants, numbers, characters and collections.
"""
import math
import random
import string
from typing import Any, Optional, Sequence, Tuple, Union

from .base import Generator

DEFAULT_CHARSET = string.ascii_letters + string.digits

Length = Union[None, int, Tuple[int, int]]


def uniform_int(rng: random.Random, lo: int, hi: int) -> int:
    """Draw an integer from the inclusive range [lo, hi], all values equally likely.

    Maps a uniform [0, 1) draw onto the range with floor, never truncation
    toward zero, so negative ranges are neither narrowed nor biased.
    """
    offset = math.floor(rng.random() * (hi - lo + 1))
    return min(hi, lo + offset)


def sized_range(lo: Any, hi: Any, size: int) -> Tuple[Any, Any]:
    """Intersect [lo, hi] with [-size, size]; fall back to [lo, hi] if disjoint."""
    eff_lo = max(lo, -size)
    eff_hi = min(hi, size)
    if eff_lo > eff_hi:
        return lo, hi
    return eff_lo, eff_hi


def _check_length(length: Length) -> None:
    if length is None:
        return
    if isinstance(length, int):
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        return
    lo, hi = length
    if lo < 0 or lo > hi:
        raise ValueError(f"length range must satisfy 0 <= min <= max, got {length}")


def draw_length(length: Length, size: int, rng: random.Random) -> int:
    """Pick a collection length from a length spec and the current size.

    Args:
        length: None (0..size), an exact int, or a (min, max) pair whose
            max is clipped to the size but never below min
        size: Current sizing hint
        rng: Random source

    Returns:
        Chosen length
    """
    if length is None:
        return uniform_int(rng, 0, size)
    if isinstance(length, int):
        return length
    lo, hi = length
    return uniform_int(rng, lo, min(hi, max(lo, size)))


def unit(value: Any) -> Generator:
    """Generator that always returns ``value``."""
    return Generator(lambda size, rng: value, name=f"unit({value!r})")


def integers(lo: int = -32768, hi: int = 32767, sized: bool = True) -> Generator:
    """Integers from the inclusive range [lo, hi].

    Args:
        lo: Lower bound (inclusive)
        hi: Upper bound (inclusive)
        sized: Restrict draws to [-size, size] where that overlaps the range

    Returns:
        Integer generator
    """
    if lo > hi:
        raise ValueError(f"integers: lo must be <= hi, got [{lo}, {hi}]")

    def draw(size: int, rng: random.Random) -> int:
        a, b = sized_range(lo, hi, size) if sized else (lo, hi)
        return uniform_int(rng, a, b)

    return Generator(draw, name=f"integers({lo}, {hi})")


def floats(lo: float = -32768.0, hi: float = 32768.0, sized: bool = True) -> Generator:
    """Floats drawn uniformly from [lo, hi], optionally narrowed by size."""
    if lo > hi:
        raise ValueError(f"floats: lo must be <= hi, got [{lo}, {hi}]")

    def draw(size: int, rng: random.Random) -> float:
        a, b = sized_range(lo, hi, size) if sized else (lo, hi)
        return a + rng.random() * (b - a)

    return Generator(draw, name=f"floats({lo}, {hi})")


def booleans() -> Generator:
    return Generator(lambda size, rng: rng.random() < 0.5, name="booleans")


def chars(charset: str = DEFAULT_CHARSET) -> Generator:
    """Single characters drawn uniformly from ``charset``."""
    if not charset:
        raise ValueError("chars: charset must not be empty")
    return Generator(lambda size, rng: charset[uniform_int(rng, 0, len(charset) - 1)],
                     name="chars")


def strings(length: Length = None, charset: str = DEFAULT_CHARSET) -> Generator:
    """Strings whose length follows ``length`` (see ``draw_length``)."""
    if not charset:
        raise ValueError("strings: charset must not be empty")
    _check_length(length)

    def draw(size: int, rng: random.Random) -> str:
        n = draw_length(length, size, rng)
        return "".join(charset[uniform_int(rng, 0, len(charset) - 1)] for _ in range(n))

    return Generator(draw, name="strings")


def lists(element: Generator, length: Length = None) -> Generator:
    """Lists of independent ``element`` draws.

    Args:
        element: Generator for each item
        length: Length spec (see ``draw_length``)

    Returns:
        List generator
    """
    _check_length(length)

    def draw(size: int, rng: random.Random) -> list:
        n = draw_length(length, size, rng)
        return [element.fn(size, rng) for _ in range(n)]

    return Generator(draw, name=f"lists({element.name})")


def dicts(keys: Generator, values: Generator, length: Length = None) -> Generator:
    """Dicts with ``length`` key draws; duplicate keys collapse."""
    _check_length(length)

    def draw(size: int, rng: random.Random) -> dict:
        n = draw_length(length, size, rng)
        out = {}
        for _ in range(n):
            key = keys.fn(size, rng)
            out[key] = values.fn(size, rng)
        return out

    return Generator(draw, name=f"dicts({keys.name}, {values.name})")


def elements(values: Sequence[Any]) -> Generator:
    """Uniform choice among ``values``."""
    choices = list(values)
    if not choices:
        raise ValueError("elements: values must not be empty")
    return Generator(lambda size, rng: choices[uniform_int(rng, 0, len(choices) - 1)],
                     name="elements")


def optional(gen: Generator, none_weight: Optional[float] = None) -> Generator:
    """Either None or a draw from ``gen``.

    Args:
        gen: Generator for the non-None case
        none_weight: Probability of None (default 1 / (size + 2), so
            None gets rarer as trials grow)
    """
    if none_weight is not None and not 0.0 <= none_weight <= 1.0:
        raise ValueError("none_weight must be within [0, 1]")

    def draw(size: int, rng: random.Random) -> Any:
        p = none_weight if none_weight is not None else 1.0 / (size + 2)
        if rng.random() < p:
            return None
        return gen.fn(size, rng)

    return Generator(draw, name=f"optional({gen.name})")
