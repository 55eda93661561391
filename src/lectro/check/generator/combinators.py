"""
Generator combinators.

Each combinator builds a new Generator from existing ones. Errors raised by
user-supplied functions propagate unchanged to whoever draws the value.
"""
import random
from typing import Any, Callable, List, Sequence, Tuple

from .base import Generator
from .primitives import uniform_int


def _require_generators(where: str, gens: Sequence[Any]) -> Tuple[Generator, ...]:
    for g in gens:
        if not isinstance(g, Generator):
            raise TypeError(f"{where}: expected Generator, got {type(g).__name__}")
    return tuple(gens)


def each(*gens: Generator) -> Generator:
    """Tuple of independent draws, one per generator."""
    gens = _require_generators("each", gens)
    return Generator(lambda size, rng: tuple(g.fn(size, rng) for g in gens), name="each")


def apply(fn: Callable[..., Any], *gens: Generator) -> Generator:
    """Call ``fn`` with one draw from each generator as positional arguments."""
    gens = _require_generators("apply", gens)
    return Generator(lambda size, rng: fn(*(g.fn(size, rng) for g in gens)),
                     name=f"apply({getattr(fn, '__name__', 'fn')})")


def concat(*gens: Generator) -> Generator:
    """Concatenate the sequences drawn from each generator into one list."""
    gens = _require_generators("concat", gens)

    def draw(size: int, rng: random.Random) -> List[Any]:
        out: List[Any] = []
        for g in gens:
            out.extend(g.fn(size, rng))
        return out

    return Generator(draw, name="concat")


def map_gen(fn: Callable[[Any], Any], *gens: Generator) -> Generator:
    """Apply ``fn`` to each generator's draw.

    With one generator the mapped value itself is produced; with several,
    the list of mapped values.
    """
    gens = _require_generators("map_gen", gens)
    if len(gens) == 1:
        return gens[0].map(fn)
    return Generator(lambda size, rng: [fn(g.fn(size, rng)) for g in gens], name="map_gen")


def concat_map(gen: Generator, fn: Callable[[Any], Generator]) -> Generator:
    """Draw from ``gen``, hand the value to ``fn`` and draw from the generator it returns."""
    _require_generators("concat_map", (gen,))
    return gen.concat_map(fn)


def flatten(gen: Generator) -> Generator:
    """Generator of generators to generator of values."""
    _require_generators("flatten", (gen,))
    return gen.concat_map(lambda inner: inner)


def one_of(*gens: Generator) -> Generator:
    """Pick one generator uniformly, then draw from it."""
    gens = _require_generators("one_of", gens)
    if not gens:
        raise ValueError("one_of: at least one generator is required")
    return Generator(lambda size, rng: gens[uniform_int(rng, 0, len(gens) - 1)].fn(size, rng),
                     name="one_of")


def frequency(*weighted: Tuple[int, Generator]) -> Generator:
    """Pick a generator with probability proportional to its weight.

    Args:
        weighted: ``(weight, generator)`` pairs with positive integer weights
    """
    if not weighted:
        raise ValueError("frequency: at least one (weight, generator) pair is required")
    for weight, gen in weighted:
        if not isinstance(weight, int) or weight < 1:
            raise ValueError(f"frequency: weights must be positive integers, got {weight!r}")
        _require_generators("frequency", (gen,))
    total = sum(w for w, _ in weighted)

    def draw(size: int, rng: random.Random) -> Any:
        pick = uniform_int(rng, 1, total)
        for weight, gen in weighted:
            pick -= weight
            if pick <= 0:
                return gen.fn(size, rng)
        raise AssertionError("unreachable")

    return Generator(draw, name="frequency")


def sized(fn: Callable[[int], int], gen: Generator) -> Generator:
    """Draw ``gen`` at ``fn(size)`` instead of ``size``."""
    _require_generators("sized", (gen,))

    def draw(size: int, rng: random.Random) -> Any:
        new_size = fn(size)
        if new_size < 0:
            raise ValueError(f"sized: size function returned negative size {new_size}")
        return gen.fn(new_size, rng)

    return Generator(draw, name=f"sized({gen.name})")


def resize(n: int, gen: Generator) -> Generator:
    """Draw ``gen`` at the fixed size ``n``."""
    if n < 0:
        raise ValueError(f"resize: size must be non-negative, got {n}")
    return sized(lambda _size: n, gen)
