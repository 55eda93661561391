"""
Sized random generators and the combinators that compose them.
"""

from .base import Generator, GenerationError
from .primitives import (
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
    uniform_int,
)
from .combinators import (
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
    "uniform_int",
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
]
