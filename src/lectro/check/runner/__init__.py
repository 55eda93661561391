"""
Trial execution engine, its configuration and results.
"""

from .config import RunnerConfig, default_scale, resolve_store
from .results import Results
from .runner import TestRunner

__all__ = [
    "RunnerConfig",
    "default_scale",
    "resolve_store",
    "Results",
    "TestRunner",
]
