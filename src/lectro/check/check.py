"""
High-level checking API for use inside ordinary test functions.

Example:
    >>> from lectro.check import Property, integers, assert_holds
    >>> prop = Property(
    ...     "abs is non-negative",
    ...     {"x": integers()},
    ...     lambda tcon, x: abs(x) >= 0,
    ... )
    >>> assert_holds(prop, trials=100)
"""
from typing import Any

from .property import Property
from .runner import Results, RunnerConfig, TestRunner


def check_property(prop: Property, **options: Any) -> Results:
    """Check a property with a fresh runner.

    Args:
        prop: Property to check
        **options: Runner options (trials, retries, scalefn, seed,
            playback, record, regressions, ...)

    Returns:
        Results of the check
    """
    return TestRunner(RunnerConfig.from_options(**options)).run(prop)


def holds(prop: Property, **options: Any) -> bool:
    """Return True if the property held for every trial."""
    return check_property(prop, **options).success


def assert_holds(prop: Property, **options: Any) -> Results:
    """Check a property and fail the calling test if it does not hold.

    Raises:
        AssertionError: With the rendered details of the check when the
            property was falsified or the check was incomplete
    """
    results = check_property(prop, **options)
    if not results.success:
        raise AssertionError(results.details())
    return results
