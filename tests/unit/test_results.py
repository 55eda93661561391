"""
Tests for Results rendering and invariants.
"""
import pytest

from lectro.check.runner import Results


def test_summary_success():
    """Successful checks report their attempts."""
    r = Results("sorted output", 4, success=True, attempts=1000)
    assert r.summary() == "ok 4 - 'sorted output' (1000 attempts)"
    assert str(r) == r.summary()
    assert r.details() == "ok 4 - 'sorted output' (1000 attempts)\n"


def test_summary_incomplete():
    """Incomplete checks show the abort reason."""
    r = Results("p", 2, attempts=12, incomplete="20000 retries exceeded")
    assert r.summary() == "not ok 2 - 'p' incomplete (20000 retries exceeded)"
    assert not r.falsified


def test_summary_falsified_with_counterexample():
    """Falsified checks render the sorted counterexample as comments."""
    r = Results("p", 1, attempts=5, counterexample={"y": "s", "x": [1, 2]})
    assert r.falsified
    assert r.details() == (
        "not ok 1 - 'p' falsified in 5 attempts\n"
        "# Counterexample:\n"
        "# x = [1, 2]\n"
        "# y = 's'\n"
    )


def test_details_includes_error_text():
    """Caught errors are rendered after the counterexample."""
    r = Results("p", 1, attempts=1, counterexample={"x": 0}, error="ZeroDivisionError: division by zero")
    lines = r.details().splitlines()
    assert lines[-1] == "# Caught exception: ZeroDivisionError: division by zero"


def test_label_frequency_rounding_half_up():
    """Percentages round to the nearest percent, halves going up."""
    r = Results("p", 1, success=True, attempts=8, labels={"rare": 1, "common": 7})
    # 7/8 = 87.5% -> 88, 1/8 = 12.5% -> 13
    assert r.label_frequencies() == " 88% common\n 13% rare\n"


def test_label_frequency_order():
    """Most frequent first; equal counts ordered by label."""
    r = Results("p", 1, success=True, attempts=3, labels={"b": 1, "a": 1, "c": 1})
    assert r.label_frequencies() == " 33% a\n 33% b\n 33% c\n"

    r = Results("p", 1, success=True, attempts=3, labels={"x": 1, "y": 2})
    assert r.label_frequencies() == " 67% y\n 33% x\n"


def test_details_with_labels():
    """Label lines appear as comments in details."""
    r = Results("p", 1, success=True, attempts=4, labels={"a": 3, "b": 1})
    assert r.details() == "ok 1 - 'p' (4 attempts)\n#  75% a\n#  25% b\n"


@pytest.mark.parametrize("kwargs", [
    dict(success=True, counterexample={"x": 1}),
    dict(success=True, incomplete="1 retries exceeded"),
    dict(success=True, error="boom"),
    dict(incomplete="1 retries exceeded", counterexample={"x": 1}),
    dict(),
    dict(counterexample={"x": 1}, labels={"a": 1}),
])
def test_invalid_terminal_states(kwargs):
    """Results must be in exactly one terminal state."""
    with pytest.raises(ValueError):
        Results("p", 1, **kwargs)


def test_results_are_immutable():
    """Results cannot be modified once created."""
    r = Results("p", 1, success=True, attempts=1)
    with pytest.raises(AttributeError):
        r.attempts = 2
