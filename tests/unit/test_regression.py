"""
Tests for regression recording and playback.
"""
import json
import math

import pytest

from lectro.check.generator import integers, unit
from lectro.check.property import Property
from lectro.check.regression import (
    FailureRecorder,
    MemoryRecorder,
    decode_value,
    encode_value,
)
from lectro.check.runner import TestRunner


def test_codec_round_trip_nested_values():
    """Numbers, strings and nested collections survive encoding."""
    value = {
        "n": -12345678901234567890,
        "f": 0.1,
        "s": "héllo",
        "l": [1, [2, (3, "x")]],
        "t": (),
        "d": {(1, 2): {"inner": None}, 3: True},
        "set": {1, 2, 3},
        "fs": frozenset(["a"]),
        "b": b"\x00\xff",
        "__tuple__": "not a tag",
    }
    text = json.dumps(encode_value(value))
    decoded = decode_value(json.loads(text))
    assert decoded == value
    assert isinstance(decoded["l"][1][1], tuple)
    assert json.dumps(encode_value(decoded)) == text


def test_codec_special_floats():
    """Non-finite floats are tagged rather than lost."""
    decoded = decode_value(json.loads(json.dumps(encode_value([math.inf, -math.inf, math.nan]))))
    assert decoded[0] == math.inf
    assert decoded[1] == -math.inf
    assert math.isnan(decoded[2])


def test_codec_rejects_unsupported_types():
    """Values without a faithful encoding are refused."""
    with pytest.raises(TypeError):
        encode_value({"x": object()})


def test_recorder_missing_file_is_empty(record_file):
    """No file means no playback entries."""
    assert FailureRecorder(record_file).load("P") == []


def test_recorder_append_and_load(record_file):
    """Entries are kept per property in append order."""
    rec = FailureRecorder(record_file)
    rec.append("P", {"x": 1})
    rec.append("Q", {"x": 2})
    rec.append("P", {"x": (3, 4)})

    assert rec.load("P") == [{"x": 1}, {"x": (3, 4)}]
    assert rec.load("Q") == [{"x": 2}]
    assert FailureRecorder(record_file).load("R") == []
    assert len(record_file.read_text().splitlines()) == 3


def test_recorder_skips_garbage_and_ignores_extra_fields(record_file):
    """Old entries stay readable next to torn lines and newer fields."""
    record_file.write_text(
        '{"property": "P", "inputs": {"x": 1}}\n'
        '\n'
        '{"property": "P", "inputs": {"x": 2}, "recorded_by": "v2"}\n'
        '{"property": "P", "inputs": [1, 2]}\n'
        '{"property": "P", "inp\n'
    )
    assert FailureRecorder(record_file).load("P") == [{"x": 1}, {"x": 2}]


def test_recorder_unsupported_value_leaves_file_untouched(record_file):
    """Encoding happens before the file is touched."""
    rec = FailureRecorder(record_file)
    rec.append("P", {"x": 1})
    with pytest.raises(TypeError):
        rec.append("P", {"x": object()})
    assert rec.load("P") == [{"x": 1}]


def test_recorder_creates_parent_directories(tmp_path):
    """Record paths may point into directories that do not exist yet."""
    path = tmp_path / "nested" / "dir" / "failures.jsonl"
    FailureRecorder(path).append("P", {"x": 1})
    assert FailureRecorder(path).load("P") == [{"x": 1}]


def test_memory_recorder():
    """The in-memory store follows the same protocol."""
    rec = MemoryRecorder()
    rec.append("P", {"x": [1, 2]})
    assert rec.load("P") == [{"x": [1, 2]}]
    assert rec.load("Q") == []
    assert rec.names() == ["P"]
    with pytest.raises(TypeError):
        rec.append("P", {"x": object()})


def test_failure_is_recorded_and_replayed_first(record_file):
    """A recorded counterexample is replayed before random inputs."""
    first = Property("P", {"x": unit(41)}, lambda tcon, x: x != 41)
    results = TestRunner(trials=10, record=record_file).run(first)
    assert results.counterexample == {"x": 41}
    assert FailureRecorder(record_file).load("P") == [{"x": 41}]

    seen = []

    def rejects_41(tcon, x):
        seen.append(x)
        return x != 41

    second = Property("P", {"x": integers(0, 10)}, rejects_41)
    results = TestRunner(trials=10, playback=record_file).run(second)

    assert seen == [41]
    assert results.attempts == 1
    assert results.counterexample == {"x": 41}


def test_replays_count_as_attempts(record_file):
    """Replayed trials add to the attempt count of each binding set."""
    FailureRecorder(record_file).append("P", {"x": 5})
    prop = Property("P", [{"x": unit(0)}, {"x": unit(1)}], lambda tcon, x: True)
    results = TestRunner(trials=3, playback=record_file).run(prop)
    assert results.success is True
    assert results.attempts == 2 * (1 + 3)


def test_replayed_failure_not_recorded_again(record_file):
    """Failing replays do not duplicate entries in a shared file."""
    FailureRecorder(record_file).append("P", {"x": 7})
    prop = Property("P", {"x": unit(0)}, lambda tcon, x: x != 7)
    results = TestRunner(trials=3, regressions=record_file).run(prop)
    assert results.counterexample == {"x": 7}
    assert FailureRecorder(record_file).load("P") == [{"x": 7}]


def test_playback_and_record_kept_apart(tmp_path):
    """New failures go to the record file, not the playback file."""
    playback = tmp_path / "curated.jsonl"
    record = tmp_path / "found.jsonl"
    FailureRecorder(playback).append("P", {"x": 1})

    prop = Property("P", {"x": unit(2)}, lambda tcon, x: x == 1)
    results = TestRunner(trials=3, playback=playback, record=record).run(prop)

    assert results.counterexample == {"x": 2}
    assert FailureRecorder(playback).load("P") == [{"x": 1}]
    assert FailureRecorder(record).load("P") == [{"x": 2}]


def test_mismatched_replay_is_skipped(record_file):
    """Recorded inputs for other variables are not forced on the property."""
    FailureRecorder(record_file).append("P", {"y": 1})
    prop = Property("P", {"x": unit(0)}, lambda tcon, x: True)
    results = TestRunner(trials=2, playback=record_file).run(prop)
    assert results.success is True
    assert results.attempts == 2


def test_unrecordable_counterexample_still_reported():
    """A counterexample the codec cannot encode is reported, not recorded."""
    store = MemoryRecorder()
    marker = object()
    prop = Property("P", {"x": unit(marker)}, lambda tcon, x: False)
    results = TestRunner(trials=1, record=store).run(prop)
    assert results.counterexample == {"x": marker}
    assert store.load("P") == []


def test_retried_replay_is_dropped(record_file):
    """A replay the predicate rejects is not redrawn and not counted."""
    FailureRecorder(record_file).append("P", {"x": -1})

    def skip_negative(tcon, x):
        if x < 0:
            return tcon.retry()
        return True

    results = TestRunner(trials=2, playback=record_file).run(Property("P", {"x": unit(3)}, skip_negative))
    assert results.success is True
    assert results.attempts == 2


def test_recorder_skips_invalid_utf8_line(record_file):
    """A line that is not valid UTF-8 does not hide the entries around it."""
    FailureRecorder(record_file).append("P", {"x": 7})
    with record_file.open("ab") as f:
        f.write(b'{"property": "Q", "inputs": {"x": "\xff\xfe"}}\n')
    FailureRecorder(record_file).append("P", {"x": 8})

    assert FailureRecorder(record_file).load("P") == [{"x": 7}, {"x": 8}]

    seen = []

    def record_x(tcon, x):
        seen.append(x)
        return True

    results = TestRunner(trials=3, playback=record_file).run(Property("P", {"x": unit(0)}, record_x))
    assert results.success is True
    assert seen[:2] == [7, 8]


def test_unwritable_record_path_still_reports_counterexample(tmp_path):
    """A record destination that cannot be written does not lose the result."""
    prop = Property("P", {"x": unit(3)}, lambda tcon, x: x != 3)
    results = TestRunner(trials=3, record=tmp_path).run(prop)
    assert results.success is False
    assert results.counterexample == {"x": 3}
    assert results.summary() == "not ok 1 - 'P' falsified in 1 attempts"


def test_replay_is_not_changed_by_predicate(record_file):
    """Each binding set replays the recorded value, even if a trial mutated it."""
    FailureRecorder(record_file).append("P", {"xs": [1, 2]})
    seen = []

    def mutate(tcon, xs):
        seen.append(list(xs))
        xs.append(99)
        return True

    prop = Property("P", [{"xs": unit([])}, {"xs": unit([])}], mutate)
    TestRunner(trials=1, playback=record_file).run(prop)
    assert seen[0] == [1, 2]
    assert seen[2] == [1, 2]
