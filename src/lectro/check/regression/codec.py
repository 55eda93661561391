"""
JSON-compatible encoding of counterexample values.

Plain JSON loses the difference between lists and tuples, cannot key objects
by non-strings and has no NaN. Values JSON cannot express directly are
wrapped in single-key tag objects such as ``{"__tuple__": [...]}``.
"""
import base64
import math
from typing import Any

_TAGS = ("__tuple__", "__set__", "__frozenset__", "__dict__", "__bytes__", "__float__")


def _is_dunder(key: str) -> bool:
    return key.startswith("__") and key.endswith("__")


def encode_value(value: Any) -> Any:
    """Encode a value into a JSON-serializable structure.

    Raises:
        TypeError: For values of unsupported types
    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if math.isnan(value):
            return {"__float__": "nan"}
        if math.isinf(value):
            return {"__float__": "inf" if value > 0 else "-inf"}
        return value
    if isinstance(value, list):
        return [encode_value(v) for v in value]
    if isinstance(value, tuple):
        return {"__tuple__": [encode_value(v) for v in value]}
    if isinstance(value, frozenset):
        return {"__frozenset__": [encode_value(v) for v in value]}
    if isinstance(value, set):
        return {"__set__": [encode_value(v) for v in value]}
    if isinstance(value, (bytes, bytearray)):
        return {"__bytes__": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, dict):
        if all(isinstance(k, str) and not _is_dunder(k) for k in value):
            return {k: encode_value(v) for k, v in value.items()}
        return {"__dict__": [[encode_value(k), encode_value(v)] for k, v in value.items()]}
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def decode_value(data: Any) -> Any:
    """Inverse of ``encode_value``.

    Raises:
        ValueError: For malformed tag objects
    """
    if isinstance(data, list):
        return [decode_value(v) for v in data]
    if not isinstance(data, dict):
        return data
    if len(data) == 1:
        (tag, payload), = data.items()
        if tag in _TAGS:
            return _decode_tagged(tag, payload)
    return {k: decode_value(v) for k, v in data.items()}


def _decode_tagged(tag: str, payload: Any) -> Any:
    if tag == "__float__":
        if payload not in ("nan", "inf", "-inf"):
            raise ValueError(f"Bad float tag payload: {payload!r}")
        return float(payload)
    if tag == "__bytes__":
        if not isinstance(payload, str):
            raise ValueError("Bytes tag payload must be a base64 string")
        return base64.b64decode(payload.encode("ascii"))
    if not isinstance(payload, list):
        raise ValueError(f"{tag} payload must be a list")
    items = [decode_value(v) for v in payload]
    if tag == "__tuple__":
        return tuple(items)
    if tag == "__set__":
        return set(items)
    if tag == "__frozenset__":
        return frozenset(items)
    out = {}
    for pair in items:
        if not isinstance(pair, list) or len(pair) != 2:
            raise ValueError(f"Dict tag entries must be [key, value] pairs, got {pair!r}")
        out[pair[0]] = pair[1]
    return out
