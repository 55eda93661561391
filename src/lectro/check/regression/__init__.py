"""
Persistence and replay of failure-causing inputs.
"""

from .base import RegressionStore
from .codec import encode_value, decode_value
from .recorder import FailureRecorder, MemoryRecorder

__all__ = [
    "RegressionStore",
    "encode_value",
    "decode_value",
    "FailureRecorder",
    "MemoryRecorder",
]
