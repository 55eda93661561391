"""
Property model and per-trial controller.
"""

from .controller import TrialController
from .outcome import Verdict, TrialOutcome
from .model import Property, BindingSet, PropertyError, RESERVED_NAME

__all__ = [
    "TrialController",
    "Verdict",
    "TrialOutcome",
    "Property",
    "BindingSet",
    "PropertyError",
    "RESERVED_NAME",
]
