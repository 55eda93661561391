"""
Abstract interface for regression stores.
"""
from typing import Protocol, Any, Dict, List


class RegressionStore(Protocol):
    """Protocol for persisted counterexample stores.

    The runner reads all entries for a property before its first random
    trial and appends an entry whenever a new counterexample is found.
    Implementations may keep playback and record destinations separate.
    """

    def load(self, name: str) -> List[Dict[str, Any]]:
        """Return prior failing inputs recorded for a property.

        Args:
            name: Property name

        Returns:
            Input mappings in the order they were recorded (empty if none)
        """
        ...

    def append(self, name: str, inputs: Dict[str, Any]) -> None:
        """Persist a failing input mapping under a property name.

        Args:
            name: Property name
            inputs: Variable name to value mapping that falsified the property
        """
        ...
