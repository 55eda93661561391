"""
Regression recorders: durable JSON Lines files and an in-memory store.

File format: one JSON object per line,
``{"property": <name>, "inputs": <encoded mapping>}``. Entries are only ever
appended. Readers ignore fields they do not know and skip lines they cannot
decode, so new entries never invalidate old ones.

Concurrent writers against the same file are not supported.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .codec import decode_value, encode_value

logger = logging.getLogger(__name__)


class FailureRecorder:
    """Regression store backed by a JSON Lines file.

    The same class serves as playback source and record destination; give
    the runner two instances on different paths to keep a curated regression
    suite apart from newly found failures.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self, name: str) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []

        entries: List[Dict[str, Any]] = []
        # Binary mode so one torn or foreign line cannot hide the rest of the file.
        with self.path.open("rb") as f:
            for lineno, raw in enumerate(f, start=1):
                try:
                    line = raw.decode("utf-8").strip()
                    if not line:
                        continue
                    record = json.loads(line)
                except (UnicodeDecodeError, json.JSONDecodeError) as e:
                    logger.warning("%s:%d: skipping undecodable regression entry (%s)", self.path, lineno, e)
                    continue
                if not isinstance(record, dict) or record.get("property") != name:
                    continue
                try:
                    inputs = decode_value(record.get("inputs"))
                except ValueError as e:
                    logger.warning("%s:%d: skipping malformed inputs for '%s' (%s)", self.path, lineno, name, e)
                    continue
                if not isinstance(inputs, dict):
                    logger.warning("%s:%d: inputs for '%s' are not a mapping", self.path, lineno, name)
                    continue
                entries.append(inputs)

        logger.debug("Loaded %d regression entries for '%s' from %s", len(entries), name, self.path)
        return entries

    def append(self, name: str, inputs: Dict[str, Any]) -> None:
        # Encode first so an unsupported value never leaves a partial line behind.
        line = json.dumps({"property": name, "inputs": encode_value(dict(inputs))}, ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()
        logger.info("Recorded counterexample for '%s' in %s", name, self.path)

    def __repr__(self) -> str:
        return f"FailureRecorder({str(self.path)!r})"


class MemoryRecorder:
    """In-process regression store.

    Entries go through the same codec as FailureRecorder so that values
    which could not be persisted to a file are rejected here as well.
    """

    def __init__(self):
        self._entries: Dict[str, List[Any]] = {}

    def load(self, name: str) -> List[Dict[str, Any]]:
        return [decode_value(e) for e in self._entries.get(name, [])]

    def append(self, name: str, inputs: Dict[str, Any]) -> None:
        encoded = encode_value(dict(inputs))
        self._entries.setdefault(name, []).append(encoded)

    def names(self) -> List[str]:
        return sorted(self._entries)
