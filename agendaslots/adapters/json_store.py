"""
JSON-file backed store for slot exceptions.

The file holds the subscription payload format: a list of
``{"id", "date", "time", "removed"?}`` objects.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List

from ..domain.exceptions import SlotError, StoreError, WriteError
from ..domain.models import SlotException
from .memory_store import InMemorySlotStore

logger = logging.getLogger(__name__)


class JsonFileSlotStore(InMemorySlotStore):
    """
    Durable variant of the in-memory store.

    Every mutation is written to disk before it becomes visible; if the
    write fails the store keeps its previous state and raises WriteError.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load_records())

    def _load_records(self) -> List[SlotException]:
        """Load records from the JSON file, skipping malformed entries."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read slot file {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise StoreError(f"Slot file {self.path} must contain a JSON list")

        records: List[SlotException] = []
        for entry in data:
            try:
                records.append(SlotException.from_payload(entry))
            except (KeyError, TypeError, AttributeError, SlotError) as exc:
                logger.warning("Skipping malformed slot record %r: %s", entry, exc)
        return records

    def _commit(self, records: Dict[str, SlotException]) -> None:
        payload = [records[record_id].to_payload() for record_id in sorted(records)]
        try:
            self._write_atomic(payload)
        except OSError as exc:
            raise WriteError(f"Cannot write slot file {self.path}: {exc}") from exc
        super()._commit(records)

    def _write_atomic(self, payload: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
