"""
Board storage backend (JSON file).

The store is a flat, indented JSON list of records:

    [{"title": ..., "subtitle": ..., "body": ..., "status": 1|2|3}, ...]

No lane or card order is stored; cards come back grouped by status.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, List

from .board import Board
from .errors import FormatError, StoreError
from .schema import Card, Status

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("saves") / "todos.json"

_TEXT_FIELDS = ("title", "subtitle")
_STATUS_VALUES = {s.value for s in Status}


class JsonStore:
    """File-backed store for the board's cards."""

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else DEFAULT_STORE_PATH

    def load(self) -> List[Card]:
        """Read every card from disk. A missing file is an empty board."""
        if not self.path.exists():
            logger.info(f"No store at {self.path}, starting with an empty board")
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except UnicodeDecodeError as e:
            raise FormatError(f"{self.path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise StoreError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise FormatError(f"{self.path} is not valid JSON: {e}") from e

        cards = [Card.from_record(record) for record in _validate_records(data, self.path)]
        logger.info(f"Loaded {len(cards)} cards from {self.path}")
        return cards

    def save(self, board: Board) -> None:
        """Write every card to disk and clear the board's dirty flag."""
        records = [card.to_record() for card in board.all_cards()]
        payload = json.dumps(records, indent=2, ensure_ascii=False)

        # Atomic write: write to temp, then replace
        tmp_file = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_file, self.path)
        except OSError as e:
            if tmp_file.is_file():
                tmp_file.unlink()
            raise StoreError(f"Cannot write {self.path}: {e}") from e

        board.mark_clean()
        logger.info(f"Saved {len(records)} cards to {self.path}")


def _validate_records(data: Any, path: Path) -> list:
    """Check the decoded JSON is a list of well-formed card records."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise FormatError(f"{path}: expected a list of cards, got {type(data).__name__}")
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise FormatError(f"{path}: record {i} is not an object")
        for key in _TEXT_FIELDS:
            if not isinstance(record.get(key), str):
                raise FormatError(f"{path}: record {i} has no string {key!r}")
        body = record.get("body", record.get("content"))
        if not isinstance(body, str):
            raise FormatError(f"{path}: record {i} has no string 'body'")
        status = record.get("status")
        if isinstance(status, bool) or not isinstance(status, int) or status not in _STATUS_VALUES:
            raise FormatError(f"{path}: record {i} has invalid status {status!r}")
    return data
