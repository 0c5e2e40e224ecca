from __future__ import annotations

from typing import Any


class RecordValidationError(ValueError):
    """A row read from the data store does not fit its value type."""

    def __init__(self, table: str, row_id: Any, reason: str) -> None:
        self.table = table
        self.row_id = row_id
        self.reason = reason
        super().__init__(f"{table}[{row_id}]: {reason}")
