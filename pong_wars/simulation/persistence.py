"""Parquet persistence helpers for ball, claim and territory log streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from pong_wars.config.constants import FLUSH_THRESHOLD


class ParquetLog:
    """Column buffer flushed to one Parquet file in row groups."""

    def __init__(
        self, path: Path, schema: pa.Schema, flush_threshold: int = FLUSH_THRESHOLD
    ) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = Path(path)
        self.schema = schema
        self.flush_threshold = flush_threshold
        self.columns: dict[str, list[object]] = {name: [] for name in schema.names}
        self._writer: pq.ParquetWriter | None = None
        self.rows_written = 0

    def __len__(self) -> int:
        return len(self.columns[self.schema.names[0]])

    def append(self, row: dict[str, object]) -> None:
        for name in self.schema.names:
            self.columns[name].append(row[name])
        if len(self) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        """Write buffered rows and clear the in-memory columns."""
        if not len(self):
            return
        table = pa.Table.from_pydict(self.columns, schema=self.schema)
        if self._writer is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._writer = pq.ParquetWriter(self.path, self.schema)
        self._writer.write_table(table)
        self.rows_written += table.num_rows
        for values in self.columns.values():
            values.clear()

    def close(self) -> None:
        """Flush and close; an empty log still produces a file with the schema."""
        self.flush()
        if self._writer is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            pq.write_table(self.schema.empty_table(), self.path)
            return
        self._writer.close()
        self._writer = None
