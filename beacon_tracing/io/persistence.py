"""Parquet persistence helpers for buffered column streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def flush_columns(
    columns: dict[str, list[object]],
    path: Path,
    writer: pq.ParquetWriter | None,
    schema: pa.Schema,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers.

    The writer is opened lazily on the first non-empty flush and returned so
    the caller can keep appending row groups to the same file.
    """
    first_column = next(iter(columns.values()))
    if not first_column:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def write_table(rows: dict[str, list[object]], path: Path, schema: pa.Schema) -> Path:
    """Write a complete column dict as a single Parquet file (empty tables included)."""
    table = pa.Table.from_pydict(rows, schema=schema)
    pq.write_table(table, path)
    return path
