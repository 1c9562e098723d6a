"""Parquet schema definitions for tracing-simulation artifacts.

All Arrow schemas used for persisting board states and statistics are
centralised here so that the recorder and its readers work against the same
column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

METADATA_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Round-state schema
# ---------------------------------------------------------------------------

BOARD_STATE_SCHEMA = pa.schema(
    [
        ("simulation_id", pa.string()),
        ("round", pa.int64()),
        ("board_kind", pa.string()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("agent_label", pa.string()),
    ]
)

# ---------------------------------------------------------------------------
# Statistics schemas
# ---------------------------------------------------------------------------

ROUND_DISTANCE_SCHEMA = pa.schema(
    [
        ("simulation_id", pa.string()),
        ("round", pa.int64()),
        ("mean_distance", pa.float64()),
        ("estimated_beacons", pa.int64()),
    ]
)

DISTANCE_STATS_SCHEMA = pa.schema(
    [
        ("simulation_id", pa.string()),
        ("min", pa.float64()),
        ("max", pa.float64()),
        ("mean", pa.float64()),
    ]
)

OBSERVED_STATS_SCHEMA = pa.schema(
    [
        ("simulation_id", pa.string()),
        ("beacon_id", pa.int64()),
        ("min", pa.float64()),
        ("max", pa.float64()),
        ("mean", pa.float64()),
    ]
)

STAT_NAMES = ("min", "max", "mean")
"""Aggregate names shared by the distance and observed-interval statistics."""
