"""Centralized domain constants for tracing simulations.

Defaults shared by the config dataclasses, the builder and the CLI live here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_ROWS = 10
"""Default number of board rows."""

GRID_COLS = 10
"""Default number of board columns."""

NUM_BEACONS = 5
"""Default number of beacons per simulation."""

NUM_OBSERVERS = 10
"""Default number of observers per simulation."""

MAX_ROUNDS = 100
"""Default index of the last simulation round."""

TRANSMISSION_RADIUS = 1.0
"""Default Manhattan threshold radius for a transmission to be heard."""

AWAKENESS_CYCLE = 2
"""Default number of rounds in one awakeness cycle."""

AWAKENESS_DURATION = 1
"""Default number of awake rounds inside one awakeness cycle."""

BEACON_LABEL = "Beacon"
"""Agent-kind prefix used for beacon labels in board-state snapshots."""

OBSERVER_LABEL = "Observer"
"""Agent-kind prefix used for observer labels in board-state snapshots."""

FLUSH_THRESHOLD = 8_192
"""Flush board-state rows to Parquet once this in-memory row count is reached."""
