"""CLI entrypoint for running one tracing simulation.

This module owns CLI argument parsing and dispatch only. Domain logic lives
in the extracted modules:

- ``beacon_tracing.config``     – configuration dataclasses and defaults
- ``beacon_tracing.simulation`` – builder and round loop
- ``beacon_tracing.metrics``    – tracing statistics collector
- ``beacon_tracing.io``         – board-state snapshots and Parquet recorder
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from beacon_tracing.config.constants import (
    AWAKENESS_CYCLE,
    AWAKENESS_DURATION,
    GRID_COLS,
    GRID_ROWS,
    MAX_ROUNDS,
    NUM_BEACONS,
    NUM_OBSERVERS,
    TRANSMISSION_RADIUS,
)
from beacon_tracing.config.types import (
    AwakenessStrategyType,
    MovementStrategyType,
    SimulationConfig,
)
from beacon_tracing.errors import ConfigurationError
from beacon_tracing.io.recorder import ParquetRecorder
from beacon_tracing.metrics.tracing import TracingStatsCollector
from beacon_tracing.simulation.builder import build_simulation
from beacon_tracing.simulation.hooks import SimulationHooks

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_movement(raw: str, key: str) -> MovementStrategyType:
    """Parse a movement strategy tag."""
    try:
        return MovementStrategyType(raw)
    except ValueError as exc:
        valid = ", ".join(kind.value for kind in MovementStrategyType)
        raise ValueError(f"{key} must be one of {valid}") from exc


def _parse_awakeness(raw: str) -> AwakenessStrategyType:
    """Parse an awakeness strategy tag."""
    try:
        return AwakenessStrategyType(raw)
    except ValueError as exc:
        valid = ", ".join(kind.value for kind in AwakenessStrategyType)
        raise ValueError(f"awakeness must be one of {valid}") from exc


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integral floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer") from exc
    raise ValueError(f"{key} must be an integer")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a number")
    if isinstance(raw, (int, float, str)):
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be a number") from exc
    raise ValueError(f"{key} must be a number")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _finite_or_none(value: float) -> float | None:
    """NaN (nothing to aggregate) becomes JSON ``null``."""
    return value if math.isfinite(value) else None


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def resolve_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> SimulationConfig:
    """Merge CLI arguments over config-file values over built-in defaults."""
    return SimulationConfig(
        rows=_get_int(args.rows, "rows", file_cfg, GRID_ROWS),
        cols=_get_int(args.cols, "cols", file_cfg, GRID_COLS),
        beacons=_get_int(args.beacons, "beacons", file_cfg, NUM_BEACONS),
        observers=_get_int(args.observers, "observers", file_cfg, NUM_OBSERVERS),
        max_rounds=_get_int(args.max_rounds, "max_rounds", file_cfg, MAX_ROUNDS),
        radius=_get_float(args.radius, "radius", file_cfg, TRANSMISSION_RADIUS),
        beacon_movement=_parse_movement(
            _get_str(args.beacon_movement, "beacon_movement", file_cfg, "random"),
            "beacon_movement",
        ),
        observer_movement=_parse_movement(
            _get_str(args.observer_movement, "observer_movement", file_cfg, "random"),
            "observer_movement",
        ),
        awakeness=_parse_awakeness(_get_str(args.awakeness, "awakeness", file_cfg, "fixed")),
        awakeness_cycle=_get_int(args.awakeness_cycle, "awakeness_cycle", file_cfg, AWAKENESS_CYCLE),
        awakeness_duration=_get_int(
            args.awakeness_duration, "awakeness_duration", file_cfg, AWAKENESS_DURATION
        ),
        seed=_get_int(args.seed, "seed", file_cfg, 0),
        description=_get_str(args.description, "description", file_cfg, ""),
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run a beacon tracing simulation")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--cols", type=int, default=None)
    parser.add_argument("--beacons", type=int, default=None)
    parser.add_argument("--observers", type=int, default=None)
    parser.add_argument("--max-rounds", type=int, default=None)
    parser.add_argument("--radius", type=float, default=None)
    movement_choices = [kind.value for kind in MovementStrategyType]
    parser.add_argument("--beacon-movement", type=str, choices=movement_choices, default=None)
    parser.add_argument("--observer-movement", type=str, choices=movement_choices, default=None)
    parser.add_argument(
        "--awakeness",
        type=str,
        choices=[kind.value for kind in AwakenessStrategyType],
        default=None,
    )
    parser.add_argument("--awakeness-cycle", type=int, default=None)
    parser.add_argument("--awakeness-duration", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--description", type=str, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    return parser


@dataclass(frozen=True)
class RunSummary:
    """What a CLI run produced."""

    simulation_id: str
    rounds: int
    out_dir: Path
    distance_stats: dict[str, float]


def run_tracing(
    config: SimulationConfig, out_dir: Path, hooks: Iterable[SimulationHooks] = ()
) -> RunSummary:
    """Build, run and persist one simulation with statistics and board states.

    Extra ``hooks`` are registered ahead of the statistics collector and the
    recorder. The board-state file is closed even when the run aborts.
    """
    simulation = build_simulation(config, hooks)
    collector = TracingStatsCollector(simulation)
    recorder = ParquetRecorder(out_dir, simulation.simulation_id, config.max_rounds)
    simulation.add_hooks(collector)
    simulation.add_hooks(recorder)

    recorder.write_metadata(config)
    logger.info(
        "running %s: %dx%d board, %d beacons, %d observers, %d rounds",
        simulation.simulation_id,
        config.rows,
        config.cols,
        config.beacons,
        config.observers,
        config.max_rounds,
    )
    try:
        simulation.run()
    finally:
        recorder.close()
    recorder.write_stats(collector)
    return RunSummary(
        simulation_id=simulation.simulation_id,
        rounds=config.max_rounds,
        out_dir=Path(out_dir),
        distance_stats=collector.distance_stats(),
    )


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a tracing simulation run.

    Supports ``--config path/to/config.json`` for experiment reproducibility.
    CLI arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        config = resolve_config(args, file_cfg)
        out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))
    except ConfigurationError as exc:
        logger.error("invalid configuration: %s", exc)
        parser.error(str(exc))
    except ValueError as exc:
        parser.error(str(exc))

    summary = run_tracing(config, out_dir)
    print(
        json.dumps(
            {
                "simulation_id": summary.simulation_id,
                "rounds": summary.rounds,
                "out_dir": str(summary.out_dir),
                "distance_stats": {
                    name: _finite_or_none(value) for name, value in summary.distance_stats.items()
                },
            },
            ensure_ascii=False,
            allow_nan=False,
        )
    )


if __name__ == "__main__":
    main()
