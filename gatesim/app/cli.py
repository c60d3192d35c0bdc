"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from ..config import SimulationConfig, load_simulation_config
from ..errors import ConfigError
from ..export import VALID_FORMATS, export_results
from ..selfcheck import run_selfcheck
from ..services import Ticker, build_simulation_driver


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(
        prog="gatesim", description="Regional gate pipeline simulator"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Python logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Simulate regions from a YAML/JSON manifest")
    run_p.add_argument("manifest", type=str, help="Path to region manifest")
    run_p.add_argument("--ticks", type=int, default=24, help="Virtual hours to simulate")
    run_p.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    run_p.add_argument("--config", type=str, default=None, help="Path to simulation config YAML")
    run_p.add_argument("--out", type=str, default=None, help="Export directory")
    run_p.add_argument(
        "--formats",
        nargs="+",
        default=list(VALID_FORMATS),
        choices=list(VALID_FORMATS),
        help="Export formats (with --out)",
    )
    run_p.add_argument(
        "--realtime",
        action="store_true",
        help="Sleep tick_period_s between ticks instead of running back to back.",
    )

    selfcheck_p = sub.add_parser(
        "selfcheck", help="Run dependency and smoke self-check"
    )
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke simulation).",
    )

    return parser


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.ticks < 0:
        parser.exit(2, "Error: --ticks must be >= 0\n")

    try:
        config = load_simulation_config(args.config) if args.config else SimulationConfig()
    except ConfigError as exc:
        parser.exit(2, f"Error: {exc}\n")
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    driver = build_simulation_driver(config)
    if not driver.load_file(args.manifest):
        parser.exit(2, f"Error: {driver.load_error}\n")

    ticker = Ticker(driver, period_s=config.tick_period_s if args.realtime else 0.0)
    ticker.run(max_ticks=args.ticks)

    summary = driver.metrics()
    print(
        f"Done. VT={driver.virtual_time}, regions={summary.total}, "
        f"completion={summary.completion_percentage}%"
    )
    print(" ".join(f"{state}={count}" for state, count in summary.counts.items()))
    for entry in driver.logs[:10]:
        print(f"[VT {entry.timestamp:>4}] {entry.type.value:<12} {entry.message}")

    if args.out:
        written = export_results(driver, args.out, args.formats)
        if written:
            print(f"Output: {written[0].parent}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "run":
        return _run(parser, args)

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2
