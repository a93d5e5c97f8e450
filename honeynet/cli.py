"""Command-line entry point.

Example usage::

    # headless run on the virtual clock, printing every log entry
    honeynet simulate --seconds 120 --seed 7

    # serve the HTTP API with the simulation running in real time
    honeynet serve --port 8000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import SimulationConfig
from .engine import HoneypotSimulation
from .scheduler import VirtualScheduler
from .stats import export_csv, summarize

log = logging.getLogger(__name__)


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seed", type=int, default=None, help="random seed for reproducibility")
    p.add_argument("--threshold", dest="attack_threshold", type=int, default=None,
                   help="attacks on one honeypot that start a retirement countdown")
    p.add_argument("--countdown", dest="countdown_start", type=int, default=None,
                   help="seconds the operator has to cancel a retirement")
    p.add_argument("--interval", dest="attack_interval", type=float, default=None,
                   help="seconds between synthetic attacks")
    p.add_argument("--honeypots", dest="initial_honeypots", type=int, default=None,
                   help="honeypots deployed at start-up")
    p.add_argument("--keep-count-on-cancel", dest="clear_count_on_cancel",
                   action="store_const", const=False, default=None,
                   help="do not reset a node's attack count when its retirement is cancelled")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="honeynet",
        description="Honeypot deception network simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="run headless on a virtual clock")
    sim.add_argument("--seconds", type=float, default=120.0,
                     help="simulated seconds to run")
    sim.add_argument("--export-log", type=Path, default=None,
                     help="write the final log buffer to this CSV file")
    _add_config_flags(sim)

    serve = sub.add_parser("serve", help="serve the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--paused", action="store_true",
                       help="do not start generating attacks on startup")
    _add_config_flags(serve)
    return p


def run_simulate(args: argparse.Namespace) -> int:
    config = SimulationConfig.from_args(args)
    scheduler = VirtualScheduler()
    sim = HoneypotSimulation(config, scheduler=scheduler)
    sim.set_running(True)

    seen = set()
    elapsed = 0.0
    # step one second at a time so entries print in order as they appear
    while elapsed < args.seconds:
        step = min(1.0, args.seconds - elapsed)
        scheduler.advance(step)
        elapsed += step
        for entry in reversed(sim.snapshot().logs):
            if entry.id not in seen:
                seen.add(entry.id)
                print(entry.format())

    snapshot = sim.snapshot()
    summary = summarize(snapshot)
    print(f"\n[HONEYNET] {summary['total_attacks']} attacks logged | "
          f"{summary['active_honeypots']} honeypots live | "
          f"{summary['retirements']} retired")
    if args.export_log is not None:
        rows = export_csv(snapshot.logs, args.export_log)
        print(f"[HONEYNET] wrote {rows} log entries to {args.export_log}")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .api import create_app

    app = create_app(config=SimulationConfig.from_args(args), autostart=not args.paused)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    if args.command == "simulate":
        return run_simulate(args)
    return run_serve(args)


if __name__ == "__main__":
    sys.exit(main())
