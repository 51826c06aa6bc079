#!/usr/bin/env python3
"""Watch the live train feed from a terminal.

Polls the worker, reconciles every cycle and prints the trains that match
an optional filter, flagging estimated speeds and evictions.

Usage
-----
::

    python scripts/watch_trains.py
    python scripts/watch_trains.py --filter pågatåg --cycles 3

Options::

    --url URL          Worker URL (default: TRAINS_WORKER_URL or built-in)
    --interval SEC     Delay between cycles
    --filter TEXT      Only show trains matching TEXT
    --cycles N         Stop after N cycles (default: run until Ctrl-C)
    --json             Print each cycle as JSON
    --verbose, -v      Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytrains import CycleResult, TrainsClient, TrainsConfig  # noqa: E402
from pytrains.presentation import filter_trains, format_chip_text  # noqa: E402


def _print_cycle(result: CycleResult, query: str | None, json_mode: bool) -> None:
    shown = filter_trains(result.trains, query)
    if json_mode:
        payload: dict[str, Any] = {
            "ok": result.ok,
            "error": result.error,
            "completed_at": result.completed_at.isoformat(),
            "evicted": sorted(result.evicted),
            "trains": [
                {
                    "key": state.key,
                    "speed": state.speed,
                    "speed_source": state.speed_source.value,
                    **state.train.model_dump(mode="json"),
                }
                for state in shown
            ],
        }
        print(json.dumps(payload, ensure_ascii=False))
        return

    stamp = result.completed_at.strftime("%H:%M:%S")
    if not result.ok:
        print(f"[{stamp}] poll failed: {result.error}")
        return
    print(f"[{stamp}] {len(shown)}/{len(result.trains)} trains, {len(result.evicted)} gone")
    for state in sorted(shown, key=lambda s: s.key):
        marker = " (cancelled)" if state.train.canceled else ""
        print(f"  {format_chip_text(state)}{marker}")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Watch the live train feed.")
    parser.add_argument("--url", help="Worker URL")
    parser.add_argument("--interval", type=float, help="Seconds between cycles")
    parser.add_argument("--filter", dest="query", help="Only show trains matching this text")
    parser.add_argument("--cycles", type=int, default=0, help="Stop after N cycles")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="JSON output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.url:
        overrides["worker_url"] = args.url
    if args.interval:
        overrides["refresh_interval"] = args.interval
    config = TrainsConfig.from_env(**overrides)

    cycles = 0
    client: TrainsClient

    def on_update(result: CycleResult) -> None:
        nonlocal cycles
        cycles += 1
        _print_cycle(result, args.query, args.json_mode)
        if args.cycles and cycles >= args.cycles:
            client.stop()

    async with TrainsClient(config, on_update=on_update) as client:
        await client.run()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
