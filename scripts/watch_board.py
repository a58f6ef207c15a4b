#!/usr/bin/env python3
"""Watch a board manager and print every published state change.

Runs the full adapter (state polling every interval, version and camera
config every 5 minutes) until interrupted.

Usage
-----
::

    python scripts/watch_board.py --host 192.168.1.50

Options::

    --host HOST          Board manager host (default: $AUTODARTS_HOST or 127.0.0.1)
    --port PORT          Board manager port (default: 3180)
    --interval MS        State polling interval in milliseconds (default: 1000)
    --triple-min-score N Minimum score for the triple flag (default: 1)
    --json               Print one JSON object per state change
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

from pyautodarts import AutodartsAdapter, AutodartsConfig, StateValue  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Poll an Autodarts board manager and print state changes.",
    )
    parser.add_argument("--host", help="Board manager host")
    parser.add_argument("--port", type=int, help="Board manager port")
    parser.add_argument("--interval", type=int, help="State polling interval in milliseconds")
    parser.add_argument("--triple-min-score", type=float, help="Minimum dart score for the triple flag")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _printer(json_mode: bool) -> Any:
    def _print(state_id: str, value: StateValue) -> None:
        if json_mode:
            print(json.dumps({"id": state_id, "val": value.val, "ts": value.ts.isoformat()}), flush=True)
        else:
            print(f"{value.ts:%H:%M:%S}  {state_id:<20} {value.val!r}", flush=True)

    return _print


async def main() -> None:
    args = _parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    overrides: dict[str, Any] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.interval is not None:
        overrides["interval_ms"] = args.interval
    if args.triple_min_score is not None:
        overrides["triple_min_score"] = args.triple_min_score
    config = AutodartsConfig.from_env(**overrides)

    async with AutodartsAdapter(config) as adapter:
        adapter.store.subscribe(_printer(args.json_mode))
        await asyncio.Event().wait()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
