#!/usr/bin/env python3
"""Dump everything the board manager API returns, once.

Calls ``/api/state``, ``/api/version`` and ``/api/config`` and prints both
the parsed model fields **and** the raw JSON so unparsed fields are easy
to spot.

Usage
-----
::

    python scripts/dump_board.py --host 192.168.1.50 --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyautodarts import AutodartsClient, AutodartsConfig, AutodartsTransportError  # noqa: E402
from pyautodarts.tracker import calc_score  # noqa: E402


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


async def _dump(client: AutodartsClient, out: list[str]) -> dict[str, Any]:
    result: dict[str, Any] = {}

    out.append(_section("STATE"))
    try:
        board = await client.get_state()
    except AutodartsTransportError as exc:
        out.append(f"  error     : {exc}")
        result["state"] = {"error": str(exc)}
    else:
        darts: list[dict[str, Any]] = []
        for index, dart in enumerate(board.throws or [], start=1):
            segment = dart.segment
            name = segment.name if segment is not None else "-"
            out.append(f"  dart {index}    : {name:<6} {calc_score(dart):>3} pts")
            darts.append({"segment": name, "score": calc_score(dart)})
        if not darts:
            out.append("  (no throws)")
        out.append(f"  raw       : {json.dumps(board.raw, ensure_ascii=False)}")
        result["state"] = {"darts": darts, "raw": board.raw}

    out.append(_section("VERSION"))
    try:
        version = await client.get_version()
    except AutodartsTransportError as exc:
        out.append(f"  error     : {exc}")
        result["version"] = {"error": str(exc)}
    else:
        out.append(f"  version   : {version}")
        result["version"] = version

    out.append(_section("CONFIG"))
    try:
        config = await client.get_config()
    except AutodartsTransportError as exc:
        out.append(f"  error     : {exc}")
        result["config"] = {"error": str(exc)}
    else:
        out.append(f"  camera    : {config.cam.to_json()}")
        out.append(f"  raw       : {json.dumps(config.raw, ensure_ascii=False)}")
        result["config"] = {"cam": json.loads(config.cam.to_json()), "raw": config.raw}

    return result


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump all data the board manager API returns.",
    )
    parser.add_argument("--host", help="Board manager host")
    parser.add_argument("--port", type=int, help="Board manager port")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    config = AutodartsConfig.from_env(**overrides)

    out: list[str] = [_section("pyautodarts dump_board"), f"  board     : {config.base_url}"]
    async with AutodartsClient(config) as client:
        result = await _dump(client, out)
    result["timestamp"] = datetime.now(UTC).isoformat()

    if args.json_mode:
        print(json.dumps(result, indent=2, default=str, ensure_ascii=False))
    else:
        print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
