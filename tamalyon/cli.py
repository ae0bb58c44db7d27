"""Console front end for the lion."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
from typing import Optional, Sequence

from websockets.exceptions import WebSocketException

from .lion import DECAY_INTERVAL, DEFAULT_PORT, DEFAULT_URL, LionManager

COMMANDS = ("feed", "water", "pet")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tamalyon",
        description="Look after a virtual lion. Commands: feed, water, pet, status, quit.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--host", action="store_true", help="host a shared game")
    mode.add_argument(
        "--join", nargs="?", const=DEFAULT_URL, default=None, metavar="URL",
        help=f"join a hosted game (default {DEFAULT_URL})",
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to host on")
    parser.add_argument(
        "--interval", type=float, default=DECAY_INTERVAL, help="seconds between decay ticks",
    )
    return parser


async def _run(args: argparse.Namespace) -> int:
    manager = LionManager(on_state_updated=print)
    try:
        if args.host:
            await manager.start_as_host(args.port)
        elif args.join:
            await manager.join_as_client(args.join)
    except (OSError, WebSocketException) as exc:
        print(f"tamalyon: {exc}", file=sys.stderr)
        await manager.close()
        return 1
    print(manager.connection_status)

    joined = args.join is not None
    loop = asyncio.get_running_loop()
    decay = asyncio.create_task(manager.run_decay(args.interval))
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            command = line.strip().lower()
            if not command:
                continue
            if command in ("quit", "exit"):
                break
            if command == "status":
                print(manager.generate_state_message())
            elif command not in COMMANDS:
                print(f"commande inconnue: {command}", file=sys.stderr)
            elif joined:
                if not await manager.send_command(command):
                    print("non connecté au serveur", file=sys.stderr)
            else:
                manager.handle_command(command)
    finally:
        decay.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await decay
        await manager.close()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())