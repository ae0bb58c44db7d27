"""WebSocket client that receives lion state and sends commands."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any, Callable, Optional

import websockets
from websockets.exceptions import ConnectionClosed

log = logging.getLogger(__name__)

StateHandler = Callable[[dict], None]


def parse_state(message: str) -> Optional[dict]:
    """Decode a JSON object message; return None for anything else."""
    try:
        value = json.loads(message)
    except (TypeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


class WebSocketClient:
    """Connects to a lion server, reports each state object it receives."""

    def __init__(self, on_state: Optional[StateHandler] = None) -> None:
        self.on_state = on_state
        self._ws: Any = None
        self._reader: Optional[asyncio.Task] = None

    @property
    def connected(self) -> bool:
        return self._ws is not None

    async def connect_to_server(self, url: str = "ws://localhost:9999") -> None:
        """Open the connection and start reading state messages."""
        if self._ws is not None:
            raise RuntimeError("client already connected")
        log.debug("connecting to %s", url)
        ws = await websockets.connect(url)
        self._ws = ws
        self._reader = asyncio.get_running_loop().create_task(self._read(ws))
        log.debug("connected to server")

    async def _read(self, ws: Any) -> None:
        try:
            async for message in ws:
                if not isinstance(message, str):
                    continue
                state = parse_state(message)
                if state is not None and self.on_state is not None:
                    self.on_state(state)
        except ConnectionClosed:
            pass
        finally:
            if self._ws is ws:
                self._ws = None

    async def send_command(self, command: str) -> bool:
        """Send a command when connected; return whether it was sent."""
        ws = self._ws
        if ws is None:
            return False
        try:
            await ws.send(command)
        except ConnectionClosed:
            return False
        log.debug("command sent: %s", command)
        return True

    async def close(self) -> None:
        """Close the connection and stop reading."""
        ws, self._ws = self._ws, None
        reader, self._reader = self._reader, None
        if ws is not None:
            await ws.close()
        if reader is not None:
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader