"""WebSocket server that receives lion commands and broadcasts the lion's state."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Optional

import websockets
from websockets.exceptions import ConnectionClosed

log = logging.getLogger(__name__)

CommandHandler = Callable[[str], None]


def encode_state(state: Mapping[str, Any]) -> str:
    """Encode a state mapping as compact JSON with sorted keys."""
    return json.dumps(dict(state), separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class WebSocketServer:
    """Accepts clients, forwards their text messages as commands and broadcasts state."""

    def __init__(self, on_command: Optional[CommandHandler] = None) -> None:
        self.on_command = on_command
        self.port: Optional[int] = None
        self._server: Any = None
        self._clients: set[Any] = set()

    @property
    def client_count(self) -> int:
        """Number of clients currently connected."""
        return len(self._clients)

    @property
    def is_listening(self) -> bool:
        return self._server is not None

    async def start_server(self, port: int = 9999, host: Optional[str] = None) -> int:
        """Listen on ``host``:``port`` (all interfaces when host is None); return the bound port."""
        if self._server is not None:
            raise RuntimeError("server already started")
        try:
            self._server = await websockets.serve(self._handle, host, port)
        except OSError:
            log.warning("failed to start the WebSocket server on port %s", port)
            raise
        sockets = list(self._server.sockets)
        self.port = sockets[0].getsockname()[1] if sockets else port
        log.debug("WebSocket server listening on port %s", self.port)
        return self.port

    async def _handle(self, websocket: Any) -> None:
        log.debug("client connected: %s", getattr(websocket, "remote_address", None))
        self._clients.add(websocket)
        try:
            async for message in websocket:
                if not isinstance(message, str):
                    continue
                log.debug("message received: %s", message)
                if self.on_command is not None:
                    self.on_command(message)
        except ConnectionClosed:
            pass
        finally:
            self._clients.discard(websocket)
            log.debug("client disconnected")

    async def broadcast_state(self, state: Mapping[str, Any]) -> int:
        """Send the state as compact JSON to every client; return how many received it."""
        payload = encode_state(state)
        sent = 0
        for client in list(self._clients):
            try:
                await client.send(payload)
            except ConnectionClosed:
                self._clients.discard(client)
            else:
                sent += 1
        return sent

    async def stop(self) -> None:
        """Close the listening socket and every client connection."""
        server, self._server = self._server, None
        if server is None:
            return
        server.close()
        await server.wait_closed()
        self._clients.clear()
        self.port = None