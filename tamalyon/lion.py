"""The virtual lion: its needs, its mood, and sharing it over the network."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from .client import WebSocketClient
from .server import WebSocketServer

log = logging.getLogger(__name__)

MAX_LEVEL = 100
DEFAULT_PORT = 9999
DEFAULT_URL = "ws://localhost:9999"
DECAY_INTERVAL = 5.0
COMMAND_POINTS = 10
LOW_THRESHOLD = 30

STATUS_DISCONNECTED = "Non connecté"


class Mood(str, Enum):
    JOYEUX = "joyeux"
    AFFAME = "affame"
    TRISTE = "triste"
    ENDORMI = "endormi"


def _json_int(value: Any) -> int:
    """Integer value of a JSON number, 0 for anything that is not an integral number."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


class LionManager:
    """Holds the lion's needs, works out its mood and hosts or joins a shared game."""

    def __init__(self, on_state_updated: Optional[Callable[[str], None]] = None) -> None:
        self.on_state_updated = on_state_updated
        self._mood = Mood.JOYEUX.value
        self._connection_status = STATUS_DISCONNECTED
        self._hunger = MAX_LEVEL
        self._thirst = MAX_LEVEL
        self._affection = MAX_LEVEL
        self._energy = MAX_LEVEL
        self._server: Optional[WebSocketServer] = None
        self._client: Optional[WebSocketClient] = None
        self._is_host = False
        self._pending: set[asyncio.Task] = set()
        self._update_mood()

    @property
    def hunger(self) -> int:
        return self._hunger

    @property
    def thirst(self) -> int:
        return self._thirst

    @property
    def affection(self) -> int:
        return self._affection

    @property
    def energy(self) -> int:
        return self._energy

    @property
    def connection_status(self) -> str:
        return self._connection_status

    @property
    def mood(self) -> str:
        return self._mood

    @mood.setter
    def mood(self, value: str) -> None:
        value = value.value if isinstance(value, Mood) else str(value)
        if value != self._mood:
            self._mood = value
            log.debug("mood changed to %s", value)

    def feed(self, points: int) -> None:
        self._hunger = min(self._hunger + points, MAX_LEVEL)
        log.debug("fed +%s => hunger %s", points, self._hunger)
        self._update_mood()

    def give_water(self, points: int) -> None:
        self._thirst = min(self._thirst + points, MAX_LEVEL)
        log.debug("drank +%s => thirst %s", points, self._thirst)
        self._update_mood()

    def water(self, points: int) -> None:
        self.give_water(points)

    def pet(self, points: int) -> None:
        self._affection = min(self._affection + points, MAX_LEVEL)
        log.debug("petted +%s => affection %s", points, self._affection)
        self._update_mood()

    def decay_states(self) -> None:
        """One tick of decay; a joined client leaves this to the host."""
        if not self._is_host and self._client is not None:
            return
        self._hunger = max(self._hunger - 5, 0)
        self._thirst = max(self._thirst - 5, 0)
        self._affection = max(self._affection - 2, 0)
        if self._affection < LOW_THRESHOLD:
            self._energy = min(self._energy + 10, MAX_LEVEL)
        else:
            self._energy = max(self._energy - 3, 0)
        log.debug(
            "decay | hunger %s thirst %s affection %s energy %s",
            self._hunger, self._thirst, self._affection, self._energy,
        )
        self._update_mood()

    def _update_mood(self) -> None:
        if self._hunger < LOW_THRESHOLD:
            new_mood = Mood.AFFAME
        elif self._thirst < LOW_THRESHOLD:
            new_mood = Mood.TRISTE
        elif self._affection < LOW_THRESHOLD:
            new_mood = Mood.ENDORMI
        else:
            new_mood = Mood.JOYEUX
        self.mood = new_mood
        if self._is_host:
            self._schedule_broadcast()
        if self.on_state_updated is not None:
            self.on_state_updated(self.generate_state_message())

    def _schedule_broadcast(self) -> None:
        if self._server is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self._server.broadcast_state(self.state()))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def generate_state_message(self) -> str:
        return f"H:{self._hunger} | T:{self._thirst} | A:{self._affection} | Mood:{self._mood}"

    def state(self) -> dict:
        """The state as it is sent to clients."""
        return {
            "hunger": self._hunger,
            "thirst": self._thirst,
            "affection": self._affection,
            "energy": self._energy,
            "mood": self._mood,
        }

    async def start_as_host(self, port: int = DEFAULT_PORT) -> None:
        """Host the game: accept commands from clients and broadcast state to them."""
        self._connection_status = "Hébergement..."
        self._is_host = True
        server = WebSocketServer(on_command=self.handle_command)
        try:
            bound = await server.start_server(port)
        except OSError:
            self._is_host = False
            self._connection_status = STATUS_DISCONNECTED
            raise
        self._server = server
        self._connection_status = f"Hébergement actif (port {bound})"

    async def join_as_client(self, url: str = DEFAULT_URL) -> None:
        """Join a hosted game and mirror its state."""
        self._connection_status = "Connexion..."
        self._is_host = False
        client = WebSocketClient(on_state=self.apply_state)
        try:
            await client.connect_to_server(url)
        except BaseException:
            self._connection_status = STATUS_DISCONNECTED
            raise
        self._client = client
        self._connection_status = "Connecté au serveur"

    async def send_command(self, command: str) -> bool:
        """Send a command to the host; only a joined client sends."""
        if self._client is None or self._is_host:
            return False
        return await self._client.send_command(command)

    def is_host_mode(self) -> bool:
        return self._is_host

    def handle_command(self, command: str) -> None:
        """Apply a command received from a client; unknown commands are ignored."""
        log.debug("command received: %s", command)
        if command == "feed":
            self.feed(COMMAND_POINTS)
        elif command == "water":
            self.water(COMMAND_POINTS)
        elif command == "pet":
            self.pet(COMMAND_POINTS)

    def apply_state(self, state: Mapping[str, Any]) -> None:
        """Replace the local state with one received from the host."""
        self._hunger = _json_int(state.get("hunger"))
        self._thirst = _json_int(state.get("thirst"))
        self._affection = _json_int(state.get("affection"))
        self._energy = _json_int(state.get("energy"))
        mood = state.get("mood")
        self.mood = mood if isinstance(mood, str) else ""

    async def run_decay(self, interval: float = DECAY_INTERVAL) -> None:
        """Decay the lion every ``interval`` seconds until cancelled."""
        while True:
            await asyncio.sleep(interval)
            self.decay_states()

    async def close(self) -> None:
        """Finish pending broadcasts and shut down any network connection."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        if self._client is not None:
            await self._client.close()
            self._client = None
        if self._server is not None:
            await self._server.stop()
            self._server = None
        self._connection_status = STATUS_DISCONNECTED