# tamalyon

A small virtual pet: a lion with four needs (hunger, thirst, affection and
energy), each on a scale from 0 to 100 and starting at 100. At each decay tick
(every five seconds by default) hunger and thirst drop by 5 and affection by 2.
Energy drops by 3, except when affection is below 30, when the lion sleeps and
energy rises by 10. Feeding, watering and petting the lion restore its needs,
each capped at 100. The lion's mood follows its needs:

| Condition (checked in this order) | Mood      |
|-----------------------------------|-----------|
| hunger below 30                   | `affame`  |
| thirst below 30                   | `triste`  |
| affection below 30                | `endormi` |
| otherwise                         | `joyeux`  |

One player can host the lion on a WebSocket server (port 9999 by default).
Others join as clients, send commands (`feed`, `water`, `pet`), each worth 10
points, and receive the lion's state as compact JSON whenever it changes. Only
the host, or a player on their own, lets the needs decay. Joined clients
mirror what the host broadcasts.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
tamalyon                       # look after a lion on your own
tamalyon --host [--port 9999]  # host a shared lion
tamalyon --join [URL]          # join one (default ws://localhost:9999)
tamalyon --interval 2.5        # seconds between decay ticks
```

`--host` and `--join` cannot be used together. Once the program is running it
reads commands from standard input, one per line:

- `feed`, `water`, `pet`: look after the lion. When joined, the command is
  sent to the host.
- `status`: print the lion's state, such as `H:95 | T:95 | A:98 | Mood:joyeux`.
- `quit` or `exit`, or end of input: stop.

Each time the local lion's state changes, that state line is printed.

## Using it from Python

```python
from tamalyon.lion import LionManager, Mood

lion = LionManager()
lion.decay_states()            # hunger -5, thirst -5, affection -2, energy -3
lion.feed(10)                  # each need is capped at 100
print(lion.generate_state_message())
# H:100 | T:95 | A:98 | Mood:joyeux
print(lion.state())
# {'hunger': 100, 'thirst': 95, 'affection': 98, 'energy': 97, 'mood': 'joyeux'}
```

`LionManager` also has `give_water` (and its alias `water`), `pet`,
`handle_command` for the `feed`, `water` and `pet` command words, and
`apply_state` for replacing the local state with one received from a host. Its
`hunger`, `thirst`, `affection`, `energy`, `mood` and `connection_status`
properties give the current values. `Mood` lists the four moods. Pass
`on_state_updated=` a callable to receive the state line after every change.

Networking is asynchronous. A host runs the server and the decay loop:

```python
import asyncio
from tamalyon.lion import LionManager

async def host():
    lion = LionManager()
    await lion.start_as_host(9999)
    try:
        await lion.run_decay(5.0)
    finally:
        await lion.close()

asyncio.run(host())
```

A client joins and sends commands:

```python
async def play():
    lion = LionManager()
    await lion.join_as_client("ws://localhost:9999")
    await lion.send_command("feed")   # True once sent
    ...
    await lion.close()
```

The lower-level pieces are `tamalyon.server.WebSocketServer`, which passes
client text messages to its `on_command` callback and broadcasts state as
compact JSON with `broadcast_state`, and `tamalyon.client.WebSocketClient`,
which sends commands with `send_command` and passes each incoming JSON object
to its `on_state` callback (see `tamalyon.client.parse_state`).

## What it does not do

There is no graphical window and no picture of the lion. The only front end is
the line-based console command above. Nothing is saved, so the lion starts
fresh at full needs each time. The server has no authentication or encryption
and accepts commands from any client that connects.