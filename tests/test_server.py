import asyncio

import pytest
import websockets

from tamalyon.server import WebSocketServer, encode_state


async def _eventually(predicate, attempts=300):
    for _ in range(attempts):
        if predicate():
            return True
        await asyncio.sleep(0.01)
    return predicate()


def test_encode_state_is_compact_and_sorted():
    assert encode_state({"b": 1, "a": 2}) == '{"a":2,"b":1}'


@pytest.mark.asyncio
async def test_commands_are_forwarded():
    received = []
    server = WebSocketServer(on_command=received.append)
    port = await server.start_server(0, "127.0.0.1")
    try:
        async with websockets.connect(f"ws://127.0.0.1:{port}") as ws:
            await ws.send("feed")
            await ws.send("pet")
            assert await _eventually(lambda: len(received) == 2)
        assert received == ["feed", "pet"]
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_broadcast_reaches_clients():
    server = WebSocketServer()
    port = await server.start_server(0, "127.0.0.1")
    try:
        async with websockets.connect(f"ws://127.0.0.1:{port}") as ws:
            assert await _eventually(lambda: server.client_count == 1)
            state = {"hunger": 50, "mood": "joyeux"}
            sent = await server.broadcast_state(state)
            message = await asyncio.wait_for(ws.recv(), 5)
        assert sent == 1
        assert message == encode_state(state)
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_disconnected_client_is_removed():
    server = WebSocketServer()
    port = await server.start_server(0, "127.0.0.1")
    try:
        async with websockets.connect(f"ws://127.0.0.1:{port}"):
            assert await _eventually(lambda: server.client_count == 1)
        assert await _eventually(lambda: server.client_count == 0)
        assert await server.broadcast_state({"hunger": 1}) == 0
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_port_in_use_raises():
    first = WebSocketServer()
    port = await first.start_server(0, "127.0.0.1")
    second = WebSocketServer()
    try:
        with pytest.raises(OSError):
            await second.start_server(port, "127.0.0.1")
        assert second.is_listening is False
    finally:
        await first.stop()


@pytest.mark.asyncio
async def test_start_twice_raises_and_stop_resets():
    server = WebSocketServer()
    await server.start_server(0, "127.0.0.1")
    with pytest.raises(RuntimeError):
        await server.start_server(0, "127.0.0.1")
    await server.stop()
    assert server.is_listening is False
    assert server.port is None