"""Shared fixtures: a scripted chat server and console doubles."""

import asyncio
import io
import os
from collections.abc import Awaitable, Callable, Generator
from typing import Any, TextIO

import pytest
import pytest_asyncio

from chat_client.connection import Session
from chat_client.console import Console
from chat_client.logging import setup_logging

GREETING = ["Welcome to the chat!", "Type 'bye' to quit"]


class ChatServer:
    """Scripted TCP chat server.

    Sends ``greeting`` and then ``script`` to every client, then records the
    lines it receives. Hangs up after ``bye`` unless ``hang_up_on_bye`` is off,
    or after ``hang_up_after`` received lines. ``close_after_script`` hangs up
    as soon as the script has been sent.
    """

    def __init__(
        self,
        greeting: list[str] | None = None,
        script: list[str] | None = None,
        close_after_script: bool = False,
        hang_up_on_bye: bool = True,
        hang_up_after: int | None = None,
    ) -> None:
        self.greeting = GREETING if greeting is None else greeting
        self.script = script or []
        self.close_after_script = close_after_script
        self.hang_up_on_bye = hang_up_on_bye
        self.hang_up_after = hang_up_after
        self.received: list[str] = []
        self.raw_received: list[bytes] = []
        self.port = 0
        self._server: asyncio.AbstractServer | None = None
        self._writers: list[asyncio.StreamWriter] = []

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._writers.append(writer)
        try:
            for line in self.greeting + self.script:
                writer.write((line + "\n").encode())
            await writer.drain()
            if self.close_after_script:
                return
            while True:
                raw = await reader.readline()
                if not raw:
                    break
                self.raw_received.append(raw)
                text = raw.decode(errors="replace").rstrip("\n")
                self.received.append(text)
                if text == "bye" and self.hang_up_on_bye:
                    break
                if self.hang_up_after is not None and len(self.received) >= self.hang_up_after:
                    break
        except ConnectionResetError:
            pass
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass

    async def start(self) -> None:
        self._server = await asyncio.start_server(self.handle_client, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        for writer in self._writers:
            writer.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()


@pytest_asyncio.fixture
async def chat_server() -> Any:
    """Factory fixture starting a ChatServer on a free local port."""
    servers: list[ChatServer] = []

    async def _start(**kwargs: Any) -> ChatServer:
        server = ChatServer(**kwargs)
        await server.start()
        servers.append(server)
        return server

    yield _start

    for server in servers:
        await server.stop()


@pytest.fixture
def idle_stdin() -> Generator[TextIO, None, None]:
    """A stdin on which the operator never types anything."""
    read_fd, write_fd = os.pipe()
    stdin = os.fdopen(read_fd, "r")
    yield stdin
    # unblocks the console reader thread
    os.close(write_fd)


@pytest.fixture
def make_console() -> Callable[..., Console]:
    """Factory for a Console with captured output.

    ``typed`` is what the operator types; pass a stream to use it as stdin.
    """

    def _make(typed: str | TextIO = "") -> Console:
        stdin = io.StringIO(typed) if isinstance(typed, str) else typed
        return Console(stdin=stdin, stdout=io.StringIO(), stderr=io.StringIO())

    return _make


class RecordingWriter:
    """Stands in for asyncio.StreamWriter and keeps everything written."""

    def __init__(self) -> None:
        self.data = b""
        self.closed = False

    def write(self, data: bytes) -> None:
        self.data += data

    async def drain(self) -> None:
        await asyncio.sleep(0)

    def is_closing(self) -> bool:
        return self.closed

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


@pytest.fixture
def make_session() -> Callable[[], Awaitable[Session]]:
    """Factory for a Session over an in-memory reader and a RecordingWriter."""

    async def _make() -> Session:
        return Session(host="localhost", port=12345, reader=asyncio.StreamReader(), writer=RecordingWriter())

    return _make


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None, None, None]:
    yield
    setup_logging()
