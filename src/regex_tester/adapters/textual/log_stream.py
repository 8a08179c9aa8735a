"""TCP broadcast of adapter log lines, for watching a session from another terminal."""

from __future__ import annotations

import asyncio
from collections import deque
from contextlib import suppress
from datetime import datetime
from typing import Deque, Optional, Set


class NetworkLogStreamer:
    """Sends every logged line to connected TCP clients (``nc host port``).

    New clients first receive the most recent ``history`` lines.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8765,
        *,
        history: int = 200,
        queue_size: int = 1024,
    ) -> None:
        self.host = host
        self.port = port
        self._history: Deque[str] = deque(maxlen=history)
        self._queue_size = queue_size
        self._queue: Optional[asyncio.Queue[str]] = None
        self._server: Optional[asyncio.AbstractServer] = None
        self._pump_task: Optional[asyncio.Task[None]] = None
        self._clients: Set[asyncio.StreamWriter] = set()
        self.dropped = 0

    @property
    def running(self) -> bool:
        return self._server is not None

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    async def start(self) -> None:
        if self._server is not None:
            return
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._server = await asyncio.start_server(self._serve, self.host, self.port)
        sockets = self._server.sockets or []
        if sockets:
            # Port 0 asks the OS for a free port; report the real one.
            self.port = sockets[0].getsockname()[1]
        self._pump_task = asyncio.create_task(self._pump())

    async def stop(self) -> None:
        if self._pump_task:
            self._pump_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._pump_task
            self._pump_task = None
        if self._server:
            self._server.close()
        # Connected clients must go first or wait_closed() blocks on them.
        for writer in list(self._clients):
            await self._drop(writer)
        if self._server:
            await self._server.wait_closed()
            self._server = None
        self._queue = None

    def log(self, line: str) -> None:
        stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        entry = f"{stamp} | {line}\n"
        self._history.append(entry)
        if self._queue is None:
            return
        try:
            self._queue.put_nowait(entry)
        except asyncio.QueueFull:
            self.dropped += 1

    async def _pump(self) -> None:
        assert self._queue is not None
        while True:
            entry = await self._queue.get()
            payload = entry.encode("utf-8")
            for writer in list(self._clients):
                try:
                    writer.write(payload)
                    await writer.drain()
                except (ConnectionError, OSError):
                    await self._drop(writer)

    async def _serve(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self._clients.add(writer)
        try:
            writer.write("".join(self._history).encode("utf-8"))
            await writer.drain()
            # Clients never send anything meaningful; wait for them to hang up.
            while await reader.read(1024):
                pass
        except (ConnectionError, OSError):
            pass
        finally:
            await self._drop(writer)

    async def _drop(self, writer: asyncio.StreamWriter) -> None:
        self._clients.discard(writer)
        writer.close()
        with suppress(ConnectionError, OSError):
            await writer.wait_closed()


__all__ = ["NetworkLogStreamer"]
