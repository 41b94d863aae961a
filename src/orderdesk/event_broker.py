"""Fan-out of server-sent events to every open ``/events`` stream.

The broker only knows who is currently registered. Each ``publish`` writes one
frame to every registered connection; a connection whose write fails, times
out or that reports itself closed is dropped on the spot. Nothing is queued
for later and nothing is retried.
"""

import asyncio
from dataclasses import dataclass
import itertools
import json
import logging
import threading
from typing import Any
from typing import Optional
from typing import Protocol

from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

KEEP_ALIVE_EVENT = "keep-alive"
KEEP_ALIVE_PAYLOAD = "ping"


class ConnectionClosed(Exception):
    """Raised when writing to a connection whose client has gone away."""


class Connection(Protocol):
    @property
    def closed(self) -> bool: ...

    async def send(self, frame: str) -> None: ...

    def close(self) -> None: ...


def format_frame(event: str, payload: Any) -> str:
    data = json.dumps(jsonable_encoder(payload), separators=(",", ":"), ensure_ascii=False)
    return f"event: {event}\ndata: {data}\n\n"


class QueueConnection:
    """A connection drained by a streaming response.

    ``send`` waits for room when the queue is full, so a client that stops
    reading eventually trips the broker's write timeout.
    """

    def __init__(self, maxsize: int = 100):
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, frame: str) -> None:
        if self._closed:
            raise ConnectionClosed("connection is closed")
        await self._queue.put(frame)

    async def receive(self) -> str:
        return await self._queue.get()

    def drain(self) -> list[str]:
        """Frames still queued, without waiting."""
        frames = []
        while not self._queue.empty():
            frames.append(self._queue.get_nowait())
        return frames

    def close(self) -> None:
        self._closed = True


@dataclass(frozen=True)
class Registration:
    id: int


@dataclass
class _Subscriber:
    connection: Connection
    keep_alive: Optional[asyncio.Task] = None


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class EventBroker:
    def __init__(self, keep_alive_interval: Optional[float] = 60.0, write_timeout: float = 5.0):
        self.keep_alive_interval = keep_alive_interval
        self.write_timeout = write_timeout
        self._subscribers: dict[Registration, _Subscriber] = {}
        self._handles: dict[Connection, Registration] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __contains__(self, handle: Registration) -> bool:
        with self._lock:
            return handle in self._subscribers

    @property
    def connections(self) -> list[Connection]:
        with self._lock:
            return [subscriber.connection for subscriber in self._subscribers.values()]

    def register(self, connection: Connection) -> Registration:
        with self._lock:
            existing = self._handles.get(connection)
            if existing is not None:
                return existing
            handle = Registration(next(self._ids))
            subscriber = _Subscriber(connection)
            self._subscribers[handle] = subscriber
            self._handles[connection] = handle
            subscriber.keep_alive = self._start_keep_alive(handle)
            count = len(self._subscribers)

        logger.debug("Registered connection %s (%d open)", handle.id, count)
        return handle

    def deregister(self, handle: Registration) -> None:
        with self._lock:
            subscriber = self._subscribers.pop(handle, None)
            if subscriber is None:
                return
            self._handles.pop(subscriber.connection, None)
            count = len(self._subscribers)

        self._stop_keep_alive(subscriber.keep_alive)
        logger.debug("Deregistered connection %s (%d open)", handle.id, count)

    def close(self) -> None:
        """Deregister every connection."""
        with self._lock:
            handles = list(self._subscribers)
        for handle in handles:
            self.deregister(handle)

    async def publish(self, event: str, payload: Any) -> None:
        frame = format_frame(event, payload)
        with self._lock:
            targets = [(handle, sub.connection) for handle, sub in self._subscribers.items()]
        if not targets:
            return
        await asyncio.gather(*(self._deliver(handle, conn, frame) for handle, conn in targets))

    async def _deliver(self, handle: Registration, connection: Connection, frame: str) -> bool:
        if handle not in self:
            return False
        if connection.closed:
            logger.info("Connection %s is closed; dropping it", handle.id)
            self._drop(handle, connection)
            return False
        try:
            await asyncio.wait_for(connection.send(frame), timeout=self.write_timeout)
        except Exception:
            # Any failed write only costs this one subscriber.
            logger.warning("Failed to write to connection %s; dropping it", handle.id, exc_info=True)
            self._drop(handle, connection)
            return False
        return True

    def _drop(self, handle: Registration, connection: Connection) -> None:
        # Closing tells the reading side that no more frames are coming.
        connection.close()
        self.deregister(handle)

    def _start_keep_alive(self, handle: Registration) -> Optional[asyncio.Task]:
        if not self.keep_alive_interval or self.keep_alive_interval <= 0:
            return None
        loop = _running_loop()
        if loop is None:
            logger.debug("No running event loop; connection %s gets no keep-alive", handle.id)
            return None
        return loop.create_task(self._keep_alive(handle), name=f"sse-keep-alive-{handle.id}")

    def _stop_keep_alive(self, task: Optional[asyncio.Task]) -> None:
        if task is None or task.done():
            return
        loop = task.get_loop()
        if _running_loop() is loop:
            # A keep-alive task that drops its own connection just returns.
            if asyncio.current_task() is not task:
                task.cancel()
        elif not loop.is_closed():
            loop.call_soon_threadsafe(task.cancel)

    async def _keep_alive(self, handle: Registration) -> None:
        frame = format_frame(KEEP_ALIVE_EVENT, KEEP_ALIVE_PAYLOAD)
        while True:
            await asyncio.sleep(self.keep_alive_interval)
            with self._lock:
                subscriber = self._subscribers.get(handle)
            if subscriber is None:
                return
            if not await self._deliver(handle, subscriber.connection, frame):
                return
