"""A connected client and its outgoing message queue."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any

from .ids import new_id

log = logging.getLogger(__name__)

SEND_BUFFER_SIZE = 256


@dataclass(eq=False)
class Peer:
    """A websocket client known to the hub by a random global id."""

    ws: Any = None
    id: int = field(default_factory=new_id)
    name: str = "Anonymous"
    send: asyncio.Queue = field(
        default_factory=lambda: asyncio.Queue(maxsize=SEND_BUFFER_SIZE), repr=False
    )
    closed: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def is_closed(self) -> bool:
        return self.closed.is_set()

    def close(self) -> None:
        """Mark the peer closed and close its websocket; later calls do nothing."""
        if self.is_closed:
            return
        log.info("Closing peer %d", self.id)
        self.closed.set()
        if self.ws is not None:
            result = self.ws.close()
            if inspect.isawaitable(result):
                asyncio.ensure_future(result)

    def update_name(self, name: str) -> None:
        """Set the display name; an empty name is ignored."""
        if name:
            self.name = name

    def enqueue(self, data: bytes) -> None:
        """Queue a message; raises asyncio.QueueFull when the buffer is full."""
        self.send.put_nowait(data)