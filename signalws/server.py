"""Pumps messages between websocket connections and the hub."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from aiohttp import WSMsgType

from .hub import Hub
from .messages import MessageError, new_peer_msg
from .peer import Peer

log = logging.getLogger(__name__)

READ_TIMEOUT = 60.0
WRITE_TIMEOUT = 10.0
# Must be shorter than the read timeout so pongs keep the connection alive.
PING_INTERVAL = READ_TIMEOUT * 9 / 10

_WRITE_ERRORS = (ConnectionError, RuntimeError, asyncio.TimeoutError)


@dataclass
class Diagnostics:
    """Summary of the ids currently known to the hub."""

    lobbies: List[int] = field(default_factory=list)
    peers: List[int] = field(default_factory=list)


class Server:
    """Owns the hub and serves websocket peers."""

    def __init__(self, hub: Optional[Hub] = None) -> None:
        self.hub = hub

    def run(self) -> "asyncio.Task[None]":
        """Start the hub on the running event loop and return its task."""
        if self.hub is None:
            self.hub = Hub()
        return asyncio.get_running_loop().create_task(self.hub.run())

    async def init_peer(self, ws: Any) -> Peer:
        """Serve one prepared websocket until its connection ends."""
        hub = self._require_hub()
        peer = Peer(ws=ws)
        await asyncio.gather(self._pump_to_hub(peer, hub), self._pump_to_ws(peer))
        return peer

    def get_diagnostics(self) -> Diagnostics:
        """Return the ids of all lobbies and peers."""
        hub = self._require_hub()
        return Diagnostics(lobbies=list(hub.lobbies), peers=list(hub.peers))

    def _require_hub(self) -> Hub:
        if self.hub is None:
            raise RuntimeError("server is not running")
        return self.hub

    @staticmethod
    async def _pump_to_hub(peer: Peer, hub: Hub) -> None:
        loop = asyncio.get_running_loop()
        ws = peer.ws
        hub.connect(peer)
        deadline = loop.time() + READ_TIMEOUT
        try:
            while True:
                try:
                    message = await ws.receive(timeout=max(deadline - loop.time(), 0.0))
                except asyncio.TimeoutError:
                    log.info("Read timeout for peer %d", peer.id)
                    break
                kind = message.type
                if kind == WSMsgType.PONG:
                    deadline = loop.time() + READ_TIMEOUT
                    continue
                if kind == WSMsgType.PING:
                    await ws.pong(message.data)
                    continue
                if kind == WSMsgType.TEXT:
                    payload = message.data.encode("utf-8")
                elif kind == WSMsgType.BINARY:
                    payload = message.data
                else:
                    if peer.is_closed:
                        log.info("Peer %d closed", peer.id)
                    else:
                        log.info("Connection of peer %d ended: %s", peer.id, kind)
                    break
                try:
                    peer_msg = new_peer_msg(peer.id, payload)
                except MessageError as exc:
                    log.warning("Bad message from peer %d: %s", peer.id, exc)
                    continue
                hub.dispatch(peer_msg)
        except (ConnectionError, RuntimeError) as exc:
            log.warning("Error reading from peer %d: %s", peer.id, exc)
        finally:
            hub.disconnect(peer)
            peer.close()

    @staticmethod
    async def _write(ws: Any, data: bytes) -> None:
        text = data.decode("utf-8", errors="replace")
        await asyncio.wait_for(ws.send_str(text), WRITE_TIMEOUT)

    async def _pump_to_ws(self, peer: Peer) -> None:
        loop = asyncio.get_running_loop()
        ws = peer.ws
        next_ping = loop.time() + PING_INTERVAL
        try:
            while not peer.is_closed:
                getter = asyncio.ensure_future(peer.send.get())
                closer = asyncio.ensure_future(peer.closed.wait())
                try:
                    done, _ = await asyncio.wait(
                        {getter, closer},
                        timeout=max(next_ping - loop.time(), 0.0),
                        return_when=asyncio.FIRST_COMPLETED,
                    )
                finally:
                    for task in (getter, closer):
                        if not task.done():
                            task.cancel()
                if closer in done or peer.is_closed:
                    log.info("Peer %d closed", peer.id)
                    return
                if getter in done:
                    await self._write(ws, getter.result())
                    while not peer.send.empty():
                        await self._write(ws, peer.send.get_nowait())
                    continue
                await asyncio.wait_for(ws.ping(), WRITE_TIMEOUT)
                next_ping = loop.time() + PING_INTERVAL
        except _WRITE_ERRORS as exc:
            log.warning("Error writing to peer %d: %s", peer.id, exc)
        finally:
            peer.close()