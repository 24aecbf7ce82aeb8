"""Lobby bookkeeping and routing of signalling messages between peers."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, List

from .lobby import HOST_LOCAL_ID, Lobby
from .messages import MessageType, Msg, PeerMsg, encode_msg
from .peer import Peer

log = logging.getLogger(__name__)

LOBBY_SEAL_GRACE_PERIOD = 10.0
SWEEP_INTERVAL = 1.0


class Hub:
    """Keeps track of connected peers and lobbies and routes their messages."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL,
    ) -> None:
        self.peers: Dict[int, Peer] = {}
        self.lobbies: Dict[int, Lobby] = {}
        self.peer_lobby: Dict[int, int] = {}
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._handlers: Dict[int, Callable[[Peer, Msg], None]] = {
            MessageType.HOST: self._host,
            MessageType.JOIN: self._join,
            MessageType.SEAL: self._seal,
            MessageType.OFFER: self._relay,
            MessageType.ANSWER: self._relay,
            MessageType.CANDIDATE: self._relay,
            MessageType.LOBBIES: self._list_lobbies,
            MessageType.UPDATENAME: self._update_name,
        }

    def connect(self, peer: Peer) -> None:
        """Register a newly connected peer."""
        log.info("connect peer %d", peer.id)
        self.peers[peer.id] = peer

    def disconnect(self, peer: Peer) -> None:
        """Forget a peer whose connection has ended."""
        log.info("disconnect peer %d", peer.id)
        self.peers.pop(peer.id, None)

    def dispatch(self, peer_msg: PeerMsg) -> None:
        """Handle one message received from a connected peer."""
        source = self.peers.get(peer_msg.source_id)
        if source is None:
            log.warning("Peer not found %d", peer_msg.source_id)
            return
        handler = self._handlers.get(peer_msg.msg.msg_type)
        if handler is not None:
            handler(source, peer_msg.msg)

    def close_expired_lobbies(self, now: float) -> List[int]:
        """Close sealed lobbies whose grace period has passed; return their ids."""
        closed: List[int] = []
        for lobby in list(self.lobbies.values()):
            if lobby.sealed_at is None:
                continue
            if now - lobby.sealed_at > LOBBY_SEAL_GRACE_PERIOD:
                log.info("Lobby %d fully sealed, closing all peers", lobby.id)
                for member in list(lobby.members.values()):
                    member.close()
                    self.peers.pop(member.id, None)
                    if self.peer_lobby.get(member.id) == lobby.id:
                        del self.peer_lobby[member.id]
                del self.lobbies[lobby.id]
                closed.append(lobby.id)
            else:
                log.debug("Lobby %d sealed, waiting for grace period to expire", lobby.id)
        return closed

    async def run(self) -> None:
        """Periodically close expired lobbies until cancelled."""
        log.info("hub running")
        try:
            while True:
                self.close_expired_lobbies(self._clock())
                await asyncio.sleep(self._sweep_interval)
        finally:
            log.info("hub exiting")

    @staticmethod
    def _send(peer: Peer, data: bytes) -> None:
        try:
            peer.enqueue(data)
        except asyncio.QueueFull:
            log.warning("Send buffer of peer %d is full, dropping message", peer.id)

    def _host(self, source: Peer, msg: Msg) -> None:
        lobby = Lobby(source)
        self.lobbies[lobby.id] = lobby
        self.peer_lobby[source.id] = lobby.id
        self._send(source, encode_msg(lobby.local_id(source), MessageType.CONNECTED))
        self._send(source, encode_msg(lobby.id, MessageType.HOST))

    def _join(self, source: Peer, msg: Msg) -> None:
        lobby = self.lobbies.get(msg.id)
        if lobby is None:
            log.warning("Lobby %d not found", msg.id)
            return
        local = lobby.add_member(source)
        self.peer_lobby[source.id] = lobby.id
        sealed = "true" if lobby.sealed_at is not None else "false"
        self._send(source, encode_msg(local, MessageType.CONNECTED))
        self._send(source, encode_msg(lobby.id, MessageType.JOIN, sealed))
        for member_local, member in list(lobby.members.items()):
            if member_local == local:
                continue
            self._send(source, encode_msg(member_local, MessageType.PEER_CONNECT))
            self._send(member, encode_msg(local, MessageType.PEER_CONNECT))

    def _seal(self, source: Peer, msg: Msg) -> None:
        lobby = self.lobbies.get(msg.id)
        if lobby is None:
            log.warning("Lobby not found")
            return
        if lobby.host_global != source.id:
            log.warning("Only host can seal lobby")
            return
        if lobby.sealed_at is not None:
            log.warning("Lobby already sealed")
            return
        lobby.sealed_at = self._clock()
        sender_local = lobby.local_id(source)
        for member in list(lobby.members.values()):
            self._send(member, encode_msg(sender_local, MessageType.SEAL))

    def _relay(self, source: Peer, msg: Msg) -> None:
        lobby_id = self.peer_lobby.get(source.id)
        lobby = self.lobbies.get(lobby_id) if lobby_id is not None else None
        if lobby is None:
            log.warning("Lobby not found")
            return
        target = lobby.peer_by_local(msg.id)
        if target is None:
            log.warning("Target peer not in lobby")
            return
        self._send(target, encode_msg(lobby.local_id(source), msg.msg_type, msg.data))

    def _list_lobbies(self, source: Peer, msg: Msg) -> None:
        for lobby in list(self.lobbies.values()):
            host = lobby.peer_by_local(HOST_LOCAL_ID)
            name = host.name if host is not None else ""
            self._send(source, encode_msg(lobby.id, MessageType.LOBBIES, name))

    def _update_name(self, source: Peer, msg: Msg) -> None:
        source.update_name(msg.data.decode("utf-8", errors="replace"))