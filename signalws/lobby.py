"""A lobby groups peers and gives each a small local id."""

from __future__ import annotations

from typing import Dict, Optional

from .ids import new_id
from .peer import Peer

HOST_LOCAL_ID = 1


class Lobby:
    """Members of one session keyed by local id; the host is always local id 1."""

    def __init__(self, host: Peer, lobby_id: Optional[int] = None) -> None:
        self.id: int = new_id() if lobby_id is None else lobby_id
        self.host_global: int = host.id
        self.members: Dict[int, Peer] = {HOST_LOCAL_ID: host}
        self.global_to_local: Dict[int, int] = {host.id: HOST_LOCAL_ID}
        self.local_to_global: Dict[int, int] = {HOST_LOCAL_ID: host.id}
        self.sealed_at: Optional[float] = None

    def add_member(self, peer: Peer) -> int:
        """Add ``peer`` under the lowest free local id from 2 upwards and return it."""
        local = HOST_LOCAL_ID + 1
        while local in self.members:
            local += 1
        self.members[local] = peer
        self.global_to_local[peer.id] = local
        self.local_to_global[local] = peer.id
        return local

    def local_id(self, peer: Peer) -> int:
        """Return the peer's local id, or 0 if it is not a member."""
        return self.global_to_local.get(peer.id, 0)

    def peer_by_local(self, local_id: int) -> Optional[Peer]:
        """Return the member with the given local id, or None."""
        return self.members.get(local_id)