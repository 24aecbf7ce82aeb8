import asyncio

import pytest

from signalws.ids import ID_MAX, ID_MIN
from signalws.peer import SEND_BUFFER_SIZE, Peer


class SyncWs:
    def __init__(self):
        self.close_calls = 0

    def close(self):
        self.close_calls += 1


class AsyncWs:
    def __init__(self):
        self.close_calls = 0

    async def close(self):
        self.close_calls += 1


def test_new_peer_defaults():
    peer = Peer()
    assert peer.name == "Anonymous"
    assert ID_MIN <= peer.id <= ID_MAX
    assert peer.is_closed is False
    assert peer.send.empty()


def test_update_name():
    peer = Peer(id=7)
    peer.update_name("Alice")
    assert peer.name == "Alice"


def test_update_name_ignores_empty():
    peer = Peer(id=7)
    peer.update_name("Bob")
    peer.update_name("")
    assert peer.name == "Bob"


def test_close_is_idempotent():
    ws = SyncWs()
    peer = Peer(ws=ws)
    peer.close()
    peer.close()
    assert peer.is_closed is True
    assert peer.closed.is_set()
    assert ws.close_calls == 1


def test_close_without_socket():
    peer = Peer()
    peer.close()
    assert peer.is_closed is True


@pytest.mark.asyncio
async def test_close_awaits_async_socket():
    ws = AsyncWs()
    peer = Peer(ws=ws)
    peer.close()
    peer.close()
    await asyncio.sleep(0)
    assert ws.close_calls == 1
    assert peer.is_closed is True


def test_enqueue_preserves_order():
    peer = Peer()
    peer.enqueue(b"1|1|")
    peer.enqueue(b"2|5|")
    assert peer.send.get_nowait() == b"1|1|"
    assert peer.send.get_nowait() == b"2|5|"
    assert peer.send.empty()


def test_enqueue_overflow_raises():
    peer = Peer()
    for i in range(SEND_BUFFER_SIZE):
        peer.enqueue(str(i).encode())
    assert peer.send.qsize() == SEND_BUFFER_SIZE
    with pytest.raises(asyncio.QueueFull):
        peer.enqueue(b"overflow")


def test_peers_compare_by_identity():
    first = Peer(id=1)
    second = Peer(id=1)
    assert first != second
    assert first == first