# signalws

`signalws` is a small signalling server for WebRTC applications, built on
aiohttp. Browsers connect to it over a WebSocket. They can host or join a
lobby, and they relay offers, answers and ICE candidates to each other
through it. The server also serves a directory of static files and reports
its state as JSON.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Running the server

```
signalws --port :9000
```

Options (each can be written with one dash or with two):

- `--port ADDR` – the address to listen on, written `host:port` or `:port`.
  The default is `:9000`, which listens on all interfaces.
- `--cert NAME` – serve HTTPS using the certificate `NAME.crt` and the key
  `NAME.key`.
- `--static DIR` – the directory whose files are served under `/`. The
  default is `static`.

If the port is not valid, or the certificate or the address cannot be used,
the command logs the error and exits with status 1.

Endpoints:

- `/ws` – the WebSocket signalling endpoint.
- `/admin` – a JSON object `{"Lobbies": [...], "Peers": [...]}` that lists
  the ids of the current lobbies and connected peers.
- `/test` – serves `test.html` from the working directory, or 404 if that
  file does not exist.
- `/…` – any other path is served from the static directory. A directory
  path serves its `index.html`. A path that points outside the directory,
  or to a file that is missing, gives 404.

## Wire format

Every message is text of the form `type|id|data`. The data part may itself
contain `|`. `type` is a number from `signalws.messages.MessageType`:

| Value | Type            |
|-------|-----------------|
| 0     | INVALID         |
| 1     | CONNECTED       |
| 2     | HOST            |
| 3     | JOIN            |
| 4     | PEER_CONNECT    |
| 5     | PEER_DISCONNECT |
| 6     | OFFER           |
| 7     | ANSWER          |
| 8     | CANDIDATE       |
| 9     | SEAL            |
| 10    | LOBBIES         |
| 11    | UPDATENAME      |

The server ignores messages that cannot be parsed. It also ignores messages
of a type it does not handle, and messages from a peer it does not know.

What the hub does with each message it receives:

- `HOST` – creates a lobby with a random six-digit id, with the sender as
  host. The host gets `CONNECTED` with its local id `1`, then `HOST` with the
  lobby id.
- `JOIN` (id = lobby id) – adds the sender under the lowest free local id,
  starting from `2`. The sender gets `CONNECTED` with its local id, then
  `JOIN` with the lobby id and the data `true` or `false`, which says whether
  the lobby is sealed. After that, the sender and every other member each get
  a `PEER_CONNECT` that carries the other's local id. Joining a lobby that
  does not exist does nothing.
- `SEAL` (id = lobby id) – only the host can seal a lobby, and only once.
  Every member gets `SEAL` with the host's local id. When a sealed lobby is
  more than ten seconds old, every member is disconnected and the lobby is
  removed. The hub checks for this once a second.
- `OFFER`, `ANSWER`, `CANDIDATE` (id = the receiver's local id) – the message
  goes to that member of the sender's lobby. It keeps its data, and its id
  becomes the sender's local id.
- `LOBBIES` – the sender gets one `LOBBIES` message for each lobby. The id is
  the lobby id and the data is the host's name.
- `UPDATENAME` – sets the sender's name to the data. Empty data is ignored.
  A new peer is named `Anonymous`.

Each peer has a queue of 256 outgoing messages. When the queue is full, new
messages are dropped. The server pings each connection every 54 seconds, and
drops a connection that sends no pong for 60 seconds.

## Using it as a library

```python
from signalws.messages import MessageType, encode_msg, deserialize_msg

raw = encode_msg(1, MessageType.OFFER, b"sdp")   # b"6|1|sdp"
msg = deserialize_msg(raw)                        # Msg(id=1, msg_type=MessageType.OFFER, data=b"sdp")
```

`deserialize_msg` raises `signalws.messages.MessageError` (a `ValueError`)
when the type or the id is not an integer.

Other parts of the package:

- `signalws.hub.Hub` – keeps the peers and lobbies. It has `connect`,
  `disconnect`, `dispatch(peer_msg)`, `close_expired_lobbies(now)` and the
  coroutine `run()`.
- `signalws.lobby.Lobby` and `signalws.peer.Peer` – a lobby and its members.
- `signalws.server.Server` – owns a hub. `run()` starts it as a task,
  `init_peer(ws)` serves one prepared aiohttp WebSocket until it closes, and
  `get_diagnostics()` returns a `Diagnostics` with the lobby and peer ids.
- `signalws.cli.build_app(server, static_dir)` – builds the aiohttp
  application described above. Its hub starts and stops with the
  application.

## What it does not do

- It does not come with any HTML pages. Put your own client pages in the
  directory you give to `--static`.
- There is no way to leave a lobby, and the server never sends
  `PEER_DISCONNECT`. A peer whose connection ends stays listed as a member of
  its lobby.
- Sealing a lobby does not stop peers from joining it. A peer that joins only
  learns from the `JOIN` reply that the lobby is sealed.
- All state is kept in memory and is lost when the server stops.