"""Wire format of signalling messages: ``<type>|<id>|<data>``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

_INT_RE = re.compile(rb"[+-]?[0-9]+")


class MessageType(IntEnum):
    """Kinds of message exchanged between peers and the hub."""

    INVALID = 0
    CONNECTED = 1
    HOST = 2
    JOIN = 3
    PEER_CONNECT = 4
    PEER_DISCONNECT = 5
    OFFER = 6
    ANSWER = 7
    CANDIDATE = 8
    SEAL = 9
    LOBBIES = 10
    UPDATENAME = 11


class MessageError(ValueError):
    """Raised when a serialized message cannot be parsed."""


@dataclass(frozen=True)
class Msg:
    """A decoded message. Unknown type numbers are kept as plain ints."""

    id: int
    msg_type: Union[MessageType, int]
    data: bytes = b""


@dataclass(frozen=True)
class PeerMsg:
    """A message together with the global id of the peer that sent it."""

    source_id: int
    msg: Msg


def _as_bytes(value) -> bytes:
    if value is None:
        return b""
    return value.encode() if isinstance(value, str) else bytes(value)


def _atoi(token: bytes, field_name: str) -> int:
    if not _INT_RE.fullmatch(token) or not -(2**63) <= int(token) < 2**63:
        raise MessageError(f"invalid {field_name}: {token!r}")
    return int(token)


def deserialize_msg(serialized) -> Msg:
    """Parse ``<type>|<id>|<data>``; the data part may itself contain ``|``."""
    tokens = _as_bytes(serialized).split(b"|")
    if len(tokens) < 2:
        raise MessageError("message needs at least a type and an id")
    msg_id = _atoi(tokens[1], "id")
    type_number = _atoi(tokens[0], "message type")
    msg_type = MessageType(type_number) if type_number in MessageType._value2member_map_ else type_number
    return Msg(id=msg_id, msg_type=msg_type, data=b"|".join(tokens[2:]))


def encode_msg(id: int, msg_type, data=None) -> bytes:
    """Serialize a message to its wire form."""
    return f"{int(msg_type)}|{int(id)}|".encode() + _as_bytes(data)


def new_peer_msg(source_id: int, serialized) -> PeerMsg:
    """Decode ``serialized`` and tag it with the sending peer's id."""
    return PeerMsg(source_id=source_id, msg=deserialize_msg(serialized))