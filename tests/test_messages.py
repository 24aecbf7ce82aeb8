import pytest

from signalws.messages import (
    MessageError,
    MessageType,
    Msg,
    PeerMsg,
    deserialize_msg,
    encode_msg,
    new_peer_msg,
)


def test_wire_numbers_follow_declaration_order():
    assert deserialize_msg(b"0|0|").msg_type is MessageType.INVALID
    assert deserialize_msg(b"1|0|").msg_type is MessageType.CONNECTED
    assert deserialize_msg(b"11|0|").msg_type is MessageType.UPDATENAME
    assert encode_msg(0, MessageType.UPDATENAME, "x") == b"11|0|x"


def test_deserialize_basic():
    msg = deserialize_msg(b"2|0|")
    assert msg == Msg(id=0, msg_type=MessageType.HOST, data=b"")


def test_deserialize_keeps_pipes_in_data():
    msg = deserialize_msg(b"6|3|a|b|c")
    assert msg.msg_type is MessageType.OFFER
    assert msg.id == 3
    assert msg.data == b"a|b|c"


def test_deserialize_without_data_field():
    msg = deserialize_msg("10|7")
    assert msg.msg_type is MessageType.LOBBIES
    assert msg.data == b""


def test_deserialize_accepts_str():
    assert deserialize_msg("11|0|Alice") == deserialize_msg(b"11|0|Alice")


def test_unknown_type_is_kept_as_int():
    msg = deserialize_msg(b"42|1|x")
    assert msg.msg_type == 42
    assert not isinstance(msg.msg_type, MessageType)


def test_signed_numbers_are_accepted():
    msg = deserialize_msg(b"+3|-5|")
    assert msg.msg_type is MessageType.JOIN
    assert msg.id == -5


@pytest.mark.parametrize("raw", [b"abc", b"", b"1|x|data", b"y|1|data", b"1| 2|", b"1|1_0|"])
def test_malformed_messages_raise(raw):
    with pytest.raises(MessageError):
        deserialize_msg(raw)


def test_message_error_is_value_error():
    with pytest.raises(ValueError):
        deserialize_msg(b"nope")


def test_encode_without_data():
    assert encode_msg(1, MessageType.CONNECTED, None) == b"1|1|"


def test_encode_with_text_data():
    assert encode_msg(123456, MessageType.JOIN, "true") == b"3|123456|true"


@pytest.mark.parametrize(
    "msg_id, msg_type, data",
    [
        (1, MessageType.CONNECTED, b""),
        (654321, MessageType.CANDIDATE, b'{"candidate":"a|b"}'),
        (2, MessageType.ANSWER, b"sdp\nlines"),
    ],
)
def test_round_trip(msg_id, msg_type, data):
    decoded = deserialize_msg(encode_msg(msg_id, msg_type, data))
    assert decoded == Msg(id=msg_id, msg_type=msg_type, data=data)


def test_new_peer_msg_tags_source():
    peer_msg = new_peer_msg(500_000, b"9|777777|")
    assert peer_msg == PeerMsg(source_id=500_000, msg=Msg(777777, MessageType.SEAL, b""))


def test_new_peer_msg_propagates_errors():
    with pytest.raises(MessageError):
        new_peer_msg(1, b"garbage")