import pytest

from fmsys.protocol import (
    OPERATION_SIZE,
    Operation,
    decode_operation,
    decode_text,
    encode_operation,
)


@pytest.mark.parametrize("operation", list(Operation))
def test_operation_round_trip(operation):
    encoded = encode_operation(operation)
    assert len(encoded) == OPERATION_SIZE
    assert decode_operation(encoded) is operation


def test_read_wire_bytes():
    assert encode_operation(Operation.READ) == b"\x01\x00\x00\x00"


def test_encode_accepts_plain_int():
    assert encode_operation(5) == encode_operation(Operation.COPY)


def test_decode_exit():
    assert decode_operation(b"\x09\x00\x00\x00") is Operation.EXIT


def test_encode_unknown_operation_rejected():
    with pytest.raises(ValueError):
        encode_operation(42)


def test_decode_unknown_operation_rejected():
    with pytest.raises(ValueError):
        decode_operation(b"\x2a\x00\x00\x00")


@pytest.mark.parametrize("data", [b"", b"\x01", b"\x01\x00\x00\x00\x00"])
def test_decode_wrong_length_rejected(data):
    with pytest.raises(ValueError):
        decode_operation(data)


def test_decode_text_stops_at_nul():
    assert decode_text(b"notes.txt\x00leftover bytes") == "notes.txt"


def test_decode_text_without_nul():
    assert decode_text(b"notes.txt") == "notes.txt"


def test_decode_text_padded_field():
    field = b"hello" + b"\x00" * 1019
    assert decode_text(field) == "hello"


def test_decode_text_empty():
    assert decode_text(b"\x00\x00") == ""