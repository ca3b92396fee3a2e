import pytest

from py_chat.framing import Framer, LineFramer, RawFramer, get_framer


def test_raw_treats_each_chunk_as_one_message():
    framer = RawFramer()
    pending = bytearray()

    assert framer.decode(pending, b"  alice\r\n") == ["  alice\r\n"]
    assert framer.decode(pending, b"one\ntwo") == ["one\ntwo"]
    assert pending == b""
    assert framer.encode("bob: hi") == b"bob: hi"


def test_raw_replaces_invalid_utf8():
    assert RawFramer().decode(bytearray(), b"caf\xff") == ["caf\ufffd"]


def test_line_buffers_partial_lines_across_reads():
    framer = LineFramer()
    pending = bytearray()

    assert framer.decode(pending, b"ali") == []
    assert framer.decode(pending, b"ce\nhel") == ["alice"]
    assert framer.decode(pending, b"lo\r\n\nbye\n") == ["hello", "bye"]
    assert pending == b""


def test_line_encode_appends_newline():
    assert LineFramer().encode("alice: hi") == b"alice: hi\n"


def test_get_framer():
    assert get_framer("raw").name == "raw"
    assert get_framer("line").name == "line"
    with pytest.raises(ValueError, match="Unknown framing"):
        get_framer("length-prefixed")


def test_framer_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Framer()
