import pytest
from hypothesis import given, strategies as st

from nuklite.utf8 import (
    UTF_INVALID,
    decode,
    encode,
    iter_glyphs,
    utf_at,
    utf_len,
)

_chars = st.characters(min_codepoint=0, max_codepoint=0x10FFFF).filter(
    lambda c: not 0xD800 <= ord(c) <= 0xDFFF
)
_texts = st.text(alphabet=_chars, max_size=30)

REPLACEMENT = "\ufffd".encode("utf-8")


@given(_chars)
def test_decode_matches_codec(ch):
    raw = ch.encode("utf-8")
    assert decode(raw) == (ord(ch), len(raw))


@given(_chars)
def test_encode_matches_codec(ch):
    assert encode(ord(ch)) == ch.encode("utf-8")


@given(_chars)
def test_encode_decode_round_trip(ch):
    raw = encode(ord(ch))
    assert decode(raw)[0] == ord(ch)


def test_decode_ascii():
    assert decode(b"A") == (ord("A"), 1)


def test_decode_empty():
    assert decode(b"") == (UTF_INVALID, 0)


def test_decode_lone_continuation():
    assert decode(b"\x80abc") == (UTF_INVALID, 1)


def test_decode_invalid_lead():
    assert decode(b"\xff") == (UTF_INVALID, 1)


def test_decode_truncated_sequence():
    assert decode(b"\xe2\x82") == (UTF_INVALID, 0)


def test_decode_broken_continuation():
    assert decode(b"\xe2\x41\x41") == (UTF_INVALID, 1)


def test_decode_overlong_is_invalid():
    assert decode(b"\xc0\x80") == (UTF_INVALID, 2)


def test_decode_surrogate_is_invalid():
    assert decode(b"\xed\xa0\x80") == (UTF_INVALID, 3)


@pytest.mark.parametrize("rune", [0xD800, 0xDFFF, 0x110000, -1])
def test_encode_invalid_gives_replacement(rune):
    assert encode(rune) == REPLACEMENT


def test_encode_highest_code_point():
    assert encode(0x10FFFF) == chr(0x10FFFF).encode("utf-8")


@given(_texts)
def test_utf_len_counts_characters(text):
    assert utf_len(text.encode("utf-8")) == len(text)


def test_utf_len_stops_at_truncated_tail():
    assert utf_len(b"ab\xe2") == len("ab")


def test_utf_len_empty():
    assert utf_len(b"") == 0


@given(_texts)
def test_iter_glyphs_offsets(text):
    data = text.encode("utf-8")
    glyphs = list(iter_glyphs(data))
    assert [rune for _, rune, _ in glyphs] == [ord(c) for c in text]
    assert [off for off, _, _ in glyphs] == [
        len(text[:i].encode("utf-8")) for i in range(len(text))
    ]


@given(_texts, st.data())
def test_utf_at_matches_codec(text, data):
    if not text:
        assert utf_at(b"", 0) == (0, UTF_INVALID, 0)
        return
    index = data.draw(st.integers(0, len(text) - 1))
    raw = text.encode("utf-8")
    offset, rune, length = utf_at(raw, index)
    assert offset == len(text[:index].encode("utf-8"))
    assert rune == ord(text[index])
    assert length == len(text[index].encode("utf-8"))


def test_utf_at_negative_index():
    assert utf_at(b"abc", -1) is None


def test_utf_at_end_position():
    raw = "h\u00e9".encode("utf-8")
    assert utf_at(raw, 2) == (len(raw), UTF_INVALID, 0)


def test_utf_at_beyond_end():
    assert utf_at(b"abc", 4) is None


def test_rejects_text_input():
    with pytest.raises(TypeError):
        decode("abc")