"""Low-level terminal input decoding.

Reads raw bytes from the interactive device and translates them into
normalized key tokens. Reads block until a byte is available; there is no
escape-sequence timeout.
"""

from __future__ import annotations

import codecs
import os

from .line_store import TEXT_ENCODING, TEXT_ERRORS

KEY_UP = "UP"
KEY_DOWN = "DOWN"
KEY_PAGE_UP = "PAGE_UP"
KEY_PAGE_DOWN = "PAGE_DOWN"
KEY_ESC = "ESC"
KEY_ENTER = "ENTER"
KEY_BACKSPACE = "BACKSPACE"
KEY_TAB = "TAB"
KEY_UNKNOWN = "UNKNOWN"

_CSI_FINAL_KEYS = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
}
# Page keys arrive as ESC [ 5 ~ / ESC [ 6 ~; the trailing byte is discarded.
_CSI_PAGE_KEYS = {
    b"5": KEY_PAGE_UP,
    b"6": KEY_PAGE_DOWN,
}

# Bytes decoded past the end of the current key, replayed on the next read.
_PENDING_BYTES: list[bytes] = []


def _read_byte(fd: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_printable(fd: int, first: bytes) -> str:
    """Decode one character starting with ``first``, reading continuation bytes.

    Invalid bytes decode to surrogate escapes so the filter matches input
    lines decoded the same way. Anything decoded beyond the first character
    is pushed back for the next read.
    """
    decoder = codecs.getincrementaldecoder(TEXT_ENCODING)(errors=TEXT_ERRORS)
    text = decoder.decode(first)
    while not text:
        ch = _read_byte(fd)
        if ch is None:
            text = decoder.decode(b"", final=True)
            break
        text = decoder.decode(ch)
    rest = text[1:].encode(TEXT_ENCODING, TEXT_ERRORS)
    _PENDING_BYTES[:0] = [rest[idx : idx + 1] for idx in range(len(rest))]
    return text[:1]


def read_key(fd: int) -> str:
    """Read one key event from ``fd``.

    Printable input is returned as the decoded one-character string; other
    events use the ``KEY_*`` tokens. End of input before a key starts is
    reported as ``KEY_ESC`` so callers terminate instead of spinning.
    """
    ch = _read_byte(fd)
    if ch is None:
        return KEY_ESC

    if ch in {b"\x7f", b"\x08"}:
        return KEY_BACKSPACE
    if ch in {b"\n", b"\r"}:
        return KEY_ENTER
    if ch == b"\t":
        return KEY_TAB
    if ch != b"\x1b":
        return _read_printable(fd, ch)

    seq = _read_byte(fd)
    if seq is None:
        return KEY_ESC
    if seq != b"[":
        return KEY_ESC
    seq = _read_byte(fd)
    if seq is None:
        return KEY_UNKNOWN
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    if seq in _CSI_PAGE_KEYS:
        if _read_byte(fd) is None:
            return KEY_UNKNOWN
        return _CSI_PAGE_KEYS[seq]
    return KEY_UNKNOWN
