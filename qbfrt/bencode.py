"""Bencode encoding and decoding."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Any

_INT_RE = re.compile(rb"-?(0|[1-9][0-9]*)")
_LEN_RE = re.compile(rb"0|[1-9][0-9]*")


class BencodeError(ValueError):
    """Raised when a value cannot be bencoded or data is not valid bencode."""


def encode(value: Any) -> bytes:
    """Bencode a value.

    Integers, bytes-like objects, strings (as UTF-8), lists, tuples and
    mappings are supported. Mapping entries whose value is ``None`` are left
    out, and mapping keys are written in sorted byte order.
    """
    return b"".join(_encode(value))


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise BencodeError(f"dictionary key must be str or bytes, not {type(key).__name__}")


def _encode(value: Any) -> Iterator[bytes]:
    if value is None or isinstance(value, bool):
        raise BencodeError(f"cannot bencode {value!r}")
    if isinstance(value, int):
        yield b"i%de" % value
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        yield b"%d:" % len(raw)
        yield raw
    elif isinstance(value, str):
        yield from _encode(value.encode("utf-8"))
    elif isinstance(value, (list, tuple)):
        yield b"l"
        for item in value:
            yield from _encode(item)
        yield b"e"
    elif isinstance(value, Mapping):
        items = sorted(
            ((_key_bytes(key), item) for key, item in value.items() if item is not None),
            key=lambda pair: pair[0],
        )
        keys = [key for key, _ in items]
        if len(set(keys)) != len(keys):
            raise BencodeError("duplicate dictionary key")
        yield b"d"
        for key, item in items:
            yield from _encode(key)
            yield from _encode(item)
        yield b"e"
    else:
        raise BencodeError(f"cannot bencode value of type {type(value).__name__}")


class _Decoder:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def _peek(self) -> int:
        if self.pos >= len(self.data):
            raise BencodeError("unexpected end of data")
        return self.data[self.pos]

    def value(self) -> Any:
        token = self._peek()
        if token == ord("i"):
            return self._integer()
        if token == ord("l"):
            return self._list()
        if token == ord("d"):
            return self._dict()
        if ord("0") <= token <= ord("9"):
            return self._bytes()
        raise BencodeError(f"unexpected byte {token:#04x} at offset {self.pos}")

    def _integer(self) -> int:
        end = self.data.find(b"e", self.pos + 1)
        if end < 0:
            raise BencodeError("unterminated integer")
        digits = self.data[self.pos + 1 : end]
        if not _INT_RE.fullmatch(digits) or digits == b"-0":
            raise BencodeError(f"invalid integer {digits!r} at offset {self.pos}")
        self.pos = end + 1
        return int(digits)

    def _bytes(self) -> bytes:
        colon = self.data.find(b":", self.pos)
        if colon < 0:
            raise BencodeError("unterminated string length")
        digits = self.data[self.pos : colon]
        if not _LEN_RE.fullmatch(digits):
            raise BencodeError(f"invalid string length {digits!r} at offset {self.pos}")
        start = colon + 1
        end = start + int(digits)
        if end > len(self.data):
            raise BencodeError("string runs past end of data")
        self.pos = end
        return self.data[start:end]

    def _list(self) -> list[Any]:
        self.pos += 1
        items = []
        while self._peek() != ord("e"):
            items.append(self.value())
        self.pos += 1
        return items

    def _dict(self) -> dict[str, Any]:
        self.pos += 1
        result: dict[str, Any] = {}
        while self._peek() != ord("e"):
            if not ord("0") <= self._peek() <= ord("9"):
                raise BencodeError(f"dictionary key must be a string at offset {self.pos}")
            raw_key = self._bytes()
            try:
                key = raw_key.decode("utf-8")
            except UnicodeDecodeError as err:
                raise BencodeError(f"dictionary key {raw_key!r} is not UTF-8") from err
            if key in result:
                raise BencodeError(f"duplicate dictionary key {key!r}")
            result[key] = self.value()
        self.pos += 1
        return result


def decode(data: bytes | bytearray | memoryview) -> Any:
    """Decode one bencoded value.

    Byte strings come back as ``bytes``, dictionaries as ``dict`` with
    ``str`` keys. Trailing data after the value is an error.
    """
    decoder = _Decoder(bytes(data))
    try:
        value = decoder.value()
    except RecursionError as err:
        raise BencodeError("data is nested too deeply") from err
    if decoder.pos != len(decoder.data):
        raise BencodeError(f"trailing data at offset {decoder.pos}")
    return value