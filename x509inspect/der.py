"""Primitive DER encoding and decoding over a fixed-size buffer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

CLASS_UNIVERSAL = 0x00
CLASS_APPLICATION = 0x40
CLASS_CONTEXT = 0x80
CLASS_PRIVATE = 0xC0

PRIMITIVE = 0x00
CONSTRUCTED = 0x20

_MAX_LENGTH_OCTETS = 8


class ErrorCode(enum.IntEnum):
    """Failure kinds reported by DER operations."""

    OK = 0
    INVALID_DATA = -1
    BUFFER_TOO_SMALL = -2
    INVALID_LENGTH = -3
    INVALID_TAG = -4
    NULL_POINTER = -5
    OVERFLOW = -6


class DerError(Exception):
    """Raised when a DER operation fails; ``code`` tells why."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        super().__init__(message or f"DER error: {self.code.name}")


class Tag(enum.IntEnum):
    """Universal tags understood by this package."""

    BOOLEAN = 0x01
    INTEGER = 0x02
    BIT_STRING = 0x03
    OCTET_STRING = 0x04
    NULL = 0x05
    OID = 0x06
    UTF8_STRING = 0x0C
    PRINTABLE_STRING = 0x13
    T61_STRING = 0x14
    IA5_STRING = 0x16
    UTC_TIME = 0x17
    GENERALIZED_TIME = 0x18
    SEQUENCE = 0x30
    SET = 0x31


@dataclass(frozen=True)
class Tlv:
    """One decoded tag-length-value element."""

    tag: int
    length: int
    value: bytes


def length_size(length: int) -> int:
    """Number of octets the DER length field for ``length`` occupies."""
    if length < 0x80:
        return 1
    return 1 + (length.bit_length() + 7) // 8


def is_constructed(tag: int) -> bool:
    return (tag & CONSTRUCTED) != 0


def is_context_specific(tag: int) -> bool:
    return (tag & 0xC0) == CLASS_CONTEXT


class DerContext:
    """A cursor over a buffer, used both to read and to write DER."""

    def __init__(self, buffer: bytes | bytearray, size: int | None = None) -> None:
        self.data = buffer if isinstance(buffer, bytearray) else bytearray(buffer)
        self.size = len(self.data) if size is None else size
        if self.size < 0 or self.size > len(self.data):
            raise ValueError("size must lie within the buffer")
        self.pos = 0

    # -- cursor -----------------------------------------------------------

    def reset(self) -> None:
        self.pos = 0

    def remaining(self) -> int:
        if self.pos > self.size:
            return 0
        return self.size - self.pos

    def position(self) -> int:
        return self.pos

    def _require(self, count: int) -> None:
        if self.remaining() < count:
            raise DerError(ErrorCode.BUFFER_TOO_SMALL)

    def _write(self, chunk: bytes) -> None:
        self._require(len(chunk))
        self.data[self.pos : self.pos + len(chunk)] = chunk
        self.pos += len(chunk)

    def _read(self, count: int) -> bytes:
        self._require(count)
        chunk = bytes(self.data[self.pos : self.pos + count])
        self.pos += count
        return chunk

    # -- lengths and tags ---------------------------------------------------

    def encode_length(self, length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        if length < 0x80:
            self._write(bytes([length]))
            return
        octets = (length.bit_length() + 7) // 8
        if octets > 127:
            raise DerError(ErrorCode.INVALID_LENGTH)
        self._require(octets + 1)
        self._write(bytes([0x80 | octets]) + length.to_bytes(octets, "big"))

    def decode_length(self) -> int:
        first = self._read(1)[0]
        if not first & 0x80:
            return first
        octets = first & 0x7F
        if octets == 0 or octets > _MAX_LENGTH_OCTETS:
            raise DerError(ErrorCode.INVALID_LENGTH)
        raw = self._read(octets)
        if octets > 1 and raw[0] == 0:
            raise DerError(ErrorCode.INVALID_LENGTH)
        return int.from_bytes(raw, "big")

    def encode_tag(self, tag: int) -> None:
        if not 0 <= tag <= 0xFF:
            raise ValueError("tag must fit in one octet")
        self._write(bytes([tag]))

    def decode_tag(self) -> int:
        return self._read(1)[0]

    def peek_tag(self) -> int:
        self._require(1)
        return self.data[self.pos]

    def decode_tlv(self) -> Tlv:
        tag = self.decode_tag()
        length = self.decode_length()
        value = self._read(length)
        return Tlv(tag, length, value)

    def encode_tlv_header(self, tag: int, length: int) -> None:
        self.encode_tag(tag)
        self.encode_length(length)

    def skip_element(self) -> None:
        self.decode_tlv()

    def _decode_expected(self, tag: Tag) -> Tlv:
        tlv = self.decode_tlv()
        if tlv.tag != tag:
            raise DerError(ErrorCode.INVALID_TAG)
        return tlv

    # -- primitive types ------------------------------------------------------

    def encode_boolean(self, value: bool) -> None:
        self.encode_tlv_header(Tag.BOOLEAN, 1)
        self._write(b"\xff" if value else b"\x00")

    def decode_boolean(self) -> bool:
        tlv = self._decode_expected(Tag.BOOLEAN)
        if tlv.length != 1:
            raise DerError(ErrorCode.INVALID_LENGTH)
        return tlv.value[0] != 0

    def encode_integer(self, value: bytes) -> None:
        """Encode big-endian two's-complement content, minimising leading zeros."""
        if not value:
            raise DerError(ErrorCode.NULL_POINTER, "integer content must not be empty")
        content = bytes(value).lstrip(b"\x00") or b"\x00"
        if content[0] & 0x80:
            content = b"\x00" + content
        self.encode_tlv_header(Tag.INTEGER, len(content))
        self._write(content)

    def decode_integer(self, max_len: int) -> bytes:
        tlv = self._decode_expected(Tag.INTEGER)
        if tlv.length == 0:
            raise DerError(ErrorCode.INVALID_LENGTH)
        if tlv.length > max_len:
            raise DerError(ErrorCode.BUFFER_TOO_SMALL)
        return tlv.value

    def encode_octet_string(self, value: bytes) -> None:
        self.encode_tlv_header(Tag.OCTET_STRING, len(value))
        if value:
            self._write(bytes(value))

    def decode_octet_string(self, max_len: int) -> bytes:
        tlv = self._decode_expected(Tag.OCTET_STRING)
        if tlv.length > max_len:
            raise DerError(ErrorCode.BUFFER_TOO_SMALL)
        return tlv.value

    def encode_null(self) -> None:
        self.encode_tlv_header(Tag.NULL, 0)

    def decode_null(self) -> None:
        tlv = self._decode_expected(Tag.NULL)
        if tlv.length != 0:
            raise DerError(ErrorCode.INVALID_LENGTH)

    # -- constructed headers -------------------------------------------------

    def encode_sequence_header(self, content_length: int) -> None:
        self.encode_tlv_header(Tag.SEQUENCE, content_length)

    def decode_sequence_header(self) -> int:
        if self.decode_tag() != Tag.SEQUENCE:
            raise DerError(ErrorCode.INVALID_TAG)
        return self.decode_length()

    def encode_set_header(self, content_length: int) -> None:
        self.encode_tlv_header(Tag.SET, content_length)

    def decode_set_header(self) -> int:
        if self.decode_tag() != Tag.SET:
            raise DerError(ErrorCode.INVALID_TAG)
        return self.decode_length()

    # -- fixed-width integers ---------------------------------------------------

    def encode_integer_uint32(self, value: int) -> None:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError("value does not fit in 32 unsigned bits")
        length = max(1, (value.bit_length() + 7) // 8)
        self.encode_integer(value.to_bytes(length, "big"))

    def decode_integer_uint32(self) -> int:
        raw = self.decode_integer(5)
        if len(raw) == 5 and raw[0] != 0:
            raise DerError(ErrorCode.OVERFLOW)
        return int.from_bytes(raw, "big") & 0xFFFFFFFF

    def encode_integer_int32(self, value: int) -> None:
        if not -(2**31) <= value < 2**31:
            raise ValueError("value does not fit in 32 signed bits")
        self.encode_integer((value & 0xFFFFFFFF).to_bytes(4, "big"))

    def decode_integer_int32(self) -> int:
        raw = self.decode_integer(5)
        result = -1 if raw[0] & 0x80 else 0
        for octet in raw:
            result = (result << 8) | octet
        result &= 0xFFFFFFFF
        return result - 2**32 if result >= 2**31 else result