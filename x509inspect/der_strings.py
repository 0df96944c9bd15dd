"""DER string and OBJECT IDENTIFIER encoding on top of :class:`DerContext`."""

from __future__ import annotations

from collections.abc import Sequence

from .der import DerContext, DerError, ErrorCode, Tag

_OID_SCRATCH_SIZE = 1024
_MAX_SUBID_OCTETS = 5
_UINT32_MAX = 0xFFFFFFFF


def _put(ctx: DerContext, content: bytes) -> None:
    if ctx.remaining() < len(content):
        raise DerError(ErrorCode.BUFFER_TOO_SMALL)
    ctx.data[ctx.pos : ctx.pos + len(content)] = content
    ctx.pos += len(content)


def _encode_string(ctx: DerContext, tag: Tag, raw: bytes) -> None:
    ctx.encode_tlv_header(tag, len(raw))
    if raw:
        _put(ctx, raw)


def _decode_string(ctx: DerContext, tag: Tag, max_len: int) -> bytes:
    tlv = ctx.decode_tlv()
    if tlv.tag != tag:
        raise DerError(ErrorCode.INVALID_TAG)
    if tlv.length >= max_len:
        raise DerError(ErrorCode.BUFFER_TOO_SMALL)
    return tlv.value


def encode_utf8_string(ctx: DerContext, text: str) -> None:
    """Write ``text`` as a UTF8String element."""
    _encode_string(ctx, Tag.UTF8_STRING, text.encode("utf-8"))


def decode_utf8_string(ctx: DerContext, max_len: int) -> str:
    """Read a UTF8String whose content is shorter than ``max_len`` octets."""
    raw = _decode_string(ctx, Tag.UTF8_STRING, max_len)
    return raw.decode("utf-8", errors="replace")


def encode_printable_string(ctx: DerContext, text: str) -> None:
    """Write ``text`` as a PrintableString element, one octet per character."""
    _encode_string(ctx, Tag.PRINTABLE_STRING, text.encode("latin-1"))


def decode_printable_string(ctx: DerContext, max_len: int) -> str:
    """Read a PrintableString whose content is shorter than ``max_len`` octets."""
    raw = _decode_string(ctx, Tag.PRINTABLE_STRING, max_len)
    return raw.decode("latin-1")


def _encode_subid(subid: int) -> bytes:
    if subid < 0x80:
        return bytes([subid])
    groups = []
    while subid:
        groups.append(subid & 0x7F)
        subid >>= 7
    groups.reverse()
    return bytes(group | 0x80 for group in groups[:-1]) + bytes([groups[-1]])


def _decode_subid(data: bytes, pos: int) -> tuple[int, int]:
    subid = 0
    for count, octet in enumerate(data[pos:], start=1):
        if count > _MAX_SUBID_OCTETS:
            raise DerError(ErrorCode.OVERFLOW)
        subid = ((subid << 7) | (octet & 0x7F)) & _UINT32_MAX
        if not octet & 0x80:
            return subid, pos + count
    raise DerError(ErrorCode.INVALID_DATA)


def encode_oid(ctx: DerContext, oid: Sequence[int]) -> None:
    """Write an OBJECT IDENTIFIER made of the given arcs."""
    if len(oid) < 2:
        raise DerError(ErrorCode.NULL_POINTER, "an OID needs at least two arcs")
    if any(not 0 <= arc <= _UINT32_MAX for arc in oid):
        raise ValueError("OID arcs must fit in 32 unsigned bits")
    first, second = oid[0], oid[1]
    if first > 2 or (first < 2 and second >= 40) or (first == 2 and second > 175):
        raise DerError(ErrorCode.INVALID_DATA)

    content = bytearray(_encode_subid(first * 40 + second))
    for arc in oid[2:]:
        if len(content) >= _OID_SCRATCH_SIZE - _MAX_SUBID_OCTETS:
            raise DerError(ErrorCode.BUFFER_TOO_SMALL)
        content += _encode_subid(arc)

    ctx.encode_tlv_header(Tag.OID, len(content))
    _put(ctx, bytes(content))


def decode_oid(ctx: DerContext, max_len: int) -> tuple[int, ...]:
    """Read an OBJECT IDENTIFIER of at most ``max_len`` arcs."""
    if max_len < 2:
        raise DerError(ErrorCode.NULL_POINTER, "room for at least two arcs is needed")
    tlv = ctx.decode_tlv()
    if tlv.tag != Tag.OID:
        raise DerError(ErrorCode.INVALID_TAG)
    if tlv.length == 0:
        raise DerError(ErrorCode.INVALID_LENGTH)

    first, pos = _decode_subid(tlv.value, 0)
    if first < 40:
        arcs = [0, first]
    elif first < 80:
        arcs = [1, first - 40]
    else:
        arcs = [2, first - 80]

    while pos < tlv.length and len(arcs) < max_len:
        arc, pos = _decode_subid(tlv.value, pos)
        arcs.append(arc)

    if pos < tlv.length:
        raise DerError(ErrorCode.BUFFER_TOO_SMALL)
    return tuple(arcs)