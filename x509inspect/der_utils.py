"""Inspection helpers for DER data: naming, dumping, sizing and validation."""

from __future__ import annotations

import sys
from typing import TextIO

from .der import (
    DerContext,
    DerError,
    ErrorCode,
    Tag,
    is_constructed,
    is_context_specific,
    length_size,
)
from .der_strings import decode_oid

_TAG_NAMES = {
    Tag.BOOLEAN: "BOOLEAN",
    Tag.INTEGER: "INTEGER",
    Tag.BIT_STRING: "BIT STRING",
    Tag.OCTET_STRING: "OCTET STRING",
    Tag.NULL: "NULL",
    Tag.OID: "OBJECT IDENTIFIER",
    Tag.UTF8_STRING: "UTF8String",
    Tag.SEQUENCE: "SEQUENCE",
    Tag.SET: "SET",
    Tag.PRINTABLE_STRING: "PrintableString",
    Tag.T61_STRING: "T61String",
    Tag.IA5_STRING: "IA5String",
    Tag.UTC_TIME: "UTCTime",
    Tag.GENERALIZED_TIME: "GeneralizedTime",
}

_ERROR_NAMES = {
    ErrorCode.OK: "Success",
    ErrorCode.INVALID_DATA: "Invalid data",
    ErrorCode.BUFFER_TOO_SMALL: "Buffer too small",
    ErrorCode.INVALID_LENGTH: "Invalid length",
    ErrorCode.INVALID_TAG: "Invalid tag",
    ErrorCode.NULL_POINTER: "NULL pointer",
    ErrorCode.OVERFLOW: "Arithmetic overflow",
}

_TEXT_TAGS = {Tag.UTF8_STRING, Tag.PRINTABLE_STRING, Tag.IA5_STRING}
_MAX_PRINTED_OID_ARCS = 20


def format_hex(data: bytes) -> str:
    """Upper-case hex octets separated by single spaces."""
    return " ".join(f"{octet:02X}" for octet in data)


def tag_to_string(tag: int) -> str:
    """Human-readable name of a tag octet."""
    name = _TAG_NAMES.get(tag)
    if name is not None:
        return name
    if is_context_specific(tag):
        return "CONTEXT SPECIFIC"
    return "UNKNOWN"


def error_to_string(code: int) -> str:
    """Human-readable description of an :class:`ErrorCode`."""
    return _ERROR_NAMES.get(code, "Unknown error")


def _compact_hex(data: bytes) -> str:
    return "".join(f"{octet:02X}" for octet in data)


def _describe_primitive(tag: int, value: bytes) -> str:
    if tag == Tag.BOOLEAN:
        if len(value) == 1:
            return "TRUE" if value[0] else "FALSE"
        return "Invalid BOOLEAN length"
    if tag == Tag.INTEGER:
        if len(value) <= 4:
            return f"{int.from_bytes(value, 'big')} (0x{_compact_hex(value)})"
        return f"0x{_compact_hex(value)}"
    if tag == Tag.NULL:
        return "NULL"
    if tag == Tag.OID:
        try:
            arcs = decode_oid(DerContext(value), _MAX_PRINTED_OID_ARCS)
        except DerError:
            return "Invalid OID"
        return ".".join(str(arc) for arc in arcs)
    if tag in _TEXT_TAGS:
        shown = "".join(
            chr(octet) if 32 <= octet <= 126 else f"\\x{octet:02X}" for octet in value
        )
        return f'"{shown}"'
    return f"0x{_compact_hex(value)}"


def print_structure(
    data: bytes, indent_level: int = 0, out: TextIO | None = None
) -> None:
    """Write an indented tree of the DER elements in ``data`` to ``out``."""
    stream = sys.stdout if out is None else out
    if not data:
        raise DerError(ErrorCode.NULL_POINTER, "no data to print")

    ctx = DerContext(data)
    indent = "  " * indent_level
    while ctx.remaining() > 0:
        stream.write(indent)
        try:
            tlv = ctx.decode_tlv()
        except DerError as error:
            stream.write(f"Error parsing TLV: {error_to_string(error.code)}\n")
            raise
        stream.write(
            f"{tag_to_string(tlv.tag)} (tag 0x{tlv.tag:02X}) [{tlv.length} bytes]: "
        )
        if is_constructed(tlv.tag):
            stream.write("\n")
            print_structure(tlv.value, indent_level + 1, stream)
        else:
            stream.write(_describe_primitive(tlv.tag, tlv.value) + "\n")


def calculate_sequence_size(content_length: int) -> int:
    """Total encoded size of a SEQUENCE with ``content_length`` content octets."""
    return 1 + length_size(content_length) + content_length


def calculate_integer_size(value: int) -> int:
    """Total encoded size of an unsigned 32-bit INTEGER."""
    if value == 0:
        return 1 + length_size(1) + 1
    octets = (value.bit_length() + 7) // 8
    if (value >> ((octets - 1) * 8)) & 0x80:
        octets += 1
    return 1 + length_size(octets) + octets


def encode_sequence_complete(ctx: DerContext, content: bytes) -> None:
    """Write a SEQUENCE header followed by the already-encoded ``content``."""
    ctx.encode_sequence_header(len(content))
    if ctx.remaining() < len(content):
        raise DerError(ErrorCode.BUFFER_TOO_SMALL)
    ctx.data[ctx.pos : ctx.pos + len(content)] = content
    ctx.pos += len(content)


def validate_structure(data: bytes) -> None:
    """Check that ``data`` is a well-formed, minimally encoded run of elements.

    Raises :class:`DerError` describing the first problem found.
    """
    if not data:
        raise DerError(ErrorCode.NULL_POINTER, "no data to validate")

    ctx = DerContext(data)
    while ctx.remaining() > 0:
        start = ctx.position()
        tlv = ctx.decode_tlv()
        expected = start + 1 + length_size(tlv.length) + tlv.length
        if ctx.position() != expected:
            raise DerError(ErrorCode.INVALID_DATA)
        if is_constructed(tlv.tag):
            validate_structure(tlv.value)