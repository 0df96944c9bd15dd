"""Human-readable dump of an X.509 certificate's TBSCertificate fields."""

from __future__ import annotations

import sys
from typing import TextIO

from .der import DerContext, DerError, Tag
from .der_strings import decode_oid, decode_printable_string, decode_utf8_string
from .oids import format_hex_dump, format_oid, format_oid_with_name

_MAX_OID_ARCS = 16
_MAX_SERIAL_LEN = 64
_MAX_NAME_VALUE_LEN = 255
_MAX_TIME_LEN = 31

_ATTRIBUTE_PREFIX = (2, 5, 4)
_ATTRIBUTE_LABELS = {3: "CN=", 6: "C=", 7: "L=", 8: "ST=", 10: "O=", 11: "OU="}
_TIME_TAGS = (Tag.UTC_TIME, Tag.GENERALIZED_TIME)


def _peek(ctx: DerContext) -> int | None:
    try:
        return ctx.peek_tag()
    except DerError:
        return None


def _skip(ctx: DerContext) -> None:
    try:
        ctx.skip_element()
    except DerError:
        pass


def _is_explicit_tag(tag: int | None) -> bool:
    return tag is not None and (tag & 0xE0) == 0xA0


def _c_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _parse_version(ctx: DerContext, out: TextIO) -> None:
    if not _is_explicit_tag(_peek(ctx)):
        out.write("  Version: v1 (default)\n")
        return
    try:
        tlv = ctx.decode_tlv()
    except DerError:
        return
    out.write("  Version: ")
    if tlv.length >= 3 and tlv.value[0] == Tag.INTEGER:
        int_len = tlv.value[1]
        if 0 < int_len <= 4:
            version = int.from_bytes(tlv.value[2 : 2 + int_len], "big")
            out.write(f"v{(version + 1) & 0xFFFFFFFF} (0x{version:x})\n")
        else:
            out.write("(invalid)\n")


def _parse_serial_number(ctx: DerContext, out: TextIO) -> None:
    try:
        serial = ctx.decode_integer(_MAX_SERIAL_LEN)
    except DerError:
        return
    out.write("  Serial Number: " + format_hex_dump(serial) + "\n")


def _parse_algorithm_identifier(ctx: DerContext, name: str, out: TextIO) -> None:
    try:
        ctx.decode_sequence_header()
    except DerError:
        return
    out.write(f"  {name}:\n")
    try:
        arcs = decode_oid(ctx, _MAX_OID_ARCS)
    except DerError:
        pass
    else:
        out.write(f"    Algorithm: {format_oid_with_name(arcs)}\n")
    if _peek(ctx) is not None:
        _skip(ctx)


def _write_attribute_value(ctx: DerContext, out: TextIO) -> None:
    tag = _peek(ctx)
    if tag is None:
        return
    try:
        if tag == Tag.UTF8_STRING:
            out.write(decode_utf8_string(ctx, _MAX_NAME_VALUE_LEN).split("\0", 1)[0])
        elif tag == Tag.PRINTABLE_STRING:
            out.write(decode_printable_string(ctx, _MAX_NAME_VALUE_LEN).split("\0", 1)[0])
        else:
            _skip(ctx)
            out.write("(unparsed)")
    except DerError:
        pass


def _parse_attribute(ctx: DerContext, out: TextIO) -> None:
    try:
        ctx.decode_set_header()
        ctx.decode_sequence_header()
        arcs = decode_oid(ctx, _MAX_OID_ARCS)
    except DerError:
        return
    out.write("    ")
    if len(arcs) == 4 and arcs[:3] == _ATTRIBUTE_PREFIX:
        out.write(_ATTRIBUTE_LABELS.get(arcs[3], "Unknown="))
    else:
        out.write(f"OID({format_oid(arcs)})=")
    _write_attribute_value(ctx, out)
    out.write("\n")


def _parse_name(ctx: DerContext, name_type: str, out: TextIO) -> None:
    try:
        seq_len = ctx.decode_sequence_header()
    except DerError:
        return
    out.write(f"  {name_type}:\n")
    end_pos = ctx.position() + seq_len
    while ctx.position() < end_pos:
        before = ctx.position()
        _parse_attribute(ctx, out)
        if ctx.position() == before:
            break


def _parse_time(ctx: DerContext, label: str, out: TextIO) -> None:
    tag = _peek(ctx)
    if tag is None:
        return
    out.write(f"    {label}: ")
    if tag in _TIME_TAGS:
        try:
            tlv = ctx.decode_tlv()
        except DerError:
            return
        out.write(_c_text(tlv.value[:_MAX_TIME_LEN]) + "\n")
    else:
        _skip(ctx)
        out.write("(unparsed)\n")


def _parse_validity(ctx: DerContext, out: TextIO) -> None:
    try:
        ctx.decode_sequence_header()
    except DerError:
        return
    out.write("  Validity:\n")
    _parse_time(ctx, "Not Before", out)
    _parse_time(ctx, "Not After", out)


def _parse_public_key_info(ctx: DerContext, out: TextIO) -> None:
    try:
        ctx.decode_sequence_header()
    except DerError:
        return
    out.write("  Public Key Info:\n")
    _parse_algorithm_identifier(ctx, "Public Key Algorithm", out)
    if _peek(ctx) != Tag.BIT_STRING:
        return
    try:
        tlv = ctx.decode_tlv()
    except DerError:
        return
    out.write("    Public Key: ")
    if tlv.length > 0:
        out.write(f"({(tlv.length - 1) * 8} bits)\n      ")
        out.write(format_hex_dump(tlv.value[1:]))
    out.write("\n")


def _parse_extension(ctx: DerContext, out: TextIO) -> None:
    try:
        ctx.decode_sequence_header()
        arcs = decode_oid(ctx, _MAX_OID_ARCS)
    except DerError:
        return
    out.write(f"    Extension: {format_oid_with_name(arcs)}\n")
    if _peek(ctx) == Tag.BOOLEAN:
        try:
            critical = ctx.decode_boolean()
        except DerError:
            pass
        else:
            out.write(f"      Critical: {'true' if critical else 'false'}\n")
    if _peek(ctx) == Tag.OCTET_STRING:
        try:
            value = ctx.decode_tlv()
        except DerError:
            return
        out.write(f"      Value: ({value.length} bytes)\n")


def _parse_extensions(ctx: DerContext, out: TextIO) -> None:
    if not _is_explicit_tag(_peek(ctx)):
        return
    try:
        wrapper = ctx.decode_tlv()
    except DerError:
        return
    out.write("  Extensions:\n")
    ext_ctx = DerContext(wrapper.value)
    try:
        seq_len = ext_ctx.decode_sequence_header()
    except DerError:
        return
    end_pos = ext_ctx.position() + seq_len
    while ext_ctx.position() < end_pos:
        before = ext_ctx.position()
        _parse_extension(ext_ctx, out)
        if ext_ctx.position() == before:
            break


def parse_certificate(der_data: bytes, out: TextIO | None = None) -> bool:
    """Write the fields of a DER certificate to ``out``.

    Returns False when the outer structure is not a certificate.
    """
    stream = sys.stdout if out is None else out
    ctx = DerContext(der_data)
    stream.write("X.509 Certificate:\n")

    try:
        ctx.decode_sequence_header()
    except DerError:
        stream.write("Failed to parse certificate SEQUENCE\n")
        return False
    try:
        ctx.decode_sequence_header()
    except DerError:
        stream.write("Failed to parse TBSCertificate SEQUENCE\n")
        return False

    stream.write("TBSCertificate:\n")
    _parse_version(ctx, stream)
    _parse_serial_number(ctx, stream)
    _parse_algorithm_identifier(ctx, "Signature Algorithm", stream)
    _parse_name(ctx, "Issuer", stream)
    _parse_validity(ctx, stream)
    _parse_name(ctx, "Subject", stream)
    _parse_public_key_info(ctx, stream)
    _parse_extensions(ctx, stream)
    stream.write("\nCertificate parsed successfully!\n")
    return True