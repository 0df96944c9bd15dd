import io

import pytest

from x509inspect.der import DerContext, DerError, ErrorCode
from x509inspect.der_file import (
    DER_MAX_FILE_SIZE,
    CertInfo,
    DerFile,
    write_context,
    write_file,
)
from x509inspect.der_strings import encode_oid


def tlv(tag, content):
    ctx = DerContext(bytearray(len(content) + 10))
    ctx.encode_tlv_header(tag, len(content))
    return bytes(ctx.data[: ctx.pos]) + content


def oid(arcs):
    ctx = DerContext(bytearray(64))
    encode_oid(ctx, arcs)
    return bytes(ctx.data[: ctx.pos])


SIG_ALG = tlv(0x30, oid((1, 2, 840, 113549, 1, 1, 11)) + tlv(0x05, b""))
TBS = tlv(
    0x30,
    tlv(0xA0, tlv(0x02, b"\x02"))
    + tlv(0x02, b"\x01\x23\x45")
    + SIG_ALG,
)
CERT = tlv(0x30, TBS + SIG_ALG + tlv(0x03, b"\x00\xaa\xbb"))
KEY = tlv(0x30, tlv(0x02, b"\x00") + tlv(0x02, b"\x05"))


def test_certificate_detection():
    doc = DerFile.from_buffer(CERT)
    assert doc.is_certificate() is True
    assert doc.is_private_key() is False


def test_private_key_detection():
    doc = DerFile.from_buffer(KEY)
    assert doc.is_private_key() is True
    assert doc.is_certificate() is False


def test_non_sequence_is_neither():
    doc = DerFile.from_buffer(b"\x05\x00")
    assert (doc.is_certificate(), doc.is_private_key()) == (False, False)


def test_empty_buffer_rejected():
    with pytest.raises(DerError) as info:
        DerFile.from_buffer(b"")
    assert info.value.code == ErrorCode.NULL_POINTER


def test_write_and_read_round_trip(tmp_path):
    path = tmp_path / "cert.der"
    write_file(path, CERT)
    doc = DerFile.read(path)
    assert doc.data == CERT
    assert doc.size == len(CERT)


def test_write_empty_rejected(tmp_path):
    with pytest.raises(DerError) as info:
        write_file(tmp_path / "x.der", b"")
    assert info.value.code == ErrorCode.NULL_POINTER


def test_read_missing_file(tmp_path):
    with pytest.raises(DerError) as info:
        DerFile.read(tmp_path / "missing.der")
    assert info.value.code == ErrorCode.INVALID_DATA


def test_read_too_large(tmp_path):
    path = tmp_path / "big.der"
    with open(path, "wb") as handle:
        handle.truncate(DER_MAX_FILE_SIZE + 1)
    with pytest.raises(DerError) as info:
        DerFile.read(path)
    assert info.value.code == ErrorCode.INVALID_DATA


def test_write_context_writes_encoded_prefix(tmp_path):
    ctx = DerContext(bytearray(16))
    ctx.encode_null()
    path = tmp_path / "null.der"
    write_context(path, ctx)
    assert path.read_bytes() == b"\x05\x00"


def test_validate_good_and_truncated():
    DerFile.from_buffer(CERT).validate()
    with pytest.raises(DerError) as info:
        DerFile.from_buffer(b"\x30\x05\x02\x01").validate()
    assert info.value.code == ErrorCode.BUFFER_TOO_SMALL


def test_print_info_for_certificate():
    out = io.StringIO()
    DerFile.from_buffer(CERT).print_info(out)
    text = out.getvalue()
    assert f"File size: {len(CERT)} bytes\n" in text
    assert "Structure validation: VALID\n" in text
    assert "Root element: SEQUENCE (0x30)\n" in text
    assert "File type: X.509 Certificate (likely)\n" in text


def test_print_info_for_key_and_unknown():
    out = io.StringIO()
    DerFile.from_buffer(KEY).print_info(out)
    assert "File type: Private Key (likely)" in out.getvalue()
    out = io.StringIO()
    DerFile.from_buffer(b"\x30\x05\x02\x01").print_info(out)
    assert "Structure validation: Buffer too small" in out.getvalue()
    assert "File type: Unknown DER structure" in out.getvalue()


def test_parse_structure_header_and_error():
    out = io.StringIO()
    DerFile.from_buffer(KEY).parse_structure(out)
    assert out.getvalue().startswith(f"DER File Structure ({len(KEY)} bytes):\n")
    bad = io.StringIO()
    with pytest.raises(DerError):
        DerFile.from_buffer(b"\x30\x05\x02\x01").parse_structure(bad)
    assert "Error parsing structure: Buffer too small" in bad.getvalue()


def test_extract_cert_info_serial():
    out = io.StringIO()
    info = DerFile.from_buffer(CERT).extract_cert_info(out)
    assert isinstance(info, CertInfo)
    assert info.serial_number == 0x012345
    assert "Certificate parsing: Basic structure detected" in out.getvalue()


def test_extract_cert_info_oversized_serial_at_end():
    doc = DerFile.from_buffer(tlv(0x30, tlv(0x30, tlv(0x02, b"\x01" * 6))))
    with pytest.raises(DerError) as info:
        doc.extract_cert_info(io.StringIO())
    assert info.value.code == ErrorCode.BUFFER_TOO_SMALL


def test_extract_cert_info_requires_sequence():
    with pytest.raises(DerError) as info:
        DerFile.from_buffer(b"\x02\x01\x00").extract_cert_info(io.StringIO())
    assert info.value.code == ErrorCode.INVALID_TAG