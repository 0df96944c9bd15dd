import base64

from x509inspect.cli import main
from x509inspect.der import DerContext
from x509inspect.pem import BEGIN_MARKER, END_MARKER


def tlv(tag, content):
    ctx = DerContext(bytearray(len(content) + 10))
    ctx.encode_tlv_header(tag, len(content))
    return bytes(ctx.data[: ctx.pos]) + content


CERT = tlv(0x30, tlv(0x30, tlv(0x02, b"\x07")) + tlv(0x03, b"\x00\x01"))


def write_pem(tmp_path, der):
    body = base64.encodebytes(der).decode("ascii")
    path = tmp_path / "cert.pem"
    path.write_text(f"{BEGIN_MARKER}\n{body}{END_MARKER}\n")
    return path


def test_no_arguments(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "Error: No certificate file provided." in err
    assert "Usage:" in err


def test_help(capsys):
    assert main(["--help"]) == 0
    assert "Parse X.509 certificates in PEM format." in capsys.readouterr().out
    assert main(["-h"]) == 0


def test_missing_file(tmp_path, capsys):
    path = tmp_path / "missing.pem"
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert f"Failed to read PEM file: {path}" in err
    assert "Failed to open file" in err


def test_file_without_certificate(tmp_path, capsys):
    path = tmp_path / "plain.txt"
    path.write_text("nothing here\n")
    assert main([str(path)]) == 1
    assert "Make sure the file exists" in capsys.readouterr().err


def test_empty_body(tmp_path, capsys):
    path = tmp_path / "empty.pem"
    path.write_text(f"{BEGIN_MARKER}\n{END_MARKER}\n")
    assert main([str(path)]) == 1
    assert "Failed to decode base64 data from PEM file" in capsys.readouterr().err


def test_oversized_body(tmp_path, capsys):
    path = write_pem(tmp_path, b"\x00" * 9000)
    assert main([str(path)]) == 1
    assert "Failed to decode base64 data" in capsys.readouterr().err


def test_parses_certificate(tmp_path, capsys):
    path = write_pem(tmp_path, CERT)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("X.509 Certificate Parser\n========================\n")
    assert f"Parsing certificate file: {path}\n\n" in out
    assert f"Certificate size: {len(CERT)} bytes\n\n" in out
    assert "Certificate parsed successfully!" in out