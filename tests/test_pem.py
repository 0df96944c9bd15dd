import pytest

from x509inspect.pem import BEGIN_MARKER, END_MARKER, extract_certificate_base64, read_pem_file


def test_extract_body_between_markers():
    text = f"junk\n{BEGIN_MARKER}\nQUJD\n{END_MARKER}\ntrailer\n"
    assert extract_certificate_base64(text) == "\nQUJD\n"


def test_first_certificate_only():
    text = f"{BEGIN_MARKER}AAAA{END_MARKER}{BEGIN_MARKER}BBBB{END_MARKER}"
    assert extract_certificate_base64(text) == "AAAA"


def test_missing_begin_marker():
    with pytest.raises(ValueError):
        extract_certificate_base64(f"QUJD\n{END_MARKER}\n")


def test_missing_end_marker():
    with pytest.raises(ValueError):
        extract_certificate_base64(f"{BEGIN_MARKER}\nQUJD\n")


def test_end_before_begin_is_missing():
    with pytest.raises(ValueError):
        extract_certificate_base64(f"{END_MARKER}\n{BEGIN_MARKER}\nQUJD\n")


def test_text_after_nul_is_ignored():
    with pytest.raises(ValueError):
        extract_certificate_base64(f"{BEGIN_MARKER}\nQUJD\0{END_MARKER}")


def test_read_pem_file(tmp_path):
    path = tmp_path / "cert.pem"
    path.write_text(f"{BEGIN_MARKER}\nQUJD\n{END_MARKER}\n")
    assert read_pem_file(path).strip() == "QUJD"


def test_read_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_pem_file(tmp_path / "missing.pem")