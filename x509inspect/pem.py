"""Extraction of the Base64 body of a PEM certificate."""

from __future__ import annotations

from pathlib import Path

BEGIN_MARKER = "-----BEGIN CERTIFICATE-----"
END_MARKER = "-----END CERTIFICATE-----"


def extract_certificate_base64(text: str) -> str:
    """Return the text between the first certificate BEGIN and END markers.

    Raises ValueError when either marker is missing.
    """
    text = text.split("\0", 1)[0]
    start = text.find(BEGIN_MARKER)
    if start < 0:
        raise ValueError("no BEGIN CERTIFICATE marker found")
    start += len(BEGIN_MARKER)
    end = text.find(END_MARKER, start)
    if end < 0:
        raise ValueError("no END CERTIFICATE marker found")
    return text[start:end]


def read_pem_file(path: str | Path) -> str:
    """Read ``path`` and return the Base64 body of its first certificate.

    Raises OSError when the file cannot be read and ValueError when it holds
    no certificate block.
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return extract_certificate_base64(text)