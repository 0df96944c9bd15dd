"""Lenient Base64 decoding of PEM bodies."""

from __future__ import annotations

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DECODE_TABLE = {char: index for index, char in enumerate(_ALPHABET)}


def base64_decode(text: str, max_output_len: int) -> bytes:
    """Decode Base64 text, skipping padding, whitespace and any non-alphabet character.

    Raises ValueError when the decoded data would exceed ``max_output_len`` bytes.
    Trailing bits that do not complete a byte are dropped.
    """
    output = bytearray()
    accumulator = 0
    bits = 0
    for char in text:
        value = _DECODE_TABLE.get(char)
        if value is None:
            continue
        accumulator = ((accumulator << 6) | value) & 0xFFFFFFFF
        bits += 6
        if bits >= 8:
            if len(output) >= max_output_len:
                raise ValueError(
                    f"decoded data exceeds the limit of {max_output_len} bytes"
                )
            output.append((accumulator >> (bits - 8)) & 0xFF)
            bits -= 8
    return bytes(output)