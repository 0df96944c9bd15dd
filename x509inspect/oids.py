"""Names for well-known object identifiers and hex dump formatting."""

from __future__ import annotations

from collections.abc import Sequence

_RSA_PREFIX = (1, 2, 840, 113549, 1, 1)
_RSA_NAMES = {
    1: "RSA",
    5: "SHA-1 with RSA",
    11: "SHA-256 with RSA",
    12: "SHA-384 with RSA",
    13: "SHA-512 with RSA",
}

_EC_PUBLIC_KEY_PREFIX = (1, 2, 840, 10045, 2, 1)

_ECDSA_PREFIX = (1, 2, 840, 10045, 4, 3)
_ECDSA_NAMES = {
    2: "ECDSA with SHA-256",
    3: "ECDSA with SHA-384",
    4: "ECDSA with SHA-512",
}

_EXTENSION_PREFIX = (2, 5, 29)
_EXTENSION_NAMES = {
    14: "Subject Key Identifier",
    15: "Key Usage",
    17: "Subject Alternative Name",
    19: "Basic Constraints",
    31: "CRL Distribution Points",
    32: "Certificate Policies",
    35: "Authority Key Identifier",
    37: "Extended Key Usage",
}

_EXACT_NAMES = {
    (1, 3, 6, 1, 5, 5, 7, 1): "Authority Information Access",
    (1, 3, 6, 1, 4, 1, 11129, 2, 4, 2): "Certificate Transparency SCTs",
}


def format_oid(oid: Sequence[int]) -> str:
    """Dotted-decimal form of an OID."""
    return ".".join(str(arc) for arc in oid)


def get_oid_name(oid: Sequence[int]) -> str | None:
    """Descriptive name of a recognised OID, or None."""
    arcs = tuple(oid)
    if len(arcs) == 7 and arcs[:6] == _RSA_PREFIX and arcs[6] in _RSA_NAMES:
        return _RSA_NAMES[arcs[6]]
    if len(arcs) == 7 and arcs[:6] == _EC_PUBLIC_KEY_PREFIX:
        return "Elliptic Curve Public Key"
    if len(arcs) == 8 and arcs[:6] == _ECDSA_PREFIX and arcs[6] in _ECDSA_NAMES:
        return _ECDSA_NAMES[arcs[6]]
    if len(arcs) == 4 and arcs[:3] == _EXTENSION_PREFIX and arcs[3] in _EXTENSION_NAMES:
        return _EXTENSION_NAMES[arcs[3]]
    return _EXACT_NAMES.get(arcs)


def format_oid_with_name(oid: Sequence[int]) -> str:
    """Dotted-decimal form followed by the OID's name in parentheses when known."""
    text = format_oid(oid)
    name = get_oid_name(oid)
    return f"{text} ({name})" if name else text


def format_hex_dump(data: bytes) -> str:
    """Lower-case hex, 16 octets per line with an extra gap after every 8."""
    parts = []
    for index, octet in enumerate(data):
        parts.append(f"{octet:02x}")
        count = index + 1
        if index > 0 and count % 16 == 0:
            parts.append("\n")
        elif index > 0 and count % 8 == 0:
            parts.append("  ")
        else:
            parts.append(" ")
    if len(data) % 16:
        parts.append("\n")
    return "".join(parts)