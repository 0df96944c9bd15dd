"""Command line entry point: print the fields of a PEM certificate."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .b64 import base64_decode
from .pem import read_pem_file
from .x509 import parse_certificate

PROG = "x509inspect"
_MAX_DER_SIZE = 8192


def main(argv: Sequence[str] | None = None) -> int:
    """Run the certificate parser; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)

    if not args:
        print("Error: No certificate file provided.", file=sys.stderr)
        print(f"Usage: {PROG} [certificate_file]", file=sys.stderr)
        return 1

    filename = args[0]
    if filename in ("-h", "--help"):
        print(f"Usage: {PROG} [certificate_file]")
        print("Parse X.509 certificates in PEM format.\n")
        return 0

    print("X.509 Certificate Parser")
    print("========================")
    print(f"Parsing certificate file: {filename}\n")

    try:
        pem_data = read_pem_file(filename)
    except (OSError, ValueError) as error:
        if isinstance(error, OSError):
            print(f"Failed to open file: {error.strerror or error}", file=sys.stderr)
        print(f"Failed to read PEM file: {filename}", file=sys.stderr)
        print(
            "Make sure the file exists and contains a valid PEM certificate.",
            file=sys.stderr,
        )
        return 1

    try:
        der_data = base64_decode(pem_data, _MAX_DER_SIZE)
    except ValueError:
        der_data = b""
    if not der_data:
        print("Failed to decode base64 data from PEM file", file=sys.stderr)
        return 1

    print(f"Certificate size: {len(der_data)} bytes\n")
    sys.stdout.flush()
    parse_certificate(der_data, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())