"""Whole DER documents loaded from disk or memory, with inspection helpers."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from .der import DerContext, DerError, ErrorCode, Tag, is_context_specific
from .der_utils import error_to_string, print_structure, tag_to_string, validate_structure

DER_MAX_FILE_SIZE = 10 * 1024 * 1024


def _peek(ctx: DerContext) -> int | None:
    try:
        return ctx.peek_tag()
    except DerError:
        return None


@dataclass
class CertInfo:
    """Basic facts extracted from a certificate."""

    subject: str | None = None
    issuer: str | None = None
    serial_number: int = 0
    not_before: str | None = None
    not_after: str | None = None
    public_key_oid: tuple[int, ...] = ()
    public_key_data: bytes = b""


@dataclass
class DerFile:
    """A DER document held in memory, with a reading cursor over it."""

    data: bytes
    ctx: DerContext = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        if not self.data:
            raise DerError(ErrorCode.NULL_POINTER, "a DER document cannot be empty")
        self.ctx = DerContext(self.data)

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def read(cls, path: str | Path) -> DerFile:
        """Load a DER document from ``path``; it may not exceed 10 MiB."""
        file_path = Path(path)
        try:
            if file_path.stat().st_size > DER_MAX_FILE_SIZE:
                raise DerError(ErrorCode.INVALID_DATA, f"{file_path} is too large")
            data = file_path.read_bytes()
        except OSError as error:
            raise DerError(ErrorCode.INVALID_DATA, f"cannot read {file_path}") from error
        if len(data) > DER_MAX_FILE_SIZE:
            raise DerError(ErrorCode.INVALID_DATA, f"{file_path} is too large")
        return cls(data)

    @classmethod
    def from_buffer(cls, buffer: bytes) -> DerFile:
        """Wrap an in-memory DER document."""
        return cls(buffer)

    def parse_structure(self, out: TextIO | None = None) -> None:
        """Write the element tree of the document to ``out``."""
        stream = sys.stdout if out is None else out
        stream.write(f"DER File Structure ({self.size} bytes):\n")
        stream.write("================================\n")
        try:
            print_structure(self.data, 0, stream)
        except DerError as error:
            stream.write(f"Error parsing structure: {error_to_string(error.code)}\n")
            raise

    def validate(self) -> None:
        """Raise :class:`DerError` unless the document is well formed."""
        validate_structure(self.data)

    def print_info(self, out: TextIO | None = None) -> None:
        """Write a short summary of the document to ``out``."""
        stream = sys.stdout if out is None else out
        stream.write("DER File Information:\n")
        stream.write("====================\n")
        stream.write(f"File size: {self.size} bytes\n")

        try:
            self.validate()
            validation = "VALID"
        except DerError as error:
            validation = error_to_string(error.code)
        stream.write(f"Structure validation: {validation}\n")

        if self.size > 0:
            first_tag = self.data[0]
            stream.write(f"Root element: {tag_to_string(first_tag)} (0x{first_tag:02X})\n")
            if first_tag == Tag.SEQUENCE:
                stream.write("Likely contains: Certificate, Key, or other structured data\n")

        if self.is_certificate():
            stream.write("File type: X.509 Certificate (likely)\n")
        elif self.is_private_key():
            stream.write("File type: Private Key (likely)\n")
        else:
            stream.write("File type: Unknown DER structure\n")
        stream.write("\n")

    def is_certificate(self) -> bool:
        """True when the layout is SEQUENCE { SEQUENCE, SEQUENCE, BIT STRING ... }."""
        ctx = DerContext(self.data)
        try:
            if ctx.peek_tag() != Tag.SEQUENCE:
                return False
            ctx.decode_sequence_header()
            for _ in range(2):
                if ctx.peek_tag() != Tag.SEQUENCE:
                    return False
                ctx.skip_element()
            return ctx.peek_tag() == Tag.BIT_STRING
        except DerError:
            return False

    def is_private_key(self) -> bool:
        """True when the layout is SEQUENCE { INTEGER, INTEGER ... }."""
        ctx = DerContext(self.data)
        try:
            if ctx.peek_tag() != Tag.SEQUENCE:
                return False
            ctx.decode_sequence_header()
            if ctx.peek_tag() != Tag.INTEGER:
                return False
            ctx.skip_element()
            return ctx.peek_tag() == Tag.INTEGER
        except DerError:
            return False

    def extract_cert_info(self, out: TextIO | None = None) -> CertInfo:
        """Pull the serial number out of a certificate's basic structure."""
        stream = sys.stdout if out is None else out
        info = CertInfo()
        ctx = DerContext(self.data)
        ctx.decode_sequence_header()
        ctx.decode_sequence_header()

        tag = _peek(ctx)
        if tag is not None and is_context_specific(tag):
            ctx.skip_element()

        if _peek(ctx) == Tag.INTEGER:
            try:
                info.serial_number = ctx.decode_integer_uint32()
            except DerError:
                ctx.pos -= 1
                ctx.skip_element()

        stream.write("Certificate parsing: Basic structure detected\n")
        stream.write("Note: Full certificate parsing requires more complex ASN.1 handling\n")
        return info


def write_file(path: str | Path, data: bytes) -> None:
    """Write ``data`` to ``path``; empty data is refused."""
    if not data:
        raise DerError(ErrorCode.NULL_POINTER, "nothing to write")
    try:
        Path(path).write_bytes(bytes(data))
    except OSError as error:
        raise DerError(ErrorCode.INVALID_DATA, f"cannot write {path}") from error


def write_context(path: str | Path, ctx: DerContext) -> None:
    """Write everything encoded into ``ctx`` so far to ``path``."""
    write_file(path, bytes(ctx.data[: ctx.pos]))