"""Inspect X.509 certificates in PEM files and DER-encoded data."""

__version__ = "0.1.0"