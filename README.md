# x509inspect

A command-line tool and small library for inspecting X.509 certificates
stored in PEM files. It decodes the base64 body of the first
`-----BEGIN CERTIFICATE-----` block, walks the DER structure and prints
the version, serial number, signature algorithm, issuer, validity
period, subject, public key and extensions.

It has no dependencies outside the Python standard library.

## Installation

```
pip install .
```

## Command line

```
x509inspect certificate.pem
```

Show usage:

```
x509inspect --help
```

The command exits with status 1 if no file is given, the file cannot be
read, the file holds no `-----BEGIN CERTIFICATE-----` /
`-----END CERTIFICATE-----` pair, or the base64 body decodes to nothing
or to more than 8192 bytes. Otherwise it prints the certificate fields
and exits with status 0.

## Library use

```python
import sys

from x509inspect.pem import read_pem_file
from x509inspect.b64 import base64_decode
from x509inspect.x509 import parse_certificate

encoded = read_pem_file("certificate.pem")
der_data = base64_decode(encoded, 8192)
parse_certificate(der_data, sys.stdout)
```

`parse_certificate` returns `False` when the data does not start with
the certificate and TBSCertificate sequences, and `True` otherwise.
`read_pem_file` raises `OSError` if the file cannot be read and
`ValueError` if it holds no certificate block; `base64_decode` raises
`ValueError` when the output would exceed the given limit.

Lower-level pieces are available too:

- `x509inspect.der.DerContext` reads and writes DER tag/length/value
  elements (booleans, integers, 32-bit signed and unsigned integers,
  octet strings, NULL, sequence and set headers), raising `DerError`
  with an `ErrorCode` when the data is malformed or the buffer is too
  small.
- `x509inspect.der_strings` encodes and decodes UTF8String,
  PrintableString and OBJECT IDENTIFIER values.
- `x509inspect.der_utils.print_structure` dumps any DER blob as an
  indented tree, and `validate_structure` raises `DerError` unless every
  element is well formed with minimally encoded lengths.
  `tag_to_string` and `error_to_string` give readable names.
- `x509inspect.der_file.DerFile` loads a raw DER file (up to 10 MiB) or
  wraps a buffer, prints a summary with `print_info`, and guesses
  whether it holds a certificate (`is_certificate`) or a private key
  (`is_private_key`). `write_file` and `write_context` save DER data.
- `x509inspect.oids.get_oid_name` gives readable names for common RSA,
  ECDSA and X.509 extension identifiers; `format_oid` and
  `format_oid_with_name` render them in dotted form.

## What it does not do

- It does not verify signatures, check validity dates or build
  certificate chains; it only prints what the certificate contains.
- Validity times are printed as the raw UTCTime/GeneralizedTime text.
- Only the first certificate block in a PEM file is read, and the
  command accepts only PEM input, not raw DER files.
- Extension values are reported by size only, not decoded.

## Running the tests

```
pip install ".[test]"
pytest
```