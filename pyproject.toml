[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "x509inspect"
version = "0.1.0"
description = "Inspect X.509 certificates in PEM format with a small, dependency-free DER decoder"
requires-python = ">=3.10"
dependencies = []
keywords = ["x509", "certificate", "der", "asn1", "pem", "parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
x509inspect = "x509inspect.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["x509inspect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
