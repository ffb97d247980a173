[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cardanokit"
version = "0.14.0a2"
description = "CBOR codec, Blake2b hashing, Ed25519 keys, bech32 and asset fingerprints for Cardano"
requires-python = ">=3.10"
dependencies = []
keywords = ["cardano", "cbor", "bech32", "blake2b", "ed25519", "cip5", "cip14"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["cardanokit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
