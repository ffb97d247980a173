"""CBOR codec, Blake2b hashing, Ed25519 keys, bech32 and asset fingerprints for Cardano."""

__version__ = "0.14.0a2"