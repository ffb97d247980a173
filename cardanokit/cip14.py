"""Asset fingerprints: a short bech32 name for a policy id and asset name."""

from __future__ import annotations

import binascii
import hashlib
from dataclasses import dataclass

from .bech32 import encode as _bech32_encode

_HRP = "asset"
_DIGEST_SIZE = 20


@dataclass(frozen=True)
class AssetFingerprint:
    """The 20-byte Blake2b digest identifying an asset."""

    digest: bytes

    @classmethod
    def from_parts(cls, policy_id: str, asset_name: str) -> AssetFingerprint:
        """Build the fingerprint from a hex policy id and hex asset name."""
        try:
            raw = binascii.unhexlify(policy_id + asset_name)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("policy id and asset name must be hex strings") from exc
        return cls(hashlib.blake2b(raw, digest_size=_DIGEST_SIZE).digest())

    def fingerprint(self) -> str:
        return _bech32_encode(_HRP, self.digest)

    def __str__(self) -> str:
        return self.fingerprint()