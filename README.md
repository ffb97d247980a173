# cardanokit

Building blocks for working with Cardano data in plain Python, with no
runtime dependencies beyond the standard library.

- `cardanokit.cbor`: a small CBOR encoder and decoder (`Encoder`, `Decoder`,
  `DataType`, `CborError`, and the shortcuts `encode` and `decode`).
- `cardanokit.codec`: structures that keep encoding details through a decode
  and re-encode: `KeyValuePairs`, `MaybeIndefArray`,
  `OrderPreservingProperties`, `CborWrap`, `TagWrap`, `EmptyMap`,
  `ZeroOrOneArray`, `AnyUInt`, `KeepRaw`, `Nullable`, `Bytes` and `Int`.
- `cardanokit.hash`: Blake2b-224 and Blake2b-256 digests (`Hasher`), the
  fixed-size `Hash` value type, and `serialize_hash` / `deserialize_hash`.
- `cardanokit.ed25519`: Ed25519 keys and signatures (`SecretKey`,
  `SecretKeyExtended`, `PublicKey`, `Signature`, `InvalidSizeError`).
- `cardanokit.memsec`: clearing of secret buffers (`memset`, `scrub`) and
  constant-time comparisons (`memeq`, `memcmp`).
- `cardanokit.bech32`: bech32 `encode` and `decode`, raising `Bech32Error`.
- `cardanokit.cip5`: the standard bech32 prefixes (`KEYS`, `HASHES`,
  `MISCELLANEOUS`).
- `cardanokit.cip14`: asset fingerprints (`AssetFingerprint`).

## Installing

```
pip install cardanokit
```

To run the tests:

```
pip install "cardanokit[test]"
pytest
```

## CBOR

```python
from cardanokit import cbor
from cardanokit.cbor import Decoder
from cardanokit.codec import MaybeIndefArray

data = cbor.encode([1, b"\x00", "a"])

items = MaybeIndefArray.decode(Decoder(bytes.fromhex("9f0102ff")), Decoder.uint)
print(items.items, items.indefinite)   # [1, 2] True
assert cbor.encode(items) == bytes.fromhex("9f0102ff")
```

A reader is any callable that takes a `Decoder`, such as `Decoder.uint` or a
class method like `Bytes.decode`. Malformed or unexpected input raises
`CborError`.

## Hashing

```python
from cardanokit.hash import Hash, Hasher

digest = Hasher.hash(224, b"My Public Key")
print(digest.hex())  # c123c9bc0e9e31a20a4aa23518836ec5fb54bdc85735c56b38eb79a5

hasher = Hasher(256)
hasher.update(b"My transaction")
print(hasher.finalize().hex())
# 0d8d00cdd4657ac84d82f0a56067634a7adfdf43da41cb534bcaa45060973d21

h = Hash.from_hex("276fd18711931e2c0e21430192dbeac0e458093cd9d1fcd7210f64b3", 28)
```

Only digest sizes of 224 and 256 bits are supported.

## Signing

```python
from cardanokit.ed25519 import SecretKey

signer = SecretKey.generate()
verifier = signer.public_key()
signature = signer.sign(b"message")
assert verifier.verify(b"message", signature)
```

`generate` takes an optional random source: an object with `randbytes`
(such as `random.Random`) or a callable returning the requested number of
bytes. Without one, `secrets` is used. `SecretKeyExtended` works the same way
for 64-byte extended keys. Call `scrub()` on a secret key to zero its bytes.

## Bech32 and asset fingerprints

```python
from cardanokit import bech32
from cardanokit.cip5 import HASHES
from cardanokit.cip14 import AssetFingerprint

text = bech32.encode(HASHES.script, bytes(28))
hrp, data = bech32.decode(text)

fp = AssetFingerprint.from_parts(
    "1e349c9bdea19fd6c147626a5260bc44b71635f398b67c59881df209", "504154415445"
)
print(fp.fingerprint())  # asset1hv4p5tv2a837mzqrst04d0dcptdjmluqvdx9k3
```

## What this package does not do

It does not parse or build Cardano addresses: there is no decoding of
Shelley, stake or Byron addresses, no base58 support, and no network-tag
handling. The pieces it offers (CBOR, Blake2b-224 hashes and bech32) are the
ones such address handling would be built from.