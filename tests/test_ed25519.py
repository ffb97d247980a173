import hashlib
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cardanokit.ed25519 import (
    InvalidSizeError,
    PublicKey,
    SecretKey,
    SecretKeyExtended,
    Signature,
)

RFC_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
RFC_PUBLIC = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC_SIGNATURE = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


def _tweak(raw: bytes) -> bytes:
    data = bytearray(raw)
    data[0] &= 0b1111_1000
    data[31] &= 0b0011_1111
    data[31] |= 0b0100_0000
    return bytes(data)


seeds = st.binary(min_size=32, max_size=32)
extended = st.binary(min_size=64, max_size=64).map(_tweak)
messages = st.binary(max_size=48)


def test_rfc_vector_public_key():
    assert SecretKey(RFC_SEED).public_key() == PublicKey.from_hex(RFC_PUBLIC)


def test_rfc_vector_signature():
    signature = SecretKey(RFC_SEED).sign(b"")
    assert str(signature) == RFC_SIGNATURE
    assert PublicKey.from_hex(RFC_PUBLIC).verify(b"", signature) is True


def test_expanded_seed_as_extended_key_matches():
    digest = bytearray(hashlib.sha512(RFC_SEED).digest())
    digest[0] &= 248
    digest[31] &= 127
    digest[31] |= 64
    key = SecretKeyExtended(bytes(digest))
    assert str(key.public_key()) == RFC_PUBLIC
    assert str(key.sign(b"")) == RFC_SIGNATURE


@settings(max_examples=8, deadline=None)
@given(seeds, messages)
def test_signing_verify_works(seed, message):
    key = SecretKey(seed)
    assert key.public_key().verify(message, key.sign(message)) is True


@settings(max_examples=8, deadline=None)
@given(extended, messages)
def test_signing_verify_works_extended(raw, message):
    key = SecretKeyExtended(raw)
    assert key.public_key().verify(message, key.sign(message)) is True


@settings(max_examples=8, deadline=None)
@given(
    st.binary(min_size=32, max_size=32),
    st.binary(min_size=64, max_size=64),
    messages,
)
def test_verify_random_signature_does_not_work(public, signature, message):
    assert PublicKey(public).verify(message, Signature(signature)) is False


def test_tampered_message_fails():
    key = SecretKey(RFC_SEED)
    signature = key.sign(b"hello")
    assert key.public_key().verify(b"hellp", signature) is False


@settings(max_examples=8, deadline=None)
@given(st.binary(min_size=32, max_size=32))
def test_public_key_from_correct_size(raw):
    assert bytes(PublicKey(raw)) == raw


@settings(max_examples=8, deadline=None)
@given(st.binary(max_size=80).filter(lambda b: len(b) != 32))
def test_public_key_from_incorrect_size(raw):
    with pytest.raises(InvalidSizeError):
        PublicKey(raw)


@settings(max_examples=8, deadline=None)
@given(st.binary(min_size=64, max_size=64))
def test_signature_from_correct_size(raw):
    assert bytes(Signature(raw)) == raw


@settings(max_examples=8, deadline=None)
@given(st.binary(max_size=100).filter(lambda b: len(b) != 64))
def test_signature_from_incorrect_size(raw):
    with pytest.raises(InvalidSizeError):
        Signature(raw)


@settings(max_examples=8, deadline=None)
@given(st.binary(min_size=32, max_size=32))
def test_public_key_from_str(raw):
    key = PublicKey(raw)
    assert PublicKey.from_hex(str(key)) == key


@settings(max_examples=8, deadline=None)
@given(st.binary(min_size=64, max_size=64))
def test_signature_from_str(raw):
    signature = Signature(raw)
    assert Signature.from_hex(str(signature)) == signature


@pytest.mark.parametrize("text", ["27", "zz" * 32, RFC_PUBLIC + "00"])
def test_public_key_from_bad_hex(text):
    with pytest.raises(ValueError):
        PublicKey.from_hex(text)


def test_signature_from_bad_hex():
    with pytest.raises(ValueError):
        Signature.from_hex("0d8d00cdd465")


def test_invalid_size_message():
    with pytest.raises(InvalidSizeError, match="Invalid size, expecting 32"):
        PublicKey(b"\x00")


def test_repr_formats():
    key = PublicKey.from_hex(RFC_PUBLIC)
    assert repr(key) == f"PublicKey<Ed25519>('{RFC_PUBLIC}')"
    assert repr(Signature.from_hex(RFC_SIGNATURE)).startswith("Signature<Ed25519>(")


def test_secret_repr_hides_bytes():
    assert RFC_SEED.hex() not in repr(SecretKey(RFC_SEED))


def test_secret_key_wrong_size():
    with pytest.raises(InvalidSizeError):
        SecretKey(b"\x01" * 31)


def test_extended_key_rejects_bad_structure():
    with pytest.raises(ValueError):
        SecretKeyExtended(b"\xff" * 64)


def test_generate_with_callable():
    key = SecretKey.generate(lambda n: b"\x07" * n)
    assert key.public_key() == SecretKey(b"\x07" * 32).public_key()


def test_generate_with_random_instance():
    first = SecretKey.generate(random.Random(5))
    second = SecretKey.generate(random.Random(5))
    assert first.public_key() == second.public_key()


def test_generate_extended_applies_tweaks():
    key = SecretKeyExtended.generate(lambda n: b"\xff" * n)
    expected = SecretKeyExtended(bytes([0xF8]) + b"\xff" * 30 + bytes([0x7F]) + b"\xff" * 32)
    assert key.public_key() == expected.public_key()


def test_generate_rejects_short_random():
    with pytest.raises(ValueError):
        SecretKey.generate(lambda n: b"\x00")


def test_scrub_zeroes_secret():
    key = SecretKey(RFC_SEED)
    key.scrub()
    assert key.public_key() == SecretKey(b"\x00" * 32).public_key()


def test_scrub_extended_zeroes_scalar():
    key = SecretKeyExtended(_tweak(b"\x42" * 64))
    key.scrub()
    assert bytes(key.public_key()) == b"\x01" + b"\x00" * 31