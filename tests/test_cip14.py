import pytest

from cardanokit.cip14 import AssetFingerprint


def test_fingerprint_policy_only():
    fingerprint = AssetFingerprint.from_parts(
        "7eae28af2208be856f7a119668ae52a49b73725e326dc16579dcc373", ""
    )
    assert fingerprint.fingerprint() == "asset1rjklcrnsdzqp65wjgrg55sy9723kw09mlgvlc3"


def test_fingerprint_with_asset_name():
    fingerprint = AssetFingerprint.from_parts(
        "1e349c9bdea19fd6c147626a5260bc44b71635f398b67c59881df209", "504154415445"
    )
    assert fingerprint.fingerprint() == "asset1hv4p5tv2a837mzqrst04d0dcptdjmluqvdx9k3"


def test_str_is_fingerprint():
    fingerprint = AssetFingerprint.from_parts(
        "7eae28af2208be856f7a119668ae52a49b73725e326dc16579dcc373", ""
    )
    assert str(fingerprint) == fingerprint.fingerprint()
    assert len(fingerprint.digest) == 20


def test_invalid_hex_rejected():
    with pytest.raises(ValueError):
        AssetFingerprint.from_parts("not-hex", "")


def test_odd_length_hex_rejected():
    with pytest.raises(ValueError):
        AssetFingerprint.from_parts("abc", "")