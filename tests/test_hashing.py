"""Unit tests for digest helpers."""

import hashlib
import hmac

import pytest

from idempofy.errors import (
    InvalidConfigurationError,
    MissingSecretKeyError,
    UnsupportedAlgorithmError,
)
from idempofy.schemas.fingerprint import HashingConfig
from idempofy.utils.hashing import (
    algorithm_collision_risk,
    compute_digest,
    digest,
    generate_secret_key,
    resolve_hashing_config,
    verify_digest,
)


def test_default_is_sha256():
    """Default config hashes with SHA-256 and reports the default key id."""
    result = digest("test data")
    assert result.algorithm == "sha256"
    assert result.hash == hashlib.sha256(b"test data").hexdigest()
    assert len(result.hash) == 64
    assert result.key_id == "default"


def test_sha512():
    """SHA-512 yields 128 hex characters."""
    result = digest("test data", {"algorithm": "sha512"})
    assert result.hash == hashlib.sha512(b"test data").hexdigest()
    assert len(result.hash) == 128


def test_algorithm_name_is_case_insensitive():
    """Algorithm names are matched lower-case."""
    assert digest("x", {"algorithm": "SHA256"}).algorithm == "sha256"


def test_hmac_sha256():
    """HMAC-SHA256 matches the standard library."""
    result = digest("data", {"algorithm": "hmac-sha256", "secretKey": "secret", "keyId": "k1"})
    assert result.hash == hmac.new(b"secret", b"data", "sha256").hexdigest()
    assert result.algorithm == "hmac-sha256"
    assert result.key_id == "k1"


def test_hmac_sha512():
    """HMAC-SHA512 matches the standard library."""
    result = digest(b"data", HashingConfig(algorithm="hmac-sha512", secret_key=b"secret"))
    assert result.hash == hmac.new(b"secret", b"data", "sha512").hexdigest()


def test_hmac_key_sensitivity():
    """Different keys give different digests; the same key gives the same one."""
    a = digest("data", {"algorithm": "hmac-sha256", "secret_key": "key-a"}).hash
    b = digest("data", {"algorithm": "hmac-sha256", "secret_key": "key-b"}).hash
    a_again = digest("data", {"algorithm": "hmac-sha256", "secret_key": "key-a"}).hash
    assert a != b
    assert a == a_again


def test_str_and_bytes_keys_agree():
    """A str key is used as its UTF-8 bytes."""
    as_str = digest("d", {"algorithm": "hmac-sha256", "secret_key": "k"}).hash
    as_bytes = digest("d", {"algorithm": "hmac-sha256", "secret_key": b"k"}).hash
    assert as_str == as_bytes


def test_hmac_without_key_raises():
    """HMAC without a key and without generate_key fails."""
    with pytest.raises(MissingSecretKeyError):
        digest("data", {"algorithm": "hmac-sha256"})
    with pytest.raises(MissingSecretKeyError):
        digest("data", {"algorithm": "hmac-sha512", "secret_key": ""})


def test_generate_key():
    """generate_key supplies a fresh random key per call."""
    config = {"algorithm": "hmac-sha256", "generateKey": True}
    first = digest("data", config)
    second = digest("data", config)
    assert len(first.hash) == 64
    assert first.hash != second.hash


def test_unsupported_algorithm():
    """Unknown algorithm names are rejected."""
    with pytest.raises(UnsupportedAlgorithmError):
        digest("data", {"algorithm": "md5"})
    with pytest.raises(UnsupportedAlgorithmError):
        compute_digest(b"data", "sha1")


def test_compute_digest_returns_raw_bytes():
    """The raw digest is bytes of the algorithm's size."""
    assert compute_digest(b"data", "sha256") == hashlib.sha256(b"data").digest()
    assert len(compute_digest(b"data", "hmac-sha512", b"k")) == 64


def test_generate_secret_key():
    """Keys are random hex of twice the byte length."""
    assert len(generate_secret_key()) == 64
    assert len(generate_secret_key(16)) == 32
    assert generate_secret_key() != generate_secret_key()
    int(generate_secret_key(), 16)


def test_verify_digest():
    """Verification is a predicate and never raises on hashing failures."""
    config = {"algorithm": "hmac-sha256", "secret_key": "secret"}
    expected = digest("data", config).hash
    assert verify_digest("data", expected, config)
    assert not verify_digest("other", expected, config)
    assert not verify_digest("data", expected, {"algorithm": "hmac-sha256"})
    assert not verify_digest("data", expected, {"algorithm": "md5"})


def test_verify_digest_rejects_malformed_input():
    """Malformed configs and non-string hashes verify as False."""
    expected = digest("data").hash
    assert not verify_digest("data", expected, {"algorithm": 5})
    assert not verify_digest("data", None)
    assert not verify_digest("data", expected.encode("utf-8"))


def test_malformed_hashing_config_raises():
    """Dict configs that fail validation surface as configuration errors."""
    with pytest.raises(InvalidConfigurationError):
        resolve_hashing_config({"algorithm": 5})


def test_empty_algorithm_is_unsupported():
    """An explicit empty algorithm name is not replaced by the default."""
    with pytest.raises(UnsupportedAlgorithmError):
        digest("data", {"algorithm": ""})


def test_resolve_hashing_config_defaults():
    """Unset values come from settings; caller values win."""
    resolved = resolve_hashing_config(None)
    assert resolved.algorithm == "sha256"
    assert resolved.key_id == "default"
    resolved = resolve_hashing_config({"algorithm": "sha512", "keyId": "rotated"})
    assert resolved.algorithm == "sha512"
    assert resolved.key_id == "rotated"


def test_secret_key_hidden_from_repr():
    """Key material never shows up in reprs."""
    assert "supersecret" not in repr(HashingConfig(secret_key="supersecret"))


def test_algorithm_collision_risk():
    """All supported algorithms are low risk; anything else medium."""
    for name in ("sha256", "sha512", "hmac-sha256", "hmac-sha512"):
        assert algorithm_collision_risk(name) == "low"
    assert algorithm_collision_risk("md5") == "medium"
