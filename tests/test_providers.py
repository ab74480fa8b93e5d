"""
Primitive provider tests.

Checks both providers against the PrimitiveProvider contract and the
sodium provider against libsodium directly.

Usage:
    python -m pytest tests/test_providers.py -v
"""

import pytest
from nacl.public import Box, PrivateKey, PublicKey
from nacl.signing import VerifyKey

from sodix.crypto.provider import PrimitiveProvider, available_providers, get_provider
from sodix.crypto.primitives import BOX_NONCE_SIZE, BOX_TAG_SIZE, hkdf_derive, random_bytes
from sodix.errors import AuthenticationFailed, InvalidEncoding


# =============================================================================
# Registry
# =============================================================================

def test_available_providers():
    assert sorted(available_providers()) == ["openssl", "sodium"]


def test_get_provider_is_case_insensitive():
    assert get_provider("SODIUM").name == "sodium"


def test_get_provider_unknown():
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("rot13")


def test_provider_is_abstract():
    with pytest.raises(TypeError):
        PrimitiveProvider()


# =============================================================================
# Contract (both providers)
# =============================================================================

def test_signing_keypair_sizes(provider):
    public, secret = provider.generate_signing_keypair()
    assert len(public) == 32
    assert len(secret) == 64
    # libsodium layout: seed || public key
    assert secret[32:] == public


def test_encryption_keypair_sizes(provider):
    public, secret = provider.generate_encryption_keypair()
    assert len(public) == 32
    assert len(secret) == 32
    assert public != secret


def test_sign_verify(provider):
    public, secret = provider.generate_signing_keypair()
    signature = provider.sign(b"hello", secret)
    assert len(signature) == 64
    assert provider.verify(b"hello", signature, public)
    assert not provider.verify(b"hello!", signature, public)


def test_sign_with_seed_only(provider):
    public, secret = provider.generate_signing_keypair()
    assert provider.sign(b"m", secret[:32]) == provider.sign(b"m", secret)


def test_verify_with_other_key_is_false(provider):
    _, secret = provider.generate_signing_keypair()
    other_public, _ = provider.generate_signing_keypair()
    signature = provider.sign(b"hello", secret)
    assert provider.verify(b"hello", signature, other_public) is False


def test_box_roundtrip(provider):
    a_public, a_secret = provider.generate_encryption_keypair()
    b_public, b_secret = provider.generate_encryption_keypair()
    nonce = random_bytes(BOX_NONCE_SIZE)

    ciphertext = provider.box(b"secret", nonce, b_public, a_secret)
    assert len(ciphertext) == len(b"secret") + BOX_TAG_SIZE
    assert provider.box_open(ciphertext, nonce, a_public, b_secret) == b"secret"


def test_box_open_wrong_key(provider):
    a_public, a_secret = provider.generate_encryption_keypair()
    b_public, b_secret = provider.generate_encryption_keypair()
    c_public, _ = provider.generate_encryption_keypair()
    nonce = random_bytes(BOX_NONCE_SIZE)

    ciphertext = provider.box(b"secret", nonce, b_public, a_secret)
    with pytest.raises(AuthenticationFailed):
        provider.box_open(ciphertext, nonce, c_public, b_secret)


def test_box_open_wrong_nonce(provider):
    a_public, a_secret = provider.generate_encryption_keypair()
    b_public, b_secret = provider.generate_encryption_keypair()
    nonce = b"\x01" * BOX_NONCE_SIZE

    ciphertext = provider.box(b"secret", nonce, b_public, a_secret)
    with pytest.raises(AuthenticationFailed):
        provider.box_open(ciphertext, b"\x02" * BOX_NONCE_SIZE, a_public, b_secret)


def test_box_to_low_order_public_key(provider):
    _, a_secret = provider.generate_encryption_keypair()
    with pytest.raises(InvalidEncoding, match="Invalid public key"):
        provider.box(b"secret", random_bytes(BOX_NONCE_SIZE), b"\x00" * 32, a_secret)


def test_box_open_from_low_order_public_key(provider):
    _, b_secret = provider.generate_encryption_keypair()
    with pytest.raises(AuthenticationFailed):
        provider.box_open(b"\x00" * 24, random_bytes(BOX_NONCE_SIZE), b"\x00" * 32, b_secret)


# =============================================================================
# Interoperability
# =============================================================================

def test_signatures_match_across_providers():
    sodium = get_provider("sodium")
    openssl = get_provider("openssl")
    public, secret = sodium.generate_signing_keypair()

    signature = sodium.sign(b"interop", secret)
    assert openssl.sign(b"interop", secret) == signature
    assert openssl.verify(b"interop", signature, public)


def test_sodium_signature_verifies_with_nacl(sodium):
    public, secret = sodium.generate_signing_keypair()
    signature = sodium.sign(b"payload", secret)
    assert VerifyKey(public).verify(b"payload", signature) == b"payload"


def test_sodium_box_matches_nacl_box(sodium):
    a_public, a_secret = sodium.generate_encryption_keypair()
    b_public, b_secret = sodium.generate_encryption_keypair()
    nonce = random_bytes(BOX_NONCE_SIZE)

    ciphertext = sodium.box(b"crypto_box_easy", nonce, b_public, a_secret)
    nacl_box = Box(PrivateKey(b_secret), PublicKey(a_public))
    assert nacl_box.decrypt(ciphertext, nonce) == b"crypto_box_easy"


def test_openssl_box_not_readable_by_sodium():
    sodium = get_provider("sodium")
    openssl = get_provider("openssl")
    a_public, a_secret = sodium.generate_encryption_keypair()
    b_public, b_secret = sodium.generate_encryption_keypair()
    nonce = random_bytes(BOX_NONCE_SIZE)

    ciphertext = openssl.box(b"secret", nonce, b_public, a_secret)
    with pytest.raises(AuthenticationFailed):
        sodium.box_open(ciphertext, nonce, a_public, b_secret)


# =============================================================================
# Shared primitives
# =============================================================================

def test_random_bytes_length():
    assert len(random_bytes(BOX_NONCE_SIZE)) == BOX_NONCE_SIZE
    assert random_bytes(0) == b""
    with pytest.raises(ValueError):
        random_bytes(-1)


def test_hkdf_derive_depends_on_salt():
    shared = b"\x07" * 32
    key = hkdf_derive(shared, 32, b"sodix-box-key-v1", salt=b"\x01" * BOX_NONCE_SIZE)
    assert len(key) == 32
    assert key == hkdf_derive(shared, 32, b"sodix-box-key-v1", salt=b"\x01" * BOX_NONCE_SIZE)
    assert key != hkdf_derive(shared, 32, b"sodix-box-key-v1", salt=b"\x02" * BOX_NONCE_SIZE)
    with pytest.raises(ValueError):
        hkdf_derive(shared, 0, b"sodix-box-key-v1")
