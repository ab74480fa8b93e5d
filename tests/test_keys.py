"""
Key store tests: generation, persistence, loading and resolution.

Usage:
    python -m pytest tests/test_keys.py -v
"""

import os
import stat

import pytest

from sodix.crypto import hexcodec
from sodix.crypto.keys import (
    KeyStore,
    KEY_FILES,
    SIGN_PUBLIC_KEY_FILE,
    SIGN_SECRET_KEY_FILE,
    ENC_PUBLIC_KEY_FILE,
    ENC_SECRET_KEY_FILE,
)
from sodix.errors import InvalidEncoding, KeyFileError


def _file_bytes(key_dir):
    return {name: (key_dir / name).read_bytes() for name in KEY_FILES}


# =============================================================================
# Generation and persistence
# =============================================================================

def test_generate_writes_all_four_files(store, key_dir):
    keys = store.generate()

    assert store.missing_files() == []
    for name, key in keys.by_file().items():
        assert (key_dir / name).read_text() == hexcodec.encode(key) + "\n"


def test_generate_creates_nested_directory(tmp_path, provider):
    store = KeyStore(tmp_path / "a" / "b" / "c", provider)
    store.generate()
    assert (tmp_path / "a" / "b" / "c" / SIGN_PUBLIC_KEY_FILE).exists()


def test_secret_key_files_are_owner_only(store, key_dir):
    store.generate()
    for name in (SIGN_SECRET_KEY_FILE, ENC_SECRET_KEY_FILE):
        assert stat.S_IMODE(os.stat(key_dir / name).st_mode) == 0o600


def test_load_returns_generated_keys(store):
    generated = store.generate()
    assert store.load() == generated


def test_key_sizes(store):
    keys = store.generate()
    assert len(keys.signing.public_key) == 32
    assert len(keys.signing.secret_key) == 64
    assert len(keys.encryption.public_key) == 32
    assert len(keys.encryption.secret_key) == 32


def test_signing_and_encryption_keys_are_independent(store):
    keys = store.generate()
    assert keys.signing.public_key != keys.encryption.public_key
    assert keys.signing.secret_key[:32] != keys.encryption.secret_key


def test_generate_overwrites_existing_keys(store):
    first = store.generate()
    second = store.generate()
    assert first != second
    assert store.load() == second


# =============================================================================
# ensure_keys
# =============================================================================

def test_ensure_keys_generates_when_empty(store):
    assert store.ensure_keys() is True
    assert store.missing_files() == []


def test_ensure_keys_is_idempotent(store, key_dir):
    store.ensure_keys()
    before = _file_bytes(key_dir)

    assert store.ensure_keys() is False
    assert _file_bytes(key_dir) == before


@pytest.mark.parametrize("missing", KEY_FILES)
def test_partial_key_set_is_fully_regenerated(store, key_dir, missing):
    store.generate()
    before = _file_bytes(key_dir)
    (key_dir / missing).unlink()

    assert store.ensure_keys() is True

    after = _file_bytes(key_dir)
    for name in KEY_FILES:
        assert after[name] != before[name]


# =============================================================================
# Loading errors
# =============================================================================

def test_load_missing_file_names_it(store, key_dir):
    store.generate()
    (key_dir / ENC_PUBLIC_KEY_FILE).unlink()

    with pytest.raises(KeyFileError) as excinfo:
        store.load()
    assert excinfo.value.path == key_dir / ENC_PUBLIC_KEY_FILE
    assert ENC_PUBLIC_KEY_FILE in excinfo.value.message


def test_load_unreadable_file(store, key_dir):
    store.generate()
    (key_dir / SIGN_SECRET_KEY_FILE).unlink()
    (key_dir / SIGN_SECRET_KEY_FILE).mkdir()

    with pytest.raises(KeyFileError, match="Failed to read key"):
        store.load()


def test_load_invalid_hex(store, key_dir):
    store.generate()
    (key_dir / SIGN_PUBLIC_KEY_FILE).write_text("not hex\n")

    with pytest.raises(KeyFileError) as excinfo:
        store.load()
    assert excinfo.value.path == key_dir / SIGN_PUBLIC_KEY_FILE


def test_load_wrong_size(store, key_dir):
    store.generate()
    (key_dir / ENC_SECRET_KEY_FILE).write_text("00" * 16 + "\n")

    with pytest.raises(KeyFileError, match="expected 32 bytes, got 16"):
        store.load()


def test_load_trims_whitespace(store, key_dir):
    keys = store.generate()
    path = key_dir / SIGN_PUBLIC_KEY_FILE
    path.write_text("  " + hexcodec.encode(keys.signing.public_key) + "\r\n\n")
    assert store.load().signing.public_key == keys.signing.public_key


def test_signing_seed_file_is_accepted(store, key_dir):
    keys = store.generate()
    seed = keys.signing.secret_key[:32]
    (key_dir / SIGN_SECRET_KEY_FILE).write_text(hexcodec.encode(seed) + "\n")
    assert store.load().signing.secret_key == seed


# =============================================================================
# Listing
# =============================================================================

def test_listing_order(store):
    keys = store.generate()
    assert store.listing() == [
        hexcodec.encode(keys.signing.public_key),
        hexcodec.encode(keys.signing.secret_key),
        hexcodec.encode(keys.encryption.public_key),
        hexcodec.encode(keys.encryption.secret_key),
    ]


def test_listing_generates_missing_keys(store):
    lines = store.listing()
    assert len(lines) == 4
    assert all(lines)
    assert store.missing_files() == []


def test_listing_public_only(store):
    keys = store.generate()
    assert store.listing(public_only=True) == [
        hexcodec.encode(keys.signing.public_key),
        hexcodec.encode(keys.encryption.public_key),
    ]


def test_listing_labels(store):
    store.generate()
    lines = store.listing(labels=True)
    assert lines[0].startswith("Signing Public Key (sign_public.key): ")
    assert lines[3].startswith("Encryption Secret Key (enc_secret.key): ")


# =============================================================================
# Literal / file resolution
# =============================================================================

def test_literal_overrides_files(store, key_dir):
    literal = "11" * 32
    assert store.encryption_public_key(literal) == b"\x11" * 32
    # Key files are not consulted or created for a literal
    assert not key_dir.exists()


def test_file_keys_used_without_literal(store):
    keys = store.generate()
    assert store.signing_secret_key() == keys.signing.secret_key
    assert store.signing_public_key() == keys.signing.public_key
    assert store.encryption_public_key() == keys.encryption.public_key
    assert store.encryption_secret_key() == keys.encryption.secret_key


def test_resolution_generates_on_demand(store):
    secret = store.signing_secret_key()
    assert len(secret) == 64
    assert store.missing_files() == []


def test_resolution_without_auto_generate(key_dir, provider):
    store = KeyStore(key_dir, provider, auto_generate=False)
    with pytest.raises(KeyFileError, match="Key file not found"):
        store.encryption_secret_key()


def test_literal_with_bad_hex(store):
    with pytest.raises(InvalidEncoding):
        store.signing_public_key("xyz")


def test_literal_with_wrong_size(store):
    with pytest.raises(InvalidEncoding, match="expected 32 bytes, got 31"):
        store.encryption_secret_key("aa" * 31)
