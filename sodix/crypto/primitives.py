"""
sodix Cryptographic Primitives

Low-level helpers shared by the primitive providers.

SECURITY NOTES:
- All randomness from os.urandom (kernel CSPRNG)
- Key derivation uses HKDF-SHA256 from the cryptography library
"""

import os
from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF


def random_bytes(length: int) -> bytes:
    """Nonce and seed bytes from the OS CSPRNG."""
    if length < 0:
        raise ValueError("Length must be non-negative")
    return os.urandom(length)


def hkdf_derive(
    input_key_material: bytes,
    length: int,
    info: bytes,
    salt: Optional[bytes] = None,
) -> bytes:
    """
    HKDF-SHA256 over an X25519 shared secret.

    The openssl provider uses it to turn the box shared secret into a
    ChaCha20-Poly1305 key, with the box nonce as salt. HKDF itself
    rejects lengths above 8160 bytes.
    """
    if length < 1:
        raise ValueError("Length must be at least 1")

    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        info=info,
    )
    return hkdf.derive(input_key_material)


# Signing constants (Ed25519)
SIGN_PUBLIC_KEY_SIZE = 32  # bytes
SIGN_SECRET_KEY_SIZE = 64  # bytes, seed || public key
SIGN_SEED_SIZE = 32  # bytes
SIGNATURE_SIZE = 64  # bytes

# Encryption constants (Curve25519 box)
BOX_PUBLIC_KEY_SIZE = 32  # bytes
BOX_SECRET_KEY_SIZE = 32  # bytes
BOX_NONCE_SIZE = 24  # bytes
BOX_TAG_SIZE = 16  # bytes
