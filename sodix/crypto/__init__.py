"""
sodix Cryptographic Module

Provides the cryptographic operations of sodix:
- Hex framing of keys, signatures and ciphertexts
- Primitive providers (libsodium via PyNaCl, OpenSSL via cryptography)
- Key generation and key file management
- Detached Ed25519 signatures
- Public-key authenticated encryption (box)
"""

from .primitives import (
    random_bytes,
    hkdf_derive,
    SIGNATURE_SIZE,
    BOX_NONCE_SIZE,
    BOX_TAG_SIZE,
)

from .provider import (
    PrimitiveProvider,
    available_providers,
    get_provider,
)

from .keys import (
    KeyStore,
    KeySet,
    SigningKeyPair,
    EncryptionKeyPair,
    KEY_FILES,
)

from .signer import Signer

from .cipherbox import CipherBox

__all__ = [
    # Primitives
    'random_bytes',
    'hkdf_derive',
    'SIGNATURE_SIZE',
    'BOX_NONCE_SIZE',
    'BOX_TAG_SIZE',
    # Providers
    'PrimitiveProvider',
    'available_providers',
    'get_provider',
    # Keys
    'KeyStore',
    'KeySet',
    'SigningKeyPair',
    'EncryptionKeyPair',
    'KEY_FILES',
    # Operations
    'Signer',
    'CipherBox',
]
