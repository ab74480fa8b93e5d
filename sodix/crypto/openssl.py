"""
OpenSSL provider (python3-cryptography).

Signatures are plain Ed25519 and interoperate with the sodium provider.
Boxes are built from primitives the cryptography library exposes:

    shared  = X25519(my_secret, their_public)
    key     = HKDF-SHA256(shared, salt=nonce, info="sodix-box-key-v1")
    payload = ChaCha20-Poly1305(key, zero 12-byte nonce, message)

Every 24-byte nonce yields a distinct subkey, so the fixed inner nonce
is never reused under one key. Blobs share the sodium framing but can
only be opened by this provider.
"""

from typing import Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.asymmetric.x25519 import (
    X25519PrivateKey,
    X25519PublicKey,
)
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305
from cryptography.exceptions import InvalidSignature, InvalidTag

from ..errors import AuthenticationFailed, InvalidEncoding
from .primitives import hkdf_derive, SIGN_SEED_SIZE
from .provider import PrimitiveProvider


# Domain separation for the per-nonce box subkey
BOX_KEY_INFO = b"sodix-box-key-v1"

# ChaCha20-Poly1305 (IETF) nonce; constant because the subkey is per-nonce
INNER_NONCE = b"\x00" * 12


def _raw_public(key) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _raw_private(key) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )


class OpenSSLProvider(PrimitiveProvider):
    """Primitive provider backed by the cryptography library."""
    
    name = "openssl"
    
    def generate_signing_keypair(self) -> Tuple[bytes, bytes]:
        private_key = Ed25519PrivateKey.generate()
        public_key = _raw_public(private_key.public_key())
        return public_key, _raw_private(private_key) + public_key
    
    def sign(self, message: bytes, secret_key: bytes) -> bytes:
        private_key = Ed25519PrivateKey.from_private_bytes(secret_key[:SIGN_SEED_SIZE])
        return private_key.sign(message)
    
    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        try:
            Ed25519PublicKey.from_public_bytes(public_key).verify(signature, message)
            return True
        except (InvalidSignature, ValueError):
            return False
    
    def generate_encryption_keypair(self) -> Tuple[bytes, bytes]:
        private_key = X25519PrivateKey.generate()
        return _raw_public(private_key.public_key()), _raw_private(private_key)
    
    def _box_key(self, nonce: bytes, their_public_key: bytes, my_secret_key: bytes) -> bytes:
        private_key = X25519PrivateKey.from_private_bytes(my_secret_key)
        shared_secret = private_key.exchange(X25519PublicKey.from_public_bytes(their_public_key))
        return hkdf_derive(
            input_key_material=shared_secret,
            length=32,
            info=BOX_KEY_INFO,
            salt=nonce,
        )
    
    def box(
        self,
        message: bytes,
        nonce: bytes,
        their_public_key: bytes,
        my_secret_key: bytes,
    ) -> bytes:
        try:
            key = self._box_key(nonce, their_public_key, my_secret_key)
        except ValueError as e:
            # X25519 rejects low-order points with an all-zero shared secret
            raise InvalidEncoding(f"Invalid public key: {e}")
        return ChaCha20Poly1305(key).encrypt(INNER_NONCE, message, None)
    
    def box_open(
        self,
        ciphertext: bytes,
        nonce: bytes,
        their_public_key: bytes,
        my_secret_key: bytes,
    ) -> bytes:
        try:
            key = self._box_key(nonce, their_public_key, my_secret_key)
            return ChaCha20Poly1305(key).decrypt(INNER_NONCE, ciphertext, None)
        except (InvalidTag, ValueError):
            raise AuthenticationFailed()
