"""
libsodium provider (PyNaCl).

- Signing: Ed25519 (nacl.signing), crypto_sign_detached compatible
- Encryption: NaCl Box (Curve25519 + XSalsa20 + Poly1305), the same
  bytes crypto_box_easy produces
"""

from typing import Tuple

from nacl.signing import SigningKey, VerifyKey
from nacl.public import PrivateKey, PublicKey, Box
from nacl.exceptions import BadSignatureError, CryptoError

from ..errors import AuthenticationFailed, InvalidEncoding
from .primitives import SIGN_SEED_SIZE
from .provider import PrimitiveProvider


class SodiumProvider(PrimitiveProvider):
    """Primitive provider backed by libsodium through PyNaCl."""
    
    name = "sodium"
    
    def generate_signing_keypair(self) -> Tuple[bytes, bytes]:
        signing_key = SigningKey.generate()
        public_key = bytes(signing_key.verify_key)
        # libsodium secret key layout: seed || public key
        return public_key, bytes(signing_key) + public_key
    
    def sign(self, message: bytes, secret_key: bytes) -> bytes:
        signing_key = SigningKey(secret_key[:SIGN_SEED_SIZE])
        return signing_key.sign(message).signature
    
    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        try:
            VerifyKey(public_key).verify(message, signature)
            return True
        except BadSignatureError:
            return False
    
    def generate_encryption_keypair(self) -> Tuple[bytes, bytes]:
        private_key = PrivateKey.generate()
        return bytes(private_key.public_key), bytes(private_key)
    
    def box(
        self,
        message: bytes,
        nonce: bytes,
        their_public_key: bytes,
        my_secret_key: bytes,
    ) -> bytes:
        try:
            box = Box(PrivateKey(my_secret_key), PublicKey(their_public_key))
        except CryptoError as e:
            # crypto_box_beforenm rejects low-order public keys
            raise InvalidEncoding(f"Invalid public key: {e}")
        return box.encrypt(message, nonce).ciphertext
    
    def box_open(
        self,
        ciphertext: bytes,
        nonce: bytes,
        their_public_key: bytes,
        my_secret_key: bytes,
    ) -> bytes:
        try:
            box = Box(PrivateKey(my_secret_key), PublicKey(their_public_key))
            return box.decrypt(ciphertext, nonce)
        except CryptoError:
            raise AuthenticationFailed()
