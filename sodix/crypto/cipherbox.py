"""
sodix Cipher Box

Public-key authenticated encryption with hex framing.

Blob format:
    hex(nonce (24 bytes)) || hex(ciphertext || tag (16 bytes))

The nonce is generated fresh for every message and never supplied by
the caller. Decryption splits the blob at the fixed nonce length.

Key pairing:
    encrypt: recipient's public key + sender's own secret key
    decrypt: sender's public key + recipient's own secret key

Swapping "theirs" and "mine" is not detected; it produces a blob that
nobody can open. All arguments are keyword-only so the roles are always
spelled out at the call site.
"""

import logging
from typing import Callable

from ..errors import InvalidEncoding
from . import hexcodec
from .primitives import (
    random_bytes,
    BOX_NONCE_SIZE,
    BOX_TAG_SIZE,
    BOX_PUBLIC_KEY_SIZE,
    BOX_SECRET_KEY_SIZE,
)
from .provider import PrimitiveProvider


logger = logging.getLogger(__name__)

# Random source signature: length -> bytes
RandomSource = Callable[[int], bytes]


def _check_key(key: bytes, size: int, what: str) -> None:
    if len(key) != size:
        raise InvalidEncoding(f"Invalid {what}: expected {size} bytes, got {len(key)}")


class CipherBox:
    """
    Encrypts and decrypts hex blobs through a primitive provider.
    
    Usage:
        box = CipherBox(get_provider())
        blob = box.encrypt(b"secret", recipient_public_key=bob_pub, sender_secret_key=alice_sec)
        box.decrypt(blob, sender_public_key=alice_pub, recipient_secret_key=bob_sec)
    """
    
    def __init__(self, provider: PrimitiveProvider, random_source: RandomSource = random_bytes):
        """
        Args:
            provider: Primitive provider performing the box operations
            random_source: Nonce generator, replaceable for deterministic tests
        """
        self.provider = provider
        self.random_source = random_source
    
    def encrypt(
        self,
        message: bytes,
        *,
        recipient_public_key: bytes,
        sender_secret_key: bytes,
    ) -> str:
        """
        Encrypt a message for a recipient.
        
        Args:
            message: Plaintext bytes
            recipient_public_key: The other party's 32-byte public key
            sender_secret_key: This party's own 32-byte secret key
            
        Returns:
            str: Hex blob (nonce followed by ciphertext and tag)

        Raises:
            InvalidEncoding: If a key has the wrong size or the public key is rejected
            ValueError: If the random source returns a nonce of the wrong length
        """
        _check_key(recipient_public_key, BOX_PUBLIC_KEY_SIZE, "recipient public key")
        _check_key(sender_secret_key, BOX_SECRET_KEY_SIZE, "sender secret key")
        
        nonce = self.random_source(BOX_NONCE_SIZE)
        if len(nonce) != BOX_NONCE_SIZE:
            raise ValueError(f"Random source returned {len(nonce)} bytes, expected {BOX_NONCE_SIZE}")
        
        ciphertext = self.provider.box(message, nonce, recipient_public_key, sender_secret_key)
        logger.debug(f"Encrypted {len(message)} bytes ({self.provider.name})")
        
        return hexcodec.encode(nonce) + hexcodec.encode(ciphertext)
    
    def decrypt(
        self,
        blob_hex: str,
        *,
        sender_public_key: bytes,
        recipient_secret_key: bytes,
    ) -> bytes:
        """
        Decrypt a hex blob from a sender.
        
        Args:
            blob_hex: Hex blob produced by encrypt()
            sender_public_key: The other party's 32-byte public key
            recipient_secret_key: This party's own 32-byte secret key
            
        Returns:
            bytes: Recovered plaintext
            
        Raises:
            InvalidEncoding: If the blob is not hex or too short
            AuthenticationFailed: If the data was tampered with or the keys are wrong
        """
        _check_key(sender_public_key, BOX_PUBLIC_KEY_SIZE, "sender public key")
        _check_key(recipient_secret_key, BOX_SECRET_KEY_SIZE, "recipient secret key")
        
        combined = hexcodec.decode(blob_hex.strip(), what="ciphertext")
        
        # Minimum blob size: nonce (24) + tag (16)
        min_size = BOX_NONCE_SIZE + BOX_TAG_SIZE
        if len(combined) < min_size:
            raise InvalidEncoding(
                f"Input too short ({len(combined)} bytes); must contain nonce and ciphertext"
            )
        
        nonce = combined[:BOX_NONCE_SIZE]
        ciphertext = combined[BOX_NONCE_SIZE:]
        
        plaintext = self.provider.box_open(ciphertext, nonce, sender_public_key, recipient_secret_key)
        logger.debug(f"Decrypted {len(plaintext)} bytes ({self.provider.name})")
        return plaintext
