"""
Detached Ed25519 signatures.

Signatures are 64 raw bytes, hex-encoded for display and transport.
A signature that does not verify is a result (False), while one that is
not 64 bytes long is an encoding error.
"""

import logging

from ..errors import InvalidEncoding
from . import hexcodec
from .primitives import SIGNATURE_SIZE, SIGN_PUBLIC_KEY_SIZE, SIGN_SECRET_KEY_SIZE, SIGN_SEED_SIZE
from .provider import PrimitiveProvider


logger = logging.getLogger(__name__)


class Signer:
    """Signs and verifies messages through a primitive provider."""
    
    def __init__(self, provider: PrimitiveProvider):
        self.provider = provider
    
    def sign(self, message: bytes, secret_key: bytes) -> bytes:
        """
        Sign a message.
        
        Args:
            message: Exact bytes to sign
            secret_key: Ed25519 secret key (64 bytes, or its 32-byte seed)
            
        Returns:
            bytes: 64-byte signature
        """
        if len(secret_key) not in (SIGN_SECRET_KEY_SIZE, SIGN_SEED_SIZE):
            raise InvalidEncoding(
                f"Signing secret key must be {SIGN_SECRET_KEY_SIZE} or {SIGN_SEED_SIZE} bytes, got {len(secret_key)}"
            )
        
        signature = self.provider.sign(message, secret_key)
        logger.debug(f"Signed {len(message)} bytes ({self.provider.name})")
        return signature
    
    def sign_hex(self, message: bytes, secret_key: bytes) -> str:
        return hexcodec.encode(self.sign(message, secret_key))
    
    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        """
        Verify a signature against the exact message bytes.
        
        Returns:
            bool: True if the signature is valid for this key
            
        Raises:
            InvalidEncoding: If the signature is not 64 bytes
        """
        if len(signature) != SIGNATURE_SIZE:
            raise InvalidEncoding(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
            )
        if len(public_key) != SIGN_PUBLIC_KEY_SIZE:
            raise InvalidEncoding(
                f"Signing public key must be {SIGN_PUBLIC_KEY_SIZE} bytes, got {len(public_key)}"
            )
        
        valid = self.provider.verify(message, signature, public_key)
        if not valid:
            logger.debug("Signature verification failed")
        return valid
    
    def verify_hex(self, message: bytes, signature_hex: str, public_key: bytes) -> bool:
        """Verify a hex-encoded signature."""
        signature = hexcodec.decode(signature_hex.strip(), SIGNATURE_SIZE, what="signature")
        return self.verify(message, signature, public_key)
