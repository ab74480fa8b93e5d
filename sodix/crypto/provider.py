"""
sodix Primitive Provider Interface

Defines the abstract capability every signing/encryption backend must
implement. The rest of sodix only handles framing, keys and inputs;
curve and cipher math always lives behind this interface.

Design Principles:
- Raw bytes in, raw bytes out (hex framing happens above)
- Key sizes are validated by callers before reaching a provider
- Library exceptions are translated to sodix errors here
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Type


class PrimitiveProvider(ABC):
    """
    Abstract base class for cryptographic primitive backends.
    
    Usage:
        provider = get_provider("sodium")
        public, secret = provider.generate_signing_keypair()
        signature = provider.sign(b"hello", secret)
        assert provider.verify(b"hello", signature, public)
    """
    
    name = ""
    
    @abstractmethod
    def generate_signing_keypair(self) -> Tuple[bytes, bytes]:
        """
        Generate an Ed25519 key pair.
        
        Returns:
            (public_key, secret_key): 32-byte public key and 64-byte
            secret key (seed || public key)
        """
        pass
    
    @abstractmethod
    def sign(self, message: bytes, secret_key: bytes) -> bytes:
        """
        Produce a detached 64-byte Ed25519 signature.
        
        Args:
            message: Exact bytes to sign
            secret_key: 64-byte secret key or its 32-byte seed
        """
        pass
    
    @abstractmethod
    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        """
        Check a detached signature.
        
        Returns:
            bool: False for any signature that does not verify; never raises
            for 64-byte signatures and 32-byte keys
        """
        pass
    
    @abstractmethod
    def generate_encryption_keypair(self) -> Tuple[bytes, bytes]:
        """
        Generate a Curve25519 key pair.
        
        Returns:
            (public_key, secret_key): both 32 bytes
        """
        pass
    
    @abstractmethod
    def box(
        self,
        message: bytes,
        nonce: bytes,
        their_public_key: bytes,
        my_secret_key: bytes,
    ) -> bytes:
        """
        Authenticated public-key encryption.
        
        Returns:
            bytes: Ciphertext with the 16-byte tag (len(message) + 16 bytes)
        """
        pass
    
    @abstractmethod
    def box_open(
        self,
        ciphertext: bytes,
        nonce: bytes,
        their_public_key: bytes,
        my_secret_key: bytes,
    ) -> bytes:
        """
        Authenticated public-key decryption.
        
        Raises:
            AuthenticationFailed: If the tag does not verify
        """
        pass


def available_providers() -> Dict[str, Type[PrimitiveProvider]]:
    """Map provider names to their implementation classes."""
    from .sodium import SodiumProvider
    from .openssl import OpenSSLProvider
    
    return {
        SodiumProvider.name: SodiumProvider,
        OpenSSLProvider.name: OpenSSLProvider,
    }


def get_provider(name: str = "sodium") -> PrimitiveProvider:
    """
    Instantiate a provider by name.
    
    Raises:
        ValueError: If no provider has that name
    """
    providers = available_providers()
    try:
        return providers[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown provider: {name} (choose from {', '.join(sorted(providers))})"
        )
