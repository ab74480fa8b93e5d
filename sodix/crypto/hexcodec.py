"""
Hex framing for keys, signatures and ciphertext blobs.

Encoding is always lowercase with no separators. Decoding is strict:
whitespace, odd lengths and non-hex characters are rejected.
"""

import binascii
from typing import Optional

from ..errors import InvalidEncoding


def encode(data: bytes) -> str:
    """Encode raw bytes as a lowercase hex string."""
    return binascii.hexlify(data).decode("ascii")


def decode(text: str, expected_length: Optional[int] = None, what: str = "value") -> bytes:
    """
    Decode a hex string to raw bytes.
    
    Args:
        text: Hex string (either case, no separators)
        expected_length: If given, the exact decoded length in bytes
        what: Name of the decoded item, used in error messages
        
    Returns:
        bytes: Decoded bytes
        
    Raises:
        InvalidEncoding: On odd length, non-hex characters or a length mismatch
    """
    if len(text) % 2:
        raise InvalidEncoding(f"Invalid hex {what}: odd number of digits ({len(text)})")
    
    try:
        data = binascii.unhexlify(text)
    except (binascii.Error, ValueError):
        raise InvalidEncoding(f"Invalid hex {what}: contains non-hex characters")
    
    if expected_length is not None and len(data) != expected_length:
        raise InvalidEncoding(
            f"Invalid {what}: expected {expected_length} bytes, got {len(data)}"
        )
    
    return data
