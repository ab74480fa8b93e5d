"""
Message and file input resolution.

A message is given either as a literal command-line string or as a file
path, never both. Encrypting file X writes its blob to the sibling file
X.x; decrypting X or X.x reads X.x and writes the plaintext back to X.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from .errors import IoError, UsageError


logger = logging.getLogger(__name__)

ENCRYPTED_SUFFIX = ".x"


def require_one(literal: Optional[str], path: Optional[Path], what: str = "message") -> None:
    """
    Check that exactly one of a literal and a file path was given.
    
    Raises:
        UsageError: If both or neither were given
    """
    if literal is not None and path is not None:
        raise UsageError(f"Give the {what} either as an argument or with --file, not both")
    if literal is None and path is None:
        raise UsageError(f"No {what} given (pass it as an argument or with --file)")


def read_file(path: Path) -> bytes:
    """Read a whole file, mapping failures to IoError."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise IoError(f"Failed to read input file {path}: {e}", Path(path))
    logger.debug(f"Read {len(data)} bytes from {path}")
    return data


def write_file(path: Path, data: bytes) -> None:
    """Write a whole file, mapping failures to IoError."""
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise IoError(f"Failed to write file {path}: {e}", Path(path))
    logger.info(f"Wrote {len(data)} bytes to {path}")


def resolve_message(literal: Optional[str], path: Optional[Path]) -> bytes:
    """
    Resolve message bytes from a literal string or a file.
    
    Literal strings are encoded as UTF-8; files are read as raw bytes.
    
    Raises:
        UsageError: If not exactly one source was given
        IoError: If the file cannot be read
    """
    require_one(literal, path)
    if path is not None:
        return read_file(path)
    return literal.encode("utf-8")


def encrypted_path(path: Path) -> Path:
    """Sibling file holding the blob for an encrypted file (X -> X.x)."""
    path = Path(path)
    return path.with_name(path.name + ENCRYPTED_SUFFIX)


def decryption_paths(path: Path) -> Tuple[Path, Path]:
    """
    Work out the blob file and plaintext file for decrypting a file.
    
    Both "X" and "X.x" refer to the blob in "X.x"; the plaintext goes
    to "X".
    
    Returns:
        (encrypted_file, output_file)
    """
    path = Path(path)
    if path.name.endswith(ENCRYPTED_SUFFIX) and len(path.name) > len(ENCRYPTED_SUFFIX):
        return path, path.with_name(path.name[:-len(ENCRYPTED_SUFFIX)])
    return encrypted_path(path), path


def resolve_blob(literal: Optional[str], path: Optional[Path]) -> Tuple[str, Optional[Path]]:
    """
    Resolve a hex blob from a literal or an encrypted file.
    
    Returns:
        (blob_hex, output_path): output_path is None for literal input
        
    Raises:
        UsageError: If not exactly one source was given
        IoError: If the encrypted file cannot be read
    """
    require_one(literal, path, what="ciphertext")
    if path is None:
        return literal, None
    
    encrypted_file, output_file = decryption_paths(path)
    blob = read_file(encrypted_file).decode("ascii", errors="replace")
    return blob.strip(), output_file
