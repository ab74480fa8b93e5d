"""
sodix Key Management

Handles:
- Generation of the signing and encryption key pairs
- Hex key file storage and loading
- Resolution of hex literals versus key files

Key files (one lowercase hex string plus newline each):
- sign_public.key: Ed25519 public key (32 bytes)
- sign_secret.key: Ed25519 secret key (64 bytes, seed || public key)
- enc_public.key: Curve25519 public key (32 bytes)
- enc_secret.key: Curve25519 secret key (32 bytes)

The four files form one set. If any of them is missing the whole set is
regenerated, overwriting the files that survived. Back up a key before
deleting its siblings if it must be kept.

SECURITY NOTES:
- Secret keys are never logged
- Secret key files are written with mode 0600
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..errors import InvalidEncoding, IoError, KeyFileError
from . import hexcodec
from .primitives import (
    SIGN_PUBLIC_KEY_SIZE,
    SIGN_SECRET_KEY_SIZE,
    SIGN_SEED_SIZE,
    BOX_PUBLIC_KEY_SIZE,
    BOX_SECRET_KEY_SIZE,
)
from .provider import PrimitiveProvider


logger = logging.getLogger(__name__)

SIGN_PUBLIC_KEY_FILE = "sign_public.key"
SIGN_SECRET_KEY_FILE = "sign_secret.key"
ENC_PUBLIC_KEY_FILE = "enc_public.key"
ENC_SECRET_KEY_FILE = "enc_secret.key"

# Listing order: sign public, sign secret, enc public, enc secret
KEY_FILES = (
    SIGN_PUBLIC_KEY_FILE,
    SIGN_SECRET_KEY_FILE,
    ENC_PUBLIC_KEY_FILE,
    ENC_SECRET_KEY_FILE,
)

SECRET_KEY_FILES = (SIGN_SECRET_KEY_FILE, ENC_SECRET_KEY_FILE)

# Accepted decoded sizes per key file
KEY_SIZES: Dict[str, Tuple[int, ...]] = {
    SIGN_PUBLIC_KEY_FILE: (SIGN_PUBLIC_KEY_SIZE,),
    SIGN_SECRET_KEY_FILE: (SIGN_SECRET_KEY_SIZE, SIGN_SEED_SIZE),
    ENC_PUBLIC_KEY_FILE: (BOX_PUBLIC_KEY_SIZE,),
    ENC_SECRET_KEY_FILE: (BOX_SECRET_KEY_SIZE,),
}

KEY_LABELS = {
    SIGN_PUBLIC_KEY_FILE: "Signing Public Key",
    SIGN_SECRET_KEY_FILE: "Signing Secret Key",
    ENC_PUBLIC_KEY_FILE: "Encryption Public Key",
    ENC_SECRET_KEY_FILE: "Encryption Secret Key",
}


@dataclass(frozen=True)
class SigningKeyPair:
    """Ed25519 key pair used only for signatures."""
    public_key: bytes
    secret_key: bytes


@dataclass(frozen=True)
class EncryptionKeyPair:
    """Curve25519 key pair used only for boxes."""
    public_key: bytes
    secret_key: bytes


@dataclass(frozen=True)
class KeySet:
    """The four keys stored in one key directory."""
    signing: SigningKeyPair
    encryption: EncryptionKeyPair

    def by_file(self) -> Dict[str, bytes]:
        """Map each key file name to its key bytes."""
        return {
            SIGN_PUBLIC_KEY_FILE: self.signing.public_key,
            SIGN_SECRET_KEY_FILE: self.signing.secret_key,
            ENC_PUBLIC_KEY_FILE: self.encryption.public_key,
            ENC_SECRET_KEY_FILE: self.encryption.secret_key,
        }


def _decode_key(text: str, filename: str, what: str) -> bytes:
    """Decode a hex key and check it has one of the sizes allowed for its slot."""
    data = hexcodec.decode(text, what=what)
    sizes = KEY_SIZES[filename]
    if len(data) not in sizes:
        expected = " or ".join(str(s) for s in sizes)
        raise InvalidEncoding(f"Invalid {what}: expected {expected} bytes, got {len(data)}")
    return data


class KeyStore:
    """
    Key files of one directory.

    The directory is always given explicitly; defaulting to the current
    working directory is the command line's job.

    Usage:
        store = KeyStore(Path("alice_keys"), get_provider("sodium"))
        store.ensure_keys()
        keys = store.load()
    """

    def __init__(
        self,
        key_dir: Path,
        provider: PrimitiveProvider,
        auto_generate: bool = True,
    ):
        """
        Args:
            key_dir: Directory holding the four key files
            provider: Primitive provider used for key generation
            auto_generate: Generate the key set on demand when files are missing
        """
        self.key_dir = Path(key_dir)
        self.provider = provider
        self.auto_generate = auto_generate

    def path(self, filename: str) -> Path:
        """Full path of one key file."""
        return self.key_dir / filename

    def missing_files(self) -> List[Path]:
        """Key files that do not exist yet."""
        return [self.path(name) for name in KEY_FILES if not self.path(name).exists()]

    def generate(self) -> KeySet:
        """
        Generate a fresh key set and write all four files.

        Existing key files are overwritten.

        Returns:
            KeySet: The generated keys

        Raises:
            IoError: If the directory or a file cannot be written
        """
        sign_public, sign_secret = self.provider.generate_signing_keypair()
        enc_public, enc_secret = self.provider.generate_encryption_keypair()
        keys = KeySet(
            signing=SigningKeyPair(public_key=sign_public, secret_key=sign_secret),
            encryption=EncryptionKeyPair(public_key=enc_public, secret_key=enc_secret),
        )

        try:
            self.key_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoError(f"Failed to create directory {self.key_dir}: {e}", self.key_dir)

        for filename, key in keys.by_file().items():
            self._write_key_file(filename, key)

        logger.info(f"Generated keys in {self.key_dir} ({self.provider.name})")
        return keys

    def _write_key_file(self, filename: str, key: bytes) -> None:
        """Write one key file; secret keys get owner-only permissions."""
        path = self.path(filename)
        try:
            path.write_text(hexcodec.encode(key) + "\n")
            if filename in SECRET_KEY_FILES:
                os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)  # 0600
        except OSError as e:
            raise IoError(f"Failed to write {KEY_LABELS[filename].lower()} to {path}: {e}", path)
        logger.debug(f"Wrote {path}")

    def ensure_keys(self) -> bool:
        """
        Make sure all four key files exist.

        Any missing file regenerates the entire set. Complete sets are
        left untouched.

        Returns:
            bool: True if keys were generated
        """
        missing = self.missing_files()
        if not missing:
            return False

        logger.info(
            f"Missing key files ({', '.join(p.name for p in missing)}), "
            f"generating new key pairs in {self.key_dir}"
        )
        self.generate()
        return True

    def read_key(self, filename: str) -> bytes:
        """
        Read and decode a single key file.

        Raises:
            KeyFileError: If the file is missing, unreadable or malformed
        """
        path = self.path(filename)
        if not path.exists():
            raise KeyFileError(f"Key file not found: {path}", path)

        try:
            text = path.read_text().strip()
        except (OSError, UnicodeDecodeError) as e:
            raise KeyFileError(f"Failed to read key from {path}: {e}", path)

        try:
            return _decode_key(text, filename, what=f"key in {path}")
        except InvalidEncoding as e:
            raise KeyFileError(e.message, path)

    def load(self) -> KeySet:
        """
        Load all four keys.

        Raises:
            KeyFileError: Naming the first missing, unreadable or malformed file
        """
        return KeySet(
            signing=SigningKeyPair(
                public_key=self.read_key(SIGN_PUBLIC_KEY_FILE),
                secret_key=self.read_key(SIGN_SECRET_KEY_FILE),
            ),
            encryption=EncryptionKeyPair(
                public_key=self.read_key(ENC_PUBLIC_KEY_FILE),
                secret_key=self.read_key(ENC_SECRET_KEY_FILE),
            ),
        )

    def listing(self, public_only: bool = False, labels: bool = False) -> List[str]:
        """
        Hex key lines for display, generating keys first if needed.

        Args:
            public_only: Only list the two public keys
            labels: Prefix each line with the key name and file

        Returns:
            List[str]: One line per key in sign-public, sign-secret,
            enc-public, enc-secret order
        """
        self.ensure_keys()
        keys = self.load().by_file()

        lines = []
        for filename in KEY_FILES:
            if public_only and filename in SECRET_KEY_FILES:
                continue
            key_hex = hexcodec.encode(keys[filename])
            if labels:
                lines.append(f"{KEY_LABELS[filename]} ({filename}): {key_hex}")
            else:
                lines.append(key_hex)
        return lines

    # === Literal / file resolution ===

    def resolve(self, filename: str, literal: Optional[str] = None) -> bytes:
        """
        Resolve one key from a hex literal or its key file.

        A literal always wins and the key files are not touched. Otherwise
        the key set is generated on demand (if enabled) and the file read.

        Raises:
            InvalidEncoding: If the literal is malformed or the wrong size
            KeyFileError: If the file cannot be used
        """
        if literal is not None:
            return _decode_key(literal.strip(), filename, what=KEY_LABELS[filename].lower())

        if self.auto_generate:
            self.ensure_keys()
        return self.read_key(filename)

    def signing_secret_key(self, literal: Optional[str] = None) -> bytes:
        return self.resolve(SIGN_SECRET_KEY_FILE, literal)

    def signing_public_key(self, literal: Optional[str] = None) -> bytes:
        return self.resolve(SIGN_PUBLIC_KEY_FILE, literal)

    def encryption_public_key(self, literal: Optional[str] = None) -> bytes:
        return self.resolve(ENC_PUBLIC_KEY_FILE, literal)

    def encryption_secret_key(self, literal: Optional[str] = None) -> bytes:
        return self.resolve(ENC_SECRET_KEY_FILE, literal)
