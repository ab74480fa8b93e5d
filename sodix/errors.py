"""
sodix error kinds.

Every error carries a human-readable message and the process exit code
the command-line front end uses when it aborts on it.
"""

from pathlib import Path
from typing import Optional


class ExitCode:
    OK = 0
    INVALID_SIGNATURE = 1
    CONFIG_ERROR = 1
    USAGE_ERROR = 2
    KEY_FILE_ERROR = 3
    INVALID_ENCODING = 4
    AUTHENTICATION_FAILED = 5
    IO_ERROR = 6


class SodixError(Exception):
    """Base class for errors reported at the command boundary."""

    exit_code = ExitCode.USAGE_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(SodixError):
    """Conflicting or missing inputs (e.g. both a literal and a file)."""

    exit_code = ExitCode.USAGE_ERROR


class KeyFileError(SodixError):
    """Missing, unreadable or malformed key file."""

    exit_code = ExitCode.KEY_FILE_ERROR

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class InvalidEncoding(SodixError):
    """Malformed hex or decoded material of the wrong length."""

    exit_code = ExitCode.INVALID_ENCODING


class AuthenticationFailed(SodixError):
    """
    Ciphertext failed authentication.

    Raised for tampered data and for wrong keys alike; the two cases
    are deliberately not told apart.
    """

    exit_code = ExitCode.AUTHENTICATION_FAILED

    def __init__(self, message: str = "Decryption failed: authentication tag mismatch (tampered data or wrong keys)"):
        super().__init__(message)


class IoError(SodixError):
    """Filesystem failure reading or writing a message file."""

    exit_code = ExitCode.IO_ERROR

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
