"""
sodix - libsodium compatible command-line crypto tool

Signs, verifies, encrypts and decrypts with hex-encoded keys so that
shell scripts and other languages can interoperate with it.

This package contains:
- crypto/    : Hex codec, primitive providers, key store, signer, cipher box
- inputs     : Message/file input resolution
- config     : TOML configuration
- main       : Command-line entry point
"""

__version__ = "0.2.0"
__author__ = "sodix contributors"
