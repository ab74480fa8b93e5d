#!/usr/bin/env python3
"""
sodix - libsodium compatible cli tool

Usage:
    sodix generate [DIR]              - Generate new key pairs
    sodix print [DIR]                 - Print keys (generating them if missing)
    sodix sign MESSAGE                - Sign a message or file
    sodix check MESSAGE SIGNATURE     - Verify a signature
    sodix encrypt MESSAGE             - Encrypt a message or file
    sodix decrypt BLOB                - Decrypt a message or file
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Config, DEFAULT_CONFIG_PATH
from .crypto.provider import PrimitiveProvider, available_providers, get_provider
from .crypto.keys import KeyStore
from .crypto.signer import Signer
from .crypto.cipherbox import CipherBox
from .errors import ExitCode, SodixError
from . import inputs


logger = logging.getLogger("sodix")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config: Config, verbose: bool = False) -> None:
    """Configure logging to stderr (or the configured log file)."""
    level = logging.DEBUG if verbose else config.log_level_value
    if config.log_file:
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=str(config.log_file))
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


class Sodix:
    """sodix CLI application."""

    def __init__(
        self,
        provider: PrimitiveProvider,
        default_key_dir: Path,
        auto_generate: bool = True,
        verbose: bool = False,
    ):
        """
        Args:
            provider: Primitive provider for all operations
            default_key_dir: Key directory used when a command names none
            auto_generate: Generate missing key sets on demand
            verbose: Label key listings
        """
        self.provider = provider
        self.default_key_dir = Path(default_key_dir)
        self.auto_generate = auto_generate
        self.verbose = verbose
        self.signer = Signer(provider)
        self.cipherbox = CipherBox(provider)

    def key_store(self, key_dir: Optional[Path] = None) -> KeyStore:
        return KeyStore(
            key_dir if key_dir is not None else self.default_key_dir,
            self.provider,
            auto_generate=self.auto_generate,
        )

    def generate(self, key_dir: Optional[Path] = None) -> int:
        """Generate a fresh key set, overwriting any existing one."""
        store = self.key_store(key_dir)
        store.generate()
        print("Keys generated successfully")
        return ExitCode.OK

    def print_keys(self, key_dir: Optional[Path] = None, public_only: bool = False) -> int:
        """Print the keys of a directory, one hex string per line."""
        store = self.key_store(key_dir)
        for line in store.listing(public_only=public_only, labels=self.verbose):
            print(line)
        return ExitCode.OK

    def sign(
        self,
        message: Optional[str],
        file: Optional[Path] = None,
        key: Optional[str] = None,
        key_dir: Optional[Path] = None,
    ) -> int:
        """Sign a message or file and print the hex signature."""
        data = inputs.resolve_message(message, file)
        secret_key = self.key_store(key_dir).signing_secret_key(key)
        print(self.signer.sign_hex(data, secret_key))
        return ExitCode.OK

    def check(
        self,
        message: Optional[str],
        signature: str,
        file: Optional[Path] = None,
        key: Optional[str] = None,
        key_dir: Optional[Path] = None,
    ) -> int:
        """Verify a hex signature; prints valid/invalid."""
        data = inputs.resolve_message(message, file)
        public_key = self.key_store(key_dir).signing_public_key(key)

        if self.signer.verify_hex(data, signature, public_key):
            print("valid")
            return ExitCode.OK

        print("invalid")
        return ExitCode.INVALID_SIGNATURE

    def encrypt(
        self,
        message: Optional[str],
        file: Optional[Path] = None,
        pubkey: Optional[str] = None,
        seckey: Optional[str] = None,
        key_dir: Optional[Path] = None,
    ) -> int:
        """
        Encrypt a message or file.

        pubkey is the recipient's public key, seckey the sender's own
        secret key. Without literals both come from the key directory.
        """
        data = inputs.resolve_message(message, file)
        store = self.key_store(key_dir)
        recipient_public = store.encryption_public_key(pubkey)
        sender_secret = store.encryption_secret_key(seckey)

        blob = self.cipherbox.encrypt(
            data,
            recipient_public_key=recipient_public,
            sender_secret_key=sender_secret,
        )

        if file is not None:
            output_file = inputs.encrypted_path(file)
            inputs.write_file(output_file, blob.encode("ascii"))
            logger.info(f"Encrypted file saved to: {output_file}")
        else:
            print(blob)
        return ExitCode.OK

    def decrypt(
        self,
        blob: Optional[str],
        file: Optional[Path] = None,
        pubkey: Optional[str] = None,
        seckey: Optional[str] = None,
        key_dir: Optional[Path] = None,
    ) -> int:
        """
        Decrypt a hex blob or an encrypted file.

        pubkey is the sender's public key, seckey the recipient's own
        secret key.
        """
        blob_hex, output_file = inputs.resolve_blob(blob, file)
        store = self.key_store(key_dir)
        sender_public = store.encryption_public_key(pubkey)
        recipient_secret = store.encryption_secret_key(seckey)

        plaintext = self.cipherbox.decrypt(
            blob_hex,
            sender_public_key=sender_public,
            recipient_secret_key=recipient_secret,
        )

        if output_file is not None:
            inputs.write_file(output_file, plaintext)
            logger.info(f"Decrypted file saved to: {output_file}")
        else:
            sys.stdout.flush()
            sys.stdout.buffer.write(plaintext)
            sys.stdout.buffer.flush()
        return ExitCode.OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sodix",
        description="sodix - libsodium compatible cli tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  generate (g)   Generate new keypairs
  print (p)      Print keys
  sign (s)       Sign a message or file
  check (c)      Verify a signature
  encrypt (e)    Encrypt a message or file
  decrypt (d)    Decrypt a message or file

Examples:
  sodix g alice_keys/
  sodix p alice_keys/ --public-only
  sodix s "hello" -d alice_keys/
  sodix c "hello" <signature> -k <sign public key>
  sodix e "Hello, Bob!" --pubkey <bob enc public> --seckey <alice enc secret>
  sodix d <blob> --pubkey <alice enc public> --seckey <bob enc secret>
  sodix e -f report.pdf        (writes report.pdf.x)
  sodix d -f report.pdf.x      (writes report.pdf)
""",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output for debugging",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Configuration file path",
    )
    parser.add_argument(
        "--provider",
        choices=sorted(available_providers()),
        help="Cryptographic provider (default: from config, else sodium)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sodix {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # generate command
    generate_parser = subparsers.add_parser("generate", aliases=["g"], help="Generate new keypairs")
    generate_parser.add_argument("dir", nargs="?", type=Path, help="Key directory")

    # print command
    print_parser = subparsers.add_parser("print", aliases=["p"], help="Print keys")
    print_parser.add_argument("dir", nargs="?", type=Path, help="Key directory")
    print_parser.add_argument(
        "--public-only",
        action="store_true",
        help="Only print the two public keys",
    )

    # sign command
    sign_parser = subparsers.add_parser("sign", aliases=["s"], help="Sign a message or file")
    sign_parser.add_argument("message", nargs="?", help="Message to sign")
    sign_parser.add_argument("-k", "--key", metavar="HEX", help="Signing secret key in hex")
    _add_input_options(sign_parser)

    # check command
    check_parser = subparsers.add_parser("check", aliases=["c"], help="Verify a signature")
    check_parser.add_argument("message", nargs="?", help="Signed message")
    check_parser.add_argument("signature", help="Signature in hex")
    check_parser.add_argument("-k", "--key", metavar="HEX", help="Signing public key in hex")
    _add_input_options(check_parser)

    # encrypt command
    encrypt_parser = subparsers.add_parser("encrypt", aliases=["e"], help="Encrypt a message or file")
    encrypt_parser.add_argument("message", nargs="?", help="Message to encrypt")
    encrypt_parser.add_argument("-k", "--pubkey", metavar="HEX", help="Receiver's public key in hex")
    encrypt_parser.add_argument("-s", "--seckey", metavar="HEX", help="Sender's secret key in hex")
    _add_input_options(encrypt_parser)

    # decrypt command
    decrypt_parser = subparsers.add_parser("decrypt", aliases=["d"], help="Decrypt a message or file")
    decrypt_parser.add_argument("blob", nargs="?", help="Hex ciphertext to decrypt")
    decrypt_parser.add_argument("-k", "--pubkey", metavar="HEX", help="Sender's public key in hex")
    decrypt_parser.add_argument("-s", "--seckey", metavar="HEX", help="Receiver's secret key in hex")
    _add_input_options(decrypt_parser)

    return parser


def _add_input_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("-f", "--file", type=Path, metavar="PATH", help="Read the input from a file")
    subparser.add_argument("-d", "--dir", type=Path, metavar="DIR", help="Key directory")


# Subcommand aliases -> canonical names
COMMAND_ALIASES = {
    "g": "generate",
    "p": "print",
    "s": "sign",
    "c": "check",
    "e": "encrypt",
    "d": "decrypt",
}


def dispatch(cli: Sodix, args: argparse.Namespace) -> int:
    """Run the selected command."""
    command = COMMAND_ALIASES.get(args.command, args.command)

    if command == "generate":
        return cli.generate(args.dir)
    elif command == "print":
        return cli.print_keys(args.dir, public_only=args.public_only)
    elif command == "sign":
        return cli.sign(args.message, file=args.file, key=args.key, key_dir=args.dir)
    elif command == "check":
        return cli.check(
            args.message, args.signature,
            file=args.file, key=args.key, key_dir=args.dir,
        )
    elif command == "encrypt":
        return cli.encrypt(
            args.message,
            file=args.file, pubkey=args.pubkey, seckey=args.seckey, key_dir=args.dir,
        )
    elif command == "decrypt":
        return cli.decrypt(
            args.blob,
            file=args.file, pubkey=args.pubkey, seckey=args.seckey, key_dir=args.dir,
        )
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.USAGE_ERROR

    # Load configuration
    try:
        config = Config.load(args.config)
        if args.provider:
            config.provider = args.provider
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    try:
        setup_logging(config, verbose=args.verbose)
    except OSError as e:
        print(f"Configuration error: cannot open log file: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    logger.debug(f"Using provider {config.provider}, config {config.config_path}")

    cli = Sodix(
        provider=get_provider(config.provider),
        default_key_dir=config.key_dir or Path.cwd(),
        auto_generate=config.auto_generate,
        verbose=args.verbose,
    )

    try:
        return dispatch(cli, args)
    except SodixError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
