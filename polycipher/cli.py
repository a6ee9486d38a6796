"""
Command line
============
    polycipher -f message.txt -e -k rust            encrypt  -> out.txt
    polycipher -f out.txt -d -k rust -o plain.txt   decrypt
    polycipher -f out.txt                           crack, print the key

A numeric key (-k 3) selects the single-shift cipher, letters select the
keyword cipher. With neither -e nor -d the input is treated as ciphertext
and its key is recovered.
"""

import argparse
import logging
import sys

from . import __version__
from .analysis import crack
from .backends import get_backend
from .config import BACKENDS, Settings
from .errors import PolycipherError
from .keys import parse_key

logger = logging.getLogger(__name__)


class InputFileError(PolycipherError, OSError):
    """Input file missing or unreadable."""


class OutputFileError(PolycipherError, OSError):
    """Output file could not be written."""


def read_input(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputFileError(f"Cannot read input file {path!r}: {exc}") from exc


def write_output(path: str, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise OutputFileError(f"Cannot write output file {path!r}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="polycipher",
        description="Repeating-key substitution cipher: encrypt, decrypt, or crack a file.",
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("-e", "--encrypt", action="store_true", help="Encrypt mode.")
    mode.add_argument("-d", "--decrypt", action="store_true", help="Decrypt mode.")
    ap.add_argument("-f", "--file", required=True, help="Input text file.")
    ap.add_argument("-o", "--outfile", help="Output file (default: out.txt).")
    ap.add_argument("-k", "--key", help="Shift 0-25 or keyword (encrypt/decrypt).")
    ap.add_argument("--backend", choices=BACKENDS, help="Cipher implementation (default: engine).")
    ap.add_argument("--max-key-length", type=int, help="Longest key length to try when cracking.")
    ap.add_argument("--digest", help="SHA-256 hex of the expected plaintext, to confirm a cracked key.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log analysis details.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def run(args, settings: Settings) -> int:
    text = read_input(args.file)

    if args.encrypt or args.decrypt:
        key = parse_key(args.key)
        backend = get_backend(args.backend, settings)
        if args.encrypt:
            print("Encrypting...")
            out = backend.encode(text, key)
        else:
            print("Decrypting...")
            out = backend.decode(text, key)
        outfile = args.outfile or settings.default_output
        write_output(outfile, out)
        logger.info(f"Wrote {len(out)} characters to {outfile}")
        return 0

    print("Cracking...")
    result = crack(text, max_length=args.max_key_length, expected_digest=args.digest,
                   settings=settings)
    print(f"Cracked key: {result.key} (length {result.key_length})")
    if args.digest:
        print(f"Digest match: {'yes' if result.verified else 'no'}")
    return 0


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if (args.encrypt or args.decrypt) and not args.key:
        ap.error("-k/--key is required with --encrypt/--decrypt")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=" %(levelname)s %(name)s: %(message)s")
    try:
        settings = Settings.from_env()
        return run(args, settings)
    except (PolycipherError, ValueError) as exc:
        print(f"polycipher: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
