"""
polycipher -- repeating-key substitution ciphers and how to break them
=======================================================================
Vigenère-family encryption plus ciphertext-only key recovery, for CTF
exercises and classroom cryptanalysis.

Layers:
    alphabet     26 letters, English frequencies, character classes
    keys         NumericKey (one shift) | TextualKey (keyword)
    engine       encrypt / decrypt under a repeating key
    native       the same cipher from a prebuilt C library (ctypes)
    backends     engine | native behind one encode/decode interface
    analysis     IoC key-length estimate, chi-squared key recovery, crack()

Not a security product: breaking this cipher is the whole point.
"""

__version__ = "1.0.0"

from .alphabet import ALPHABET, ENGLISH_FREQUENCIES, canonical_frequency, letter_index, shift
from .keys import NumericKey, TextualKey, parse_key
from .engine import Direction, VigenereCipher, decrypt, encrypt, transform
from .backends import EngineBackend, NativeBackend, get_backend
from .config import Settings
from .errors import (EstimationAmbiguous, InvalidKey, NativeLibraryError,
                     PolycipherError, UnsupportedCharacter)
from .analysis import CrackResult, crack, estimate_key_length, recover_key

__all__ = [
    "ALPHABET",
    "ENGLISH_FREQUENCIES",
    "canonical_frequency",
    "letter_index",
    "shift",
    "NumericKey",
    "TextualKey",
    "parse_key",
    "Direction",
    "VigenereCipher",
    "decrypt",
    "encrypt",
    "transform",
    "EngineBackend",
    "NativeBackend",
    "get_backend",
    "Settings",
    "EstimationAmbiguous",
    "InvalidKey",
    "NativeLibraryError",
    "PolycipherError",
    "UnsupportedCharacter",
    "CrackResult",
    "crack",
    "estimate_key_length",
    "recover_key",
]
