"""
Cipher Engine: Repeating-Key Polyalphabetic Substitution
=========================================================
Classic Vigenère: every letter is shifted by the key letter at the
current key position, and the key repeats with its own length.

    plaintext   t h e q u i c k
    key         r u s t r u s t
    ciphertext  k b w j l c u d

Letters are case-folded to lowercase and the folded form is emitted
(case does not round-trip). Non-letter ASCII passes through unchanged
and does not advance the key position, so "the quick" and "thequick"
encrypt to the same letters.

Non-ASCII characters are outside the cipher's alphabet. What happens to
them is the `unsupported` policy:

    keep    pass through unchanged, no key advance (default)
    drop    omit from the output
    strict  raise UnsupportedCharacter
"""

import enum

from .alphabet import ALPHABET, ALPHABET_SIZE, letter_index
from .errors import UnsupportedCharacter
from .keys import Key, parse_key

UNSUPPORTED_POLICIES = ("keep", "drop", "strict")


class Direction(enum.Enum):
    ENCRYPT = 1
    DECRYPT = -1


def transform(text: str, key, direction: Direction = Direction.ENCRYPT,
              unsupported: str = "keep") -> str:
    """
    Encrypt or decrypt `text` under `key`.

    `key` may be a NumericKey, a TextualKey, or anything parse_key()
    accepts. An empty key raises InvalidKey.
    """
    if unsupported not in UNSUPPORTED_POLICIES:
        raise ValueError(f"unsupported must be one of {UNSUPPORTED_POLICIES}, got {unsupported!r}")
    key = parse_key(key)
    shifts = key.shifts
    period = len(shifts)
    sign = direction.value

    result = []
    k_idx = 0
    for pos, ch in enumerate(text):
        idx = letter_index(ch)
        if idx is not None:
            result.append(ALPHABET[(idx + sign * shifts[k_idx % period]) % ALPHABET_SIZE])
            k_idx += 1
        elif ch.isascii():
            result.append(ch)
        elif unsupported == "keep":
            result.append(ch)
        elif unsupported == "strict":
            raise UnsupportedCharacter(ch, pos)
    return "".join(result)


def encrypt(plaintext: str, key, unsupported: str = "keep") -> str:
    return transform(plaintext, key, Direction.ENCRYPT, unsupported)


def decrypt(ciphertext: str, key, unsupported: str = "keep") -> str:
    return transform(ciphertext, key, Direction.DECRYPT, unsupported)


class VigenereCipher:
    """Repeating-key cipher bound to one key."""

    def __init__(self, key, unsupported: str = "keep"):
        self._key: Key = parse_key(key)
        if unsupported not in UNSUPPORTED_POLICIES:
            raise ValueError(f"unsupported must be one of {UNSUPPORTED_POLICIES}, got {unsupported!r}")
        self._unsupported = unsupported

    @property
    def key(self) -> Key:
        return self._key

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext string. Non-alpha characters pass through."""
        return transform(plaintext, self._key, Direction.ENCRYPT, self._unsupported)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ciphertext string."""
        return transform(ciphertext, self._key, Direction.DECRYPT, self._unsupported)

    def __repr__(self):
        return f"VigenereCipher({self._key!r})"
