"""
Alphabet Model
==============
The 26-letter Latin alphabet, its canonical English letter frequencies,
and the character classification every other module relies on.

Only ASCII letters count as letters. Everything else (digits, spaces,
punctuation, accented letters) is "pass-through" as far as the cipher
is concerned.

The frequency table is built once at import, normalised so the weights
sum to exactly 1.0, and exposed read-only.
"""

from types import MappingProxyType
from typing import Optional

from .errors import UnsupportedCharacter

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_SIZE = len(ALPHABET)

# Relative letter frequencies of English text, a..z (percent).
_ENGLISH_PERCENT = (
    8.167, 1.492, 2.782, 4.253, 12.702, 2.228, 2.015, 6.094, 6.966,
    0.153, 0.772, 4.025, 2.406, 6.749, 7.507, 1.929, 0.095, 5.987,
    6.327, 9.056, 2.758, 0.978, 2.360, 0.150, 1.974, 0.074,
)

_total = sum(_ENGLISH_PERCENT)
ENGLISH_FREQUENCIES = MappingProxyType(
    {letter: pct / _total for letter, pct in zip(ALPHABET, _ENGLISH_PERCENT)}
)
del _total

# Expected letter weights as a tuple indexed by letter_index().
ENGLISH_WEIGHTS = tuple(ENGLISH_FREQUENCIES[c] for c in ALPHABET)


def letter_index(c: str) -> Optional[int]:
    """Offset of `c` from 'a' (case-insensitive), or None for non-letters."""
    if len(c) != 1 or not c.isascii() or not c.isalpha():
        return None
    return ord(c.lower()) - ord("a")


def is_letter(c: str) -> bool:
    return letter_index(c) is not None


def shift(c: str, amount: int, forward: bool = True) -> str:
    """
    Shift letter `c` by `amount` positions, wrapping modulo 26.

    The result is always lowercase. Negative results of a backward shift
    wrap back into a..z.
    """
    idx = letter_index(c)
    if idx is None:
        raise UnsupportedCharacter(c)
    step = amount if forward else -amount
    return ALPHABET[(idx + step) % ALPHABET_SIZE]


def canonical_frequency(letter: str) -> float:
    idx = letter_index(letter)
    if idx is None:
        raise UnsupportedCharacter(letter)
    return ENGLISH_WEIGHTS[idx]


def fold_case(text: str) -> str:
    """Lowercase ASCII letters, leave every other character untouched."""
    return "".join(c.lower() if is_letter(c) else c for c in text)


def letters_only(text: str) -> str:
    """The lowercase letter stream of `text`, everything else stripped."""
    return "".join(c.lower() for c in text if is_letter(c))
