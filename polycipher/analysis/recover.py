"""
Key-Content Recoverer
=====================
Once the key length L is fixed, residue class i is a Caesar cipher under
key letter i. Each class is solved on its own: try all 26 shifts and keep
the one whose decoding is closest (chi-squared) to English.

An empty class (L too large for the ciphertext) has nothing to fit; its
shift defaults to 0 ('a') and the position is reported as low-confidence.
"""

from dataclasses import dataclass
from typing import Tuple

from ..alphabet import ALPHABET, ALPHABET_SIZE, letters_only
from .frequency import FrequencyProfile, chi_squared, residue_classes


@dataclass(frozen=True)
class ShiftFit:
    shift: int
    score: float


@dataclass(frozen=True)
class RecoveredKey:
    key: str
    shifts: Tuple[int, ...]
    scores: Tuple[float, ...]
    low_confidence: Tuple[int, ...] = ()

    @property
    def length(self) -> int:
        return len(self.key)


def best_shift(letters: str) -> ShiftFit:
    """Caesar shift whose decoding of `letters` fits English best (ties: smallest)."""
    profile = FrequencyProfile.from_letters(letters)
    fits = [ShiftFit(s, chi_squared(profile.shifted(s))) for s in range(ALPHABET_SIZE)]
    return min(fits, key=lambda fit: (fit.score, fit.shift))


def recover_key(ciphertext: str, length: int) -> RecoveredKey:
    if length < 1:
        raise ValueError("length must be at least 1.")
    letters = letters_only(ciphertext)
    shifts, scores, low = [], [], []
    for position, column in enumerate(residue_classes(letters, length)):
        if not column:
            shifts.append(0)
            scores.append(0.0)
            low.append(position)
            continue
        fit = best_shift(column)
        shifts.append(fit.shift)
        scores.append(fit.score)
    return RecoveredKey(
        key="".join(ALPHABET[s] for s in shifts),
        shifts=tuple(shifts),
        scores=tuple(scores),
        low_confidence=tuple(low),
    )


def minimal_period(key: str) -> str:
    """Shortest prefix that repeats to `key` ("rustrust" -> "rust")."""
    n = len(key)
    for p in range(1, n + 1):
        if n % p == 0 and key[:p] * (n // p) == key:
            return key[:p]
    return key
