"""
Frequency analysis
==================
Letter statistics shared by the key-length estimator, the key recoverer
and the cracking driver.

    index of coincidence   P(two letters drawn from the text match)
                           ~0.0655 for English, 1/26 ~ 0.0385 for noise
    chi-squared            distance between observed counts and the
                           counts English would give; lower is closer
    word coverage          share of the letter stream covered by common
                           English words, a language check that survives
                           texts whose letter counts are not English-like

Profiles are built once from a letter stream and never mutated.
"""

from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple, Union

from cryptography.hazmat.primitives import hashes

from ..alphabet import ALPHABET, ALPHABET_SIZE, ENGLISH_WEIGHTS, letter_index, letters_only

ENGLISH_IOC = 0.0655
RANDOM_IOC = 1.0 / ALPHABET_SIZE

COMMON_WORDS = (
    "the", "and", "that", "have", "for", "not", "with", "you", "this",
    "but", "his", "from", "they", "say", "her", "she", "will", "one",
    "all", "would", "there", "their", "what", "about", "who", "get",
    "which", "when", "make", "can", "like", "just", "him", "know", "take",
    "into", "your", "good", "some", "could", "them", "see", "other",
    "than", "then", "now", "look", "only", "come", "its", "over", "think",
    "also", "back", "after", "use", "two", "how", "our", "work", "first",
    "well", "way", "even", "new", "want", "because", "any", "these",
    "give", "day", "most", "are", "was", "were", "been", "has", "had",
)


@dataclass(frozen=True)
class FrequencyProfile:
    """Letter counts of one letter stream."""

    counts: Tuple[int, ...]
    total: int

    @classmethod
    def from_letters(cls, letters: str) -> "FrequencyProfile":
        counts = [0] * ALPHABET_SIZE
        for c in letters:
            idx = letter_index(c)
            if idx is not None:
                counts[idx] += 1
        return cls(tuple(counts), sum(counts))

    @classmethod
    def from_text(cls, text: str) -> "FrequencyProfile":
        return cls.from_letters(letters_only(text))

    def count(self, letter: str) -> int:
        return self.counts[letter_index(letter)]

    def frequency(self, letter: str) -> float:
        if not self.total:
            return 0.0
        return self.count(letter) / self.total

    def shifted(self, amount: int) -> "FrequencyProfile":
        """Profile of the same stream after decoding every letter by `amount`."""
        amount %= ALPHABET_SIZE
        counts = tuple(self.counts[(i + amount) % ALPHABET_SIZE] for i in range(ALPHABET_SIZE))
        return FrequencyProfile(counts, self.total)

    def as_dict(self) -> dict:
        return dict(zip(ALPHABET, self.counts))


def _profile(data: Union[str, FrequencyProfile]) -> FrequencyProfile:
    if isinstance(data, FrequencyProfile):
        return data
    return FrequencyProfile.from_letters(data)


def index_of_coincidence(data: Union[str, FrequencyProfile]) -> float:
    """Sum of count*(count-1) over n*(n-1); 0.0 when fewer than two letters."""
    profile = _profile(data)
    n = profile.total
    if n < 2:
        return 0.0
    return sum(c * (c - 1) for c in profile.counts) / (n * (n - 1))


def chi_squared(data: Union[str, FrequencyProfile],
                expected: Union[Sequence[float], Mapping[str, float]] = ENGLISH_WEIGHTS) -> float:
    """Chi-squared distance of the observed counts from `expected` weights."""
    profile = _profile(data)
    if not profile.total:
        return 0.0
    if isinstance(expected, Mapping):
        expected = [expected[c] for c in ALPHABET]
    score = 0.0
    for observed, weight in zip(profile.counts, expected):
        exp = weight * profile.total
        if exp > 0:
            score += (observed - exp) ** 2 / exp
    return score


def residue_classes(letters: str, length: int) -> list:
    """Split a letter stream into `length` classes by position modulo `length`."""
    if length < 1:
        raise ValueError("length must be at least 1.")
    return [letters[i::length] for i in range(length)]


def word_coverage(letters: str, words: Sequence[str] = COMMON_WORDS) -> float:
    """Fraction of the letter stream covered by occurrences of `words`."""
    if not letters:
        return 0.0
    covered = bytearray(len(letters))
    for word in words:
        start = letters.find(word)
        while start != -1:
            covered[start:start + len(word)] = b"\x01" * len(word)
            start = letters.find(word, start + 1)
    return sum(covered) / len(letters)


def content_digest(text: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoding of `text`."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(text.encode("utf-8"))
    return digest.finalize().hex()
