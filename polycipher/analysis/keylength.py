"""
Key-Length Estimator
====================
Friedman test over residue classes, with Kasiski spacing votes on the side.

For every candidate length L the letter stream is split into L residue
classes (class i = letters at positions i, i+L, i+2L, ...). If L is the
key length, every class is a plain Caesar cipher of the plaintext and
keeps the language's index of coincidence (~0.0655 for English). For any
other L the classes mix several shifts and flatten towards 1/26.

Selection rule: the smallest L whose average IoC reaches the threshold
(default 0.058). Multiples of the key length score just as well, so the
smallest passer is the one that matters. When nothing passes (short or
odd ciphertext) the L with the highest average IoC wins.

The answer is an estimate. A wrong length only makes the recovered key
worse, it never raises.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..alphabet import letters_only
from ..config import DEFAULT_SETTINGS, Settings
from ..errors import EstimationAmbiguous
from .frequency import index_of_coincidence, residue_classes

logger = logging.getLogger(__name__)

AMBIGUITY_MARGIN = 0.002


@dataclass(frozen=True)
class KeyLengthEstimate:
    length: int
    scores: Dict[int, float] = field(default_factory=dict)
    ranked: Tuple[int, ...] = (1,)
    kasiski: Dict[int, float] = field(default_factory=dict)
    threshold: float = DEFAULT_SETTINGS.ioc_threshold
    ambiguity: Optional[EstimationAmbiguous] = None

    @property
    def ambiguous(self) -> bool:
        return self.ambiguity is not None

    def top(self, n: int) -> Tuple[int, ...]:
        """The `n` highest-scoring lengths, best first."""
        return tuple(sorted(self.scores, key=lambda k: (-self.scores[k], k))[:n])


def average_ioc(letters: str, length: int) -> float:
    classes = residue_classes(letters, length)
    return sum(index_of_coincidence(c) for c in classes) / length


def kasiski_factors(letters: str, min_ngram: int = 3, max_ngram: int = 5,
                    max_factor: int = 20) -> Dict[int, float]:
    """
    Kasiski examination: vote for every factor (2..max_factor) of the
    spacing between consecutive repeats of each n-gram.
    """
    votes = defaultdict(float)
    for size in range(min_ngram, max_ngram + 1):
        positions = defaultdict(list)
        for i in range(len(letters) - size + 1):
            positions[letters[i:i + size]].append(i)
        for hits in positions.values():
            for a, b in zip(hits, hits[1:]):
                distance = b - a
                for f in range(2, max_factor + 1):
                    if distance % f == 0:
                        votes[f] += 1.0
    return dict(votes)


def kasiski_period(votes: Dict[int, float], band: float = 0.9) -> Optional[int]:
    """Largest factor that almost every repeat spacing agrees on."""
    if not votes:
        return None
    best = max(votes.values())
    return max(f for f, v in votes.items() if v >= band * best)


def estimate_key_length(ciphertext: str, max_length: int = None, threshold: float = None,
                        settings: Settings = None) -> KeyLengthEstimate:
    settings = settings or DEFAULT_SETTINGS
    max_length = settings.max_key_length if max_length is None else max_length
    threshold = settings.ioc_threshold if threshold is None else threshold
    if max_length < 1:
        raise ValueError("max_length must be at least 1.")

    letters = letters_only(ciphertext)
    if not letters:
        logger.debug("No letters in ciphertext; key length defaults to 1")
        return KeyLengthEstimate(length=1, threshold=threshold)

    # classes of a single letter have no coincidences to count
    upper = min(max_length, max(1, len(letters) // 2))
    scores = {L: average_ioc(letters, L) for L in range(1, upper + 1)}

    passers = [L for L in scores if scores[L] >= threshold]
    rest = sorted((L for L in scores if L not in passers), key=lambda k: (-scores[k], k))
    length = passers[0] if passers else max(scores, key=scores.get)

    rivals = [L for L in scores
              if L != length and L % length and abs(scores[L] - scores[length]) <= AMBIGUITY_MARGIN]
    ambiguity = EstimationAmbiguous([length] + rivals) if rivals else None
    if ambiguity:
        logger.debug(f"{ambiguity}")

    estimate = KeyLengthEstimate(
        length=length,
        scores=scores,
        ranked=tuple(passers + rest),
        kasiski=kasiski_factors(letters, max_factor=max(2, upper)),
        threshold=threshold,
        ambiguity=ambiguity,
    )
    logger.debug(f"Key length estimate: {length} (IoC={scores[length]:.4f}, N={len(letters)})")
    return estimate
