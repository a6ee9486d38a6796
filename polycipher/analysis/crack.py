"""
Cryptanalysis Driver
====================
ciphertext -> key length estimate -> candidate lengths -> per-length key
recovery -> decrypt + score -> best-effort key.

Candidate lengths are the estimate itself, its divisors and multiples,
the best few IoC-ranked lengths with their divisors, and the Kasiski
period with its divisors. Periodic keys are collapsed ("rustrust" is
"rust") before scoring.

Choosing among candidates:

  1. a decryption whose SHA-256 matches `expected_digest` wins outright;
  2. if any decryption reads like English words (word coverage of at
     least WORD_EVIDENCE), keep the candidates within COVERAGE_BAND of
     the best coverage;
  3. otherwise keep the candidates whose chi-squared per letter is within
     `tolerance` of the best.

The shortest surviving key wins, ties broken by chi-squared.

The result is statistically plausible, not proven. Short or crafted
ciphertexts can produce a wrong key; callers should decrypt and inspect,
or pass the digest of the expected plaintext.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..alphabet import letters_only
from ..config import DEFAULT_SETTINGS, Settings
from ..engine import decrypt
from ..keys import TextualKey
from .frequency import chi_squared, content_digest, word_coverage
from .keylength import KeyLengthEstimate, estimate_key_length, kasiski_period
from .recover import minimal_period, recover_key

logger = logging.getLogger(__name__)

WORD_EVIDENCE = 0.1
COVERAGE_BAND = 0.9


@dataclass(frozen=True)
class Candidate:
    length: int
    key: str
    plaintext: str
    score: float
    coverage: float
    verified: bool = False


@dataclass(frozen=True)
class CrackResult:
    """
    Outcome of `crack`.

    `key_length` is the length of the key the driver finally chose, after
    periodic keys were collapsed. `estimate` is the raw IoC estimate it
    started from and can disagree: the repeated pangram under "rust"
    estimates 5 while the driver settles on 4.

    Every candidate length is at most half the letter count, so each
    residue class holds two or more letters; low confidence from empty
    classes is reported only by `recover_key`.
    """

    key: str
    key_length: int
    plaintext: str
    score: float
    coverage: float
    estimate: KeyLengthEstimate
    candidates: Tuple[Candidate, ...] = field(default=(), repr=False)
    verified: bool = False

    @property
    def cipher_key(self) -> Optional[TextualKey]:
        return TextualKey(self.key) if self.key else None


def _divisors(n: int) -> list:
    return [d for d in range(1, n + 1) if n % d == 0]


def candidate_lengths(estimate: KeyLengthEstimate, alternates: int = 3) -> list:
    """Lengths worth a full key recovery, shortest first."""
    upper = max(estimate.scores, default=1)
    lengths = set(_divisors(estimate.length))
    lengths.update(range(estimate.length, upper + 1, estimate.length))
    for L in estimate.top(alternates):
        lengths.update(_divisors(L))
    period = kasiski_period(estimate.kasiski)
    if period:
        lengths.update(_divisors(period))
    return sorted(L for L in lengths if L <= upper)


def _score_candidate(ciphertext: str, length: int, unsupported: str,
                     expected_digest: Optional[str]) -> Candidate:
    recovered = recover_key(ciphertext, length)
    key = minimal_period(recovered.key)
    plaintext = decrypt(ciphertext, TextualKey(key), unsupported)
    letters = letters_only(plaintext)
    verified = bool(expected_digest) and content_digest(plaintext) == expected_digest.lower()
    return Candidate(
        length=length,
        key=key,
        plaintext=plaintext,
        score=chi_squared(letters) / len(letters),
        coverage=word_coverage(letters),
        verified=verified,
    )


def select_candidate(candidates, tolerance: float = DEFAULT_SETTINGS.tolerance) -> Candidate:
    pool = [c for c in candidates if c.verified]
    if not pool:
        best_coverage = max(c.coverage for c in candidates)
        if best_coverage >= WORD_EVIDENCE:
            pool = [c for c in candidates if c.coverage >= COVERAGE_BAND * best_coverage]
        else:
            best_score = min(c.score for c in candidates)
            pool = [c for c in candidates if c.score <= best_score * (1 + tolerance)]
    return min(pool, key=lambda c: (len(c.key), c.score))


def crack(ciphertext: str, max_length: int = None, expected_digest: str = None,
          settings: Settings = None) -> CrackResult:
    """
    Recover the most plausible repeating key of `ciphertext`.

    Always returns; a wrong key is a quality problem, not an error.
    """
    settings = settings or DEFAULT_SETTINGS
    estimate = estimate_key_length(ciphertext, max_length=max_length, settings=settings)

    if not letters_only(ciphertext):
        logger.info("Nothing to crack: ciphertext has no letters")
        return CrackResult(key="", key_length=estimate.length, plaintext=ciphertext,
                           score=0.0, coverage=0.0, estimate=estimate)

    candidates, seen = [], set()
    for length in candidate_lengths(estimate, settings.alternates):
        candidate = _score_candidate(ciphertext, length, settings.unsupported, expected_digest)
        logger.debug(f"L={length:2d} key={candidate.key!r} chi2/letter={candidate.score:.3f} "
                     f"coverage={candidate.coverage:.3f}")
        if candidate.key in seen:
            continue
        seen.add(candidate.key)
        candidates.append(candidate)

    chosen = select_candidate(candidates, settings.tolerance)
    if expected_digest and not chosen.verified:
        logger.warning("No candidate key reproduces the expected digest; returning best guess")
    logger.info(f"Cracked key: {chosen.key!r} (length {len(chosen.key)}, "
                f"estimate {estimate.length}, {len(candidates)} candidates)")

    return CrackResult(
        key=chosen.key,
        key_length=len(chosen.key),
        plaintext=chosen.plaintext,
        score=chosen.score,
        coverage=chosen.coverage,
        estimate=estimate,
        candidates=tuple(candidates),
        verified=chosen.verified,
    )
