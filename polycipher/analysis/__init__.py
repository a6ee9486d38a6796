"""Ciphertext-only cryptanalysis of repeating-key ciphers."""

from .frequency import (FrequencyProfile, chi_squared, content_digest,
                        index_of_coincidence, residue_classes, word_coverage)
from .keylength import KeyLengthEstimate, estimate_key_length, kasiski_factors
from .recover import RecoveredKey, best_shift, minimal_period, recover_key
from .crack import Candidate, CrackResult, crack

__all__ = [
    "FrequencyProfile",
    "chi_squared",
    "content_digest",
    "index_of_coincidence",
    "residue_classes",
    "word_coverage",
    "KeyLengthEstimate",
    "estimate_key_length",
    "kasiski_factors",
    "RecoveredKey",
    "best_shift",
    "minimal_period",
    "recover_key",
    "Candidate",
    "CrackResult",
    "crack",
]
