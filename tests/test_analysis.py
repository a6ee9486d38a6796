"""
polycipher -- cryptanalysis test suite
======================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_analysis.py
"""

import sys
import os
import random
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from polycipher.alphabet           import ALPHABET, ENGLISH_WEIGHTS, fold_case, letters_only
from polycipher.engine             import encrypt
from polycipher.keys               import NumericKey, TextualKey
from polycipher.analysis.frequency import (FrequencyProfile, chi_squared, content_digest,
                                           index_of_coincidence, residue_classes, word_coverage)
from polycipher.analysis.keylength import (AMBIGUITY_MARGIN, KeyLengthEstimate, estimate_key_length,
                                           kasiski_factors, kasiski_period)
from polycipher.analysis.recover   import best_shift, minimal_period, recover_key
from polycipher.analysis.crack     import Candidate, candidate_lengths, crack, select_candidate

PANGRAM = "the quick brown fox jumps over the lazy dog"
PANGRAMS = " ".join([PANGRAM] * 20)
TRIALS = 20


def english_like(rng, n):
    """Random letters drawn with English letter frequencies."""
    return "".join(rng.choices(ALPHABET, weights=ENGLISH_WEIGHTS, k=n))


def random_key(rng, length):
    while True:
        key = "".join(rng.choice(ALPHABET) for _ in range(length))
        if minimal_period(key) == key:
            return key


# ── Frequency profile ────────────────────────────────────────────────────────
def test_profile_counts_letters_only():
    p = FrequencyProfile.from_text("Ab, a!")
    assert p.total == 3
    assert p.count("a") == 2
    assert p.frequency("b") == pytest.approx(1 / 3)

def test_profile_shifted_is_new_profile():
    p = FrequencyProfile.from_letters("abc")
    q = p.shifted(1)
    assert q.as_dict()["z"] == 1 and q.as_dict()["c"] == 0
    assert p.as_dict()["c"] == 1

def test_index_of_coincidence():
    assert index_of_coincidence("aaaa") == 1.0
    assert index_of_coincidence("abcd") == 0.0
    assert index_of_coincidence("") == 0.0
    assert index_of_coincidence("a") == 0.0
    assert index_of_coincidence("aabb") == pytest.approx(4 / 12)

def test_chi_squared_prefers_english():
    assert chi_squared("") == 0.0
    assert chi_squared(english_like(random.Random(3), 500)) < chi_squared("z" * 500)

def test_residue_classes():
    assert residue_classes("abcdefg", 3) == ["adg", "be", "cf"]
    with pytest.raises(ValueError):
        residue_classes("abc", 0)

def test_word_coverage():
    assert word_coverage("thecat") == 0.5
    assert word_coverage("") == 0.0
    assert word_coverage("qxzqxz") == 0.0

def test_content_digest_is_sha256():
    assert content_digest("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

# ── Key-length estimator ─────────────────────────────────────────────────────
def test_estimate_empty_ciphertext():
    est = estimate_key_length("")
    assert est.length == 1
    assert est.scores == {}
    assert est.ranked == (1,)
    assert estimate_key_length("1234 !?").length == 1

def test_estimate_rejects_bad_max_length():
    with pytest.raises(ValueError):
        estimate_key_length("abc", max_length=0)

def test_estimate_respects_max_length():
    ct = encrypt(english_like(random.Random(5), 600), "lemon")
    est = estimate_key_length(ct, max_length=8)
    assert max(est.scores) == 8
    assert est.length == 5

def test_estimate_recovers_length_on_synthetic_text():
    rng = random.Random(1863)
    exact = near = 0
    for _ in range(TRIALS):
        length = rng.randint(3, 8)
        ct = encrypt(english_like(rng, 600), random_key(rng, length))
        est = estimate_key_length(ct)
        exact += est.length == length
        near += length in est.ranked[:3]
    assert exact >= TRIALS * 0.8
    assert near >= TRIALS * 0.9

# Nothing reaches the threshold; L=2 wins by argmax with L=7 0.00075 behind.
AMBIGUOUS_STREAM = "jlegolrhofovdpspbjwqlulhg"
# L=2 wins; only L=6, a multiple of 2, scores within the margin.
MULTIPLE_RIVAL_STREAM = "tokvbsguhfbrqhrlttemmmeogs"

def test_estimate_flags_ambiguous_lengths():
    est = estimate_key_length(AMBIGUOUS_STREAM)
    assert est.length == 2
    assert est.ambiguous is True
    assert est.ambiguity.lengths[0] == est.length
    assert est.ambiguity.lengths == (2, 7)
    assert abs(est.scores[7] - est.scores[2]) <= AMBIGUITY_MARGIN

def test_estimate_close_multiple_is_not_ambiguous():
    est = estimate_key_length(MULTIPLE_RIVAL_STREAM)
    assert est.length == 2
    assert abs(est.scores[6] - est.scores[2]) <= AMBIGUITY_MARGIN
    assert est.ambiguous is False
    assert est.ambiguity is None

def test_kasiski_votes_factors_of_spacing():
    assert kasiski_factors("abcxyzabc", max_factor=6) == {2: 1.0, 3: 1.0, 6: 1.0}
    assert kasiski_factors("abcdef") == {}
    assert kasiski_period({2: 10.0, 4: 10.0, 3: 2.0}) == 4
    assert kasiski_period({}) is None

# ── Key-content recoverer ────────────────────────────────────────────────────
def test_best_shift_on_caesar():
    ct = encrypt(PANGRAMS, NumericKey(7))
    assert best_shift(ct.replace(" ", "")).shift == 7

def test_recover_key_known_length():
    assert recover_key(encrypt(PANGRAMS, "rust"), 4).key == "rust"

def test_recover_key_empty_classes_low_confidence():
    rec = recover_key("abc", 5)
    assert rec.length == 5
    assert rec.low_confidence == (3, 4)
    assert rec.key[3:] == "aa"
    assert rec.shifts[3:] == (0, 0)

def test_recover_key_rejects_bad_length():
    with pytest.raises(ValueError):
        recover_key("abc", 0)

def test_minimal_period():
    assert minimal_period("rustrust") == "rust"
    assert minimal_period("aaaa") == "a"
    assert minimal_period("abc") == "abc"
    assert minimal_period("") == ""

# ── Driver: candidate handling ───────────────────────────────────────────────
def test_candidate_lengths_include_divisors_and_multiples():
    scores = {L: 0.04 for L in range(1, 21)}
    scores.update({20: 0.15, 14: 0.12, 10: 0.09})
    est = KeyLengthEstimate(length=5, scores=scores)
    assert candidate_lengths(est, 3) == [1, 2, 4, 5, 7, 10, 14, 15, 20]

def _cand(key, score, coverage=0.0, verified=False):
    return Candidate(length=len(key), key=key, plaintext="", score=score,
                     coverage=coverage, verified=verified)

def test_select_prefers_verified():
    chosen = select_candidate([_cand("ab", 0.5, 0.4), _cand("abcde", 3.0, verified=True)])
    assert chosen.key == "abcde"

def test_select_uses_word_evidence():
    chosen = select_candidate([_cand("xyzzyxzzyxzz", 0.7), _cand("rust", 3.1, 0.29), _cand("ru", 3.4, 0.02)])
    assert chosen.key == "rust"

def test_select_falls_back_to_shortest_good_fit():
    chosen = select_candidate([_cand("ab", 4.0), _cand("abcde", 1.0), _cand("abcdeabcdf", 0.9)],
                              tolerance=0.5)
    assert chosen.key == "abcde"

# ── Driver: crack() ──────────────────────────────────────────────────────────
def test_crack_pangram_rust():
    result = crack(encrypt(PANGRAMS, "rust"))
    assert result.key_length == 4
    assert result.key == "rust"
    assert result.estimate.length == 5
    assert result.plaintext == fold_case(PANGRAMS)
    assert result.cipher_key == TextualKey("rust")

def test_crack_caesar():
    result = crack(encrypt(PANGRAMS, 7))
    assert result.key == "h"
    assert result.key_length == 1

def test_crack_with_expected_digest():
    ct = encrypt(PANGRAMS, "rust")
    result = crack(ct, expected_digest=content_digest(fold_case(PANGRAMS)))
    assert result.verified is True
    assert result.key == "rust"

def test_crack_digest_mismatch_still_returns_best_guess():
    result = crack(encrypt(PANGRAMS, "rust"), expected_digest=content_digest("something else"))
    assert result.verified is False
    assert result.key == "rust"

def test_crack_empty_ciphertext():
    for ct in ("", "  12, 34 !"):
        result = crack(ct)
        assert result.key == ""
        assert result.key_length == 1
        assert result.cipher_key is None
        assert result.plaintext == ct

def test_crack_short_ciphertext_never_raises():
    result = crack("xq")
    assert 1 <= len(result.key) <= 2

def test_crack_candidates_have_no_empty_classes():
    for ct in ("ababab", "xq", encrypt(PANGRAMS, "rust")):
        n = len(letters_only(ct))
        result = crack(ct)
        assert all(n // c.length >= 2 for c in result.candidates)
        assert not hasattr(result, "low_confidence")

def test_crack_recovers_key_on_synthetic_text():
    rng = random.Random(1553)
    recovered = 0
    for _ in range(TRIALS):
        key = random_key(rng, rng.randint(3, 8))
        result = crack(encrypt(english_like(rng, 600), key))
        recovered += result.key == key
    assert recovered >= TRIALS * 0.8

# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import time
    tests = [
        ("Estimator -- synthetic key lengths", test_estimate_recovers_length_on_synthetic_text),
        ("Estimator -- empty ciphertext",      test_estimate_empty_ciphertext),
        ("Estimator -- ambiguous lengths",     test_estimate_flags_ambiguous_lengths),
        ("Recoverer -- known length",          test_recover_key_known_length),
        ("Recoverer -- empty classes",         test_recover_key_empty_classes_low_confidence),
        ("Driver    -- pangram under 'rust'",  test_crack_pangram_rust),
        ("Driver    -- Caesar",                test_crack_caesar),
        ("Driver    -- digest check",          test_crack_with_expected_digest),
        ("Driver    -- synthetic keys",        test_crack_recovers_key_on_synthetic_text),
    ]

    print("\n" + "═" * 70)
    print("  polycipher -- Cryptanalysis Suite")
    print("═" * 70)
    passed = failed = 0
    for name, fn in tests:
        t0 = time.perf_counter()
        try:
            fn()
            elapsed = time.perf_counter() - t0
            print(f"  ✓  {name:<45} {elapsed:.3f}s")
            passed += 1
        except Exception as e:
            print(f"  ✗  {name:<45} FAILED: {e}")
            failed += 1
    print("═" * 70)
    print(f"  {passed} passed  |  {failed} failed")
    print("═" * 70 + "\n")
    sys.exit(0 if failed == 0 else 1)
