"""
polycipher -- Live Demo: encrypt, then break it without the key
===============================================================
Run:  python examples/demo_crack.py

Encrypts a message under a few keys, then recovers each key from the
ciphertext alone and prints what the analysis saw along the way.
"""

import sys, os, time, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from polycipher                    import encrypt, decrypt, crack, estimate_key_length
from polycipher.analysis.frequency import content_digest

LINE = "═" * 70
MSG  = " ".join(["The quick brown fox jumps over the lazy dog."] * 20)
KEYS = ["rust", "lemon", 11]

def header(title):
    print(f"\n{LINE}")
    print(f"  {title}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

logging.basicConfig(level=logging.WARNING, format=' %(message)s')

print(f"\n{LINE}")
print("  polycipher -- repeating-key cipher demo")
print(LINE)
print(f"  Message: {MSG[:60]}...\n")

for key in KEYS:
    header(f"Key {key!r}")
    ct = encrypt(MSG, key)
    ok("Encrypted", ct[:40] + "...")
    ok("Decrypted", decrypt(ct, key)[:40] + "...")

    est = estimate_key_length(ct)
    ok("IoC length estimate", f"{est.length} (ranked {est.ranked[:5]})")

    t0 = time.perf_counter()
    result = crack(ct, expected_digest=content_digest(MSG.lower()))
    elapsed = time.perf_counter() - t0
    ok("Cracked key",     f"{result.key} (length {result.key_length})")
    ok("Candidates",      ", ".join(c.key for c in result.candidates[:6]))
    ok("Digest verified", "yes" if result.verified else "no")
    ok("Crack time",      f"{elapsed*1000:.2f} ms")

print(f"\n{LINE}\n")
