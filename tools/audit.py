# Copyright (c) 2026 Signer — MIT License

"""Audit the fixed tables: BIP39 wordlists and password charsets.

Checks every wordlist has 2048 unique entries (also unique after NFKD) and
reports languages whose words are not unique by their first four letters.
Checks every charset against its pinned digest. Exits 1 on any failure.
"""
import sys, io, os, unicodedata

if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(SCRIPT_DIR)

sys.path.insert(0, PROJECT_DIR)

from gridseed.mnemonic import Language, wordlist
from gridseed.password import CHARSET_DIGESTS, CHARSET_VERSION, CHARSETS

failures = []

print("=" * 70)
print("WORDLIST AUDIT")
print("=" * 70)

for lang in Language:
    words = wordlist(lang)
    normalized = {unicodedata.normalize("NFKD", w) for w in words}
    prefixes = {w[:4] for w in normalized}
    longest = max(len(w) for w in words)

    ok = len(words) == 2048 and len(set(words)) == 2048 and len(normalized) == 2048
    if not ok:
        failures.append(f"wordlist {lang.wordlist_name}")
    prefix_note = "" if len(prefixes) == 2048 else f"  4-letter collisions: {2048 - len(prefixes)}"
    print(f"  {lang.name:22s} code={lang.code}  words={len(words)}  "
          f"longest={longest:2d}  {'OK' if ok else 'FAIL'}{prefix_note}")

print("\n" + "=" * 70)
print(f"CHARSET AUDIT (version {CHARSET_VERSION})")
print("=" * 70)

# mixture repeats each emoji it uses
REPEATING = {"mixture"}

for name, charset in CHARSETS.items():
    pinned = CHARSET_DIGESTS.get(name)
    unique = len(set(charset.characters)) == charset.size or name in REPEATING
    ok = unique and charset.digest == pinned
    if not ok:
        failures.append(f"charset {name}")
    print(f"  {name:10s} size={charset.size:6d}  distinct={len(set(charset.characters)):6d}  "
          f"bits/char={(charset.size - 1).bit_length():2d}  "
          f"{'OK' if ok else 'FAIL'}")

print()
if failures:
    print(f"FAILED: {', '.join(failures)}")
    sys.exit(1)
print("All tables OK")
