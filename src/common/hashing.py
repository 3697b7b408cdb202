"""Hashing utilities."""

import hashlib


def generate_fingerprint(*parts: object) -> str:
    """Generate a deduplication fingerprint from an item's identity fields.

    Parts are joined with ":" before hashing, so the same fields always
    produce the same 64-char hex digest. None parts hash as empty strings.
    """
    joined = ":".join("" if part is None else str(part) for part in parts)
    return hashlib.sha256(joined.encode()).hexdigest()
