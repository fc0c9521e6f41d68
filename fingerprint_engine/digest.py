"""Digest function shared by signal hashing and final identifier hashing."""

import hashlib

# SHA-256 hex output
DIGEST_LENGTH = 64


def digest(text: str) -> str:
    """Return the lowercase SHA-256 hex digest of a UTF-8 encoded string."""
    if not isinstance(text, str):
        raise TypeError(f"digest() expects str, got {type(text).__name__}")
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
