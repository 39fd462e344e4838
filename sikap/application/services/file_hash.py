"""Content hashing for integrity checks and de-duplication."""

import hashlib


def compute_file_hash(data: bytes) -> str:
    """Return the SHA-256 hex digest of data."""
    return hashlib.sha256(data).hexdigest()
