from __future__ import annotations

from hashlib import sha256 as _sha256lib


def sha256_hex(data: bytes) -> str:
    return _sha256lib(data).hexdigest()


def verify(data: bytes, expected: str) -> bool:
    """Return True when the lowercase SHA-256 hex digest of ``data`` equals ``expected``.

    Comparison is exact: an uppercase ``expected`` never matches.
    """
    return sha256_hex(data) == expected
