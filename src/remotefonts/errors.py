"""
Typed errors raised while resolving remote font assets.

Hash mismatches are deliberately absent: a cached file whose digest does not
match is a cache miss, not a failure.
"""

from __future__ import annotations


class RemoteFontsError(RuntimeError):
    """Base class for remote font failures."""


class InvalidConfiguration(RemoteFontsError):
    """Cache root and expected hash disagree, or settings failed validation."""


class NetworkError(RemoteFontsError):
    """HTTP/transport failure while fetching a remote asset."""


class CacheIOError(RemoteFontsError):
    """Reading a cache entry failed for a reason other than 'not found'."""


class CacheWriteFailure(RemoteFontsError):
    """Persisting freshly fetched bytes to the cache failed."""


class FontRegistrationError(RemoteFontsError):
    """Handing loaded fonts to a registry failed."""


__all__ = [
    "RemoteFontsError",
    "InvalidConfiguration",
    "NetworkError",
    "CacheIOError",
    "CacheWriteFailure",
    "FontRegistrationError",
]
