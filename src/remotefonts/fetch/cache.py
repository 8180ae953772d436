from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import CacheIOError, CacheWriteFailure
from ..models import RemoteFontAsset
from ..util.hashing import verify

LOGGER = logging.getLogger(__name__)


def cache_key(asset: RemoteFontAsset) -> str:
    """Return ``<sha256><extension>`` for a hashed asset, e.g. ``abc123.ttf``."""
    if not asset.sha256:
        raise ValueError(f"asset {asset.url} has no sha256 and cannot be cached")
    return f"{asset.sha256}{asset.extension}"


class CacheStore:
    """Flat content-addressed file cache.

    Entries live at ``root/key``. Nothing is ever evicted; a missing file is a
    miss, any other filesystem error on read is a ``CacheIOError``.
    """

    def cache_path(self, root: Path, key: str) -> Path:
        return Path(root) / key

    def read(self, root: Path, key: str) -> Optional[bytes]:
        path = self.cache_path(root, key)
        try:
            with path.open("rb") as fh:
                return fh.read()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            raise CacheIOError(f"Unable to read cache entry {path}: {exc}") from exc

    def read_verified(self, root: Path, key: str, expected: str) -> Optional[bytes]:
        data = self.read(root, key)
        if data is None:
            LOGGER.debug("Cache miss for %s", key)
            return None
        if not verify(data, expected):
            LOGGER.warning("Cached %s does not match its sha256; ignoring it", key)
            return None
        LOGGER.debug("Cache hit for %s", key)
        return data

    def write(self, root: Path, key: str, data: bytes) -> Path:
        target = self.cache_path(root, key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise CacheWriteFailure(f"Unable to write cache entry {target}: {exc}") from exc
        return target
