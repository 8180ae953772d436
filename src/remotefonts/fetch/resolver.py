from __future__ import annotations

import logging
import re
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..errors import CacheWriteFailure, InvalidConfiguration
from ..models import CacheEnabled, CacheMode, RemoteFontAsset, cache_mode
from .cache import CacheStore, cache_key
from .remote import RemoteFetcher

LOGGER = logging.getLogger(__name__)

# hex only, so a hash can never name a path outside the cache root
_HASH_PATTERN = re.compile(r"[0-9a-fA-F]+")


def check_cache_mode(asset: RemoteFontAsset, mode: CacheMode) -> None:
    """Caching needs a trust anchor: a cache root is allowed iff the asset has a sha256."""
    enabled = isinstance(mode, CacheEnabled)
    if enabled and not asset.sha256:
        raise InvalidConfiguration(f"{asset.url}: cache directory given but no sha256 to verify against")
    if asset.sha256 and not enabled:
        raise InvalidConfiguration(f"{asset.url}: sha256 given but no cache directory")
    if asset.sha256 and not _HASH_PATTERN.fullmatch(asset.sha256):
        raise InvalidConfiguration(f"{asset.url}: sha256 {asset.sha256!r} is not a hex digest")


class AssetResolver:
    """Produce the bytes of a remote asset, going through the cache when enabled.

    Lookups of the same cache path through one resolver are serialised, so
    concurrent callers download a given key at most once. A path's lock is
    dropped once no caller holds or waits for it.
    """

    def __init__(self, fetcher: Optional[RemoteFetcher] = None, store: Optional[CacheStore] = None) -> None:
        self.fetcher = fetcher or RemoteFetcher()
        self.store = store or CacheStore()
        # path -> [lock, number of callers holding or waiting]
        self._locks: Dict[Path, List] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _key_lock(self, path: Path) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.setdefault(path, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[path]

    def resolve(self, asset: RemoteFontAsset, cache: CacheMode | str | Path | None = None) -> bytes:
        mode = cache_mode(cache)
        check_cache_mode(asset, mode)
        if not isinstance(mode, CacheEnabled):
            return self.fetcher.fetch(asset.url)

        key = cache_key(asset)
        with self._key_lock(self.store.cache_path(mode.root, key)):
            cached = self.store.read_verified(mode.root, key, asset.sha256)
            if cached is not None:
                return cached
            data = self.fetcher.fetch(asset.url)
            try:
                self.store.write(mode.root, key, data)
            except CacheWriteFailure as exc:
                LOGGER.warning("Cache write-through skipped: %s", exc)
            return data
