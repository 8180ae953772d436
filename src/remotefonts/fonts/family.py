"""Font families: groups of remote assets registered together under one name."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..fetch.resolver import AssetResolver, check_cache_mode
from ..models import CacheDisabled, CacheEnabled, CacheMode, FontState, LoadedFont, RemoteFontAsset, cache_mode
from ..registry.base import FontRegistry

LOGGER = logging.getLogger(__name__)


class RemoteFont:
    """One font family and the remote files (weights, styles) that make it up.

    ``cache_dir`` applies to every asset, so either all assets carry a sha256
    or none do.
    """

    def __init__(
        self,
        family: str,
        assets: Iterable[RemoteFontAsset],
        cache_dir: CacheMode | str | Path | None = None,
    ) -> None:
        self.family = family
        self.assets: List[RemoteFontAsset] = list(assets)
        self.cache = cache_mode(cache_dir)
        self.state = FontState.UNLOADED
        self._state_lock = threading.Lock()

    def validate(self) -> None:
        for asset in self.assets:
            check_cache_mode(asset, self.cache)

    def loadable_fonts(self, resolver: AssetResolver) -> List[LoadedFont]:
        return [LoadedFont(asset, resolver.resolve(asset, self.cache)) for asset in self.assets]

    def load(self, registry: FontRegistry, resolver: Optional[AssetResolver] = None) -> Any:
        """Fetch every asset and register the family once.

        Returns whatever the registry returns, or None if the family was
        already loaded. A failed load resets the family to ``UNLOADED``.
        """
        with self._state_lock:
            if self.state is FontState.LOADED:
                return None
            self.state = FontState.LOADED

        try:
            self.validate()
            fonts = self.loadable_fonts(resolver or AssetResolver())
            return registry.register(self.family, fonts)
        except Exception:
            with self._state_lock:
                self.state = FontState.UNLOADED
            raise


class RemoteFonts:
    """A set of families loaded sequentially or in parallel.

    ``cache_dir`` is the default for families constructed without one.
    Parallel loading is fail-fast: the first error is re-raised once running
    loads finish, and families that had not started are cancelled.
    """

    def __init__(self, fonts: Iterable[RemoteFont], cache_dir: CacheMode | str | Path | None = None) -> None:
        self.fonts: List[RemoteFont] = list(fonts)
        self.cache = cache_mode(cache_dir)
        if isinstance(self.cache, CacheEnabled):
            for font in self.fonts:
                # only fully hashed families can inherit a cache directory
                if isinstance(font.cache, CacheDisabled) and all(asset.sha256 for asset in font.assets):
                    font.cache = self.cache

    def _load_parallel(self, registry: FontRegistry, resolver: AssetResolver, max_workers: Optional[int]) -> None:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(font.load, registry, resolver) for font in self.fonts]
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
        for future in futures:
            if future.cancelled():
                continue
            exc = future.exception()
            if exc is not None:
                raise exc

    def load(
        self,
        registry: FontRegistry,
        resolver: Optional[AssetResolver] = None,
        parallel: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        resolver = resolver or AssetResolver()
        if parallel:
            LOGGER.info("Loading %d font families in parallel", len(self.fonts))
            self._load_parallel(registry, resolver, max_workers)
            return
        for font in self.fonts:
            font.load(registry, resolver)
