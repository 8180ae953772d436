from __future__ import annotations

import functools
import logging
from datetime import datetime

from .config import AppSettings
from .fetch.remote import RemoteFetcher
from .fetch.resolver import AssetResolver
from .manifest import FontManifest
from .models import CacheEnabled, LoadSummary
from .registry.directory import DirectoryFontRegistry
from .util.http import create_session
from .util.logging import setup_logging

LOGGER = logging.getLogger(__name__)


def build_resolver(settings: AppSettings) -> AssetResolver:
    session_factory = functools.partial(
        create_session,
        settings.user_agent,
        timeout=settings.timeout,
    )
    fetcher = RemoteFetcher(session_factory, allow_error_status=settings.allow_error_status)
    return AssetResolver(fetcher)


def run_manifest(settings: AppSettings, manifest: FontManifest, resolver: AssetResolver | None = None) -> LoadSummary:
    setup_logging(settings.logs_dir, settings.log_level)
    fonts = manifest.build(settings.cache_dir)
    registry = DirectoryFontRegistry(settings.out_dir)
    resolver = resolver or build_resolver(settings)

    LOGGER.info(
        "Loading %d font families (%s)",
        len(fonts.fonts),
        "parallel" if settings.parallel else "sequential",
    )
    fonts.load(registry, resolver, parallel=settings.parallel, max_workers=settings.max_workers)

    families = [font.family for font in fonts.fonts]
    return LoadSummary(
        generated_at=datetime.now().astimezone(),
        families=families,
        font_files={family: [str(p) for p in registry.installed.get(family, [])] for family in families},
        cache_dir=str(fonts.cache.root) if isinstance(fonts.cache, CacheEnabled) else None,
        parallel=settings.parallel,
    )
