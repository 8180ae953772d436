from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union
from urllib.parse import unquote, urlparse


@dataclass(frozen=True, slots=True)
class RemoteFontAsset:
    """A remote font file. Without ``sha256`` it is never cached."""

    url: str
    sha256: Optional[str] = None

    @property
    def extension(self) -> str:
        return PurePosixPath(unquote(urlparse(self.url).path)).suffix

    @property
    def filename(self) -> str:
        return PurePosixPath(unquote(urlparse(self.url).path)).name


@dataclass(frozen=True, slots=True)
class CacheDisabled:
    pass


@dataclass(frozen=True, slots=True)
class CacheEnabled:
    root: Path


CacheMode = Union[CacheDisabled, CacheEnabled]


def cache_mode(root: CacheMode | str | Path | None) -> CacheMode:
    if isinstance(root, (CacheDisabled, CacheEnabled)):
        return root
    if root is None:
        return CacheDisabled()
    return CacheEnabled(Path(root).expanduser())


@dataclass(frozen=True, slots=True)
class LoadedFont:
    asset: RemoteFontAsset
    data: bytes


class FontState(enum.Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"


@dataclass(slots=True)
class LoadSummary:
    generated_at: datetime
    families: List[str]
    font_files: dict[str, List[str]]
    cache_dir: Optional[str] = None
    parallel: bool = False
