"""
JSON font manifests.

    {
      "cache_dir": "~/.cache/fonts",
      "fonts": [
        {"family": "Inter", "assets": [{"url": "https://.../Inter-Regular.ttf", "sha256": "..."}]}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidConfiguration
from .fonts.family import RemoteFont, RemoteFonts
from .models import RemoteFontAsset


class AssetEntry(BaseModel):
    url: str
    sha256: Optional[str] = None


class FamilyEntry(BaseModel):
    family: str
    cache_dir: Optional[Path] = None
    assets: List[AssetEntry] = Field(min_length=1)


class FontManifest(BaseModel):
    cache_dir: Optional[Path] = None
    fonts: List[FamilyEntry] = Field(default_factory=list)

    def build(self, default_cache_dir: Optional[Path] = None) -> RemoteFonts:
        """Turn the manifest into families; ``default_cache_dir`` applies when the manifest names none."""
        families = [
            RemoteFont(
                family=entry.family,
                assets=[RemoteFontAsset(asset.url, asset.sha256) for asset in entry.assets],
                cache_dir=entry.cache_dir,
            )
            for entry in self.fonts
        ]
        return RemoteFonts(families, cache_dir=self.cache_dir or default_cache_dir)


def load_manifest(path: Path) -> FontManifest:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return FontManifest.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise InvalidConfiguration(f"Invalid font manifest {path}: {exc}") from exc
