from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Dict, List, Sequence

from ..errors import FontRegistrationError
from ..models import LoadedFont

LOGGER = logging.getLogger(__name__)


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "family"


def _file_name(font: LoadedFont, idx: int, taken: set[str]) -> str:
    name = font.asset.filename or f"font-{idx}{font.asset.extension}"
    if name not in taken:
        return name
    # same basename, e.g. ".../dl?w=400" and ".../dl?w=700"
    stem, suffix = PurePosixPath(name).stem, PurePosixPath(name).suffix
    tag = font.asset.sha256[:12] if font.asset.sha256 else str(idx)
    name = f"{stem}-{tag}{suffix}"
    if name in taken:
        name = f"{stem}-{tag}-{idx}{suffix}"
    return name


class DirectoryFontRegistry:
    """Installs fonts as files under ``root/<family-slug>/<url basename>``.

    Basenames that repeat within a family get a short hash (or index) suffix.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.installed: Dict[str, List[Path]] = {}

    def register(self, family: str, fonts: Sequence[LoadedFont]) -> List[Path]:
        family_dir = self.root / _slug(family)
        written: List[Path] = []
        taken: set[str] = set()
        try:
            family_dir.mkdir(parents=True, exist_ok=True)
            for idx, font in enumerate(fonts):
                name = _file_name(font, idx, taken)
                taken.add(name)
                target = family_dir / name
                target.write_bytes(font.data)
                written.append(target)
        except OSError as exc:
            raise FontRegistrationError(f"Unable to install {family} into {family_dir}: {exc}") from exc
        self.installed[family] = written
        LOGGER.info("Registered %d font(s) for %s in %s", len(written), family, family_dir)
        return written
