from __future__ import annotations

import threading
from typing import Dict, List, Sequence

from ..models import LoadedFont


class MemoryFontRegistry:
    """Keeps registered font bytes per family; safe to share across loader threads."""

    def __init__(self) -> None:
        self.families: Dict[str, List[bytes]] = {}
        self._lock = threading.Lock()

    def register(self, family: str, fonts: Sequence[LoadedFont]) -> List[bytes]:
        data = [font.data for font in fonts]
        with self._lock:
            self.families.setdefault(family, []).extend(data)
        return data
