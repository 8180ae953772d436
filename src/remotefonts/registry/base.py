from __future__ import annotations

from typing import Any, Protocol, Sequence

from ..models import LoadedFont


class FontRegistry(Protocol):
    def register(self, family: str, fonts: Sequence[LoadedFont]) -> Any:  # pragma: no cover - structural contract
        ...
