from __future__ import annotations

import logging
from typing import Callable

import requests

from ..errors import NetworkError
from ..util.http import create_session

LOGGER = logging.getLogger(__name__)


class RemoteFetcher:
    """Single-GET downloader. Each call opens and closes its own session.

    With ``allow_error_status`` the body is returned whatever the status code,
    otherwise a 4xx/5xx response is a ``NetworkError``.
    """

    def __init__(
        self,
        session_factory: Callable[[], requests.Session] = create_session,
        allow_error_status: bool = False,
    ) -> None:
        self.session_factory = session_factory
        self.allow_error_status = allow_error_status

    def fetch(self, url: str) -> bytes:
        try:
            with self.session_factory() as session:
                resp = session.get(url)
                if not self.allow_error_status:
                    resp.raise_for_status()
                elif not resp.ok:
                    LOGGER.warning("Accepting HTTP %s body from %s", resp.status_code, url)
                data = resp.content
        except requests.RequestException as exc:
            raise NetworkError(f"GET {url} failed: {exc}") from exc
        LOGGER.info("Fetched %d bytes from %s", len(data), url)
        return data
