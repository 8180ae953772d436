from __future__ import annotations

from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

DEFAULT_USER_AGENT = "RemoteFonts/1.0"


class TimeoutHTTPAdapter(HTTPAdapter):
    def __init__(self, *args, timeout: Optional[float] = None, **kwargs) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(user_agent: str = DEFAULT_USER_AGENT, timeout: Optional[float] = None) -> requests.Session:
    """Session for a single fetch. Failures surface on the first attempt; retrying is the caller's call."""
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    adapter = TimeoutHTTPAdapter(max_retries=Retry(0, raise_on_status=False), timeout=timeout)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
