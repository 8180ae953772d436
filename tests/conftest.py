from __future__ import annotations

from typing import Dict, List, Union

import pytest
import requests


def make_response(url: str, body: bytes, status: int = 200) -> requests.Response:
    resp = requests.Response()
    resp.url = url
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Error"
    resp._content = body
    return resp


class FakeSession:
    def __init__(self, http: "FakeHTTP") -> None:
        self.http = http
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False

    def get(self, url, **kwargs):
        self.http.calls.append(url)
        route = self.http.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        body, status = route
        return make_response(url, body, status)


class FakeHTTP:
    """Callable session factory recording every GET."""

    def __init__(self) -> None:
        self.routes: Dict[str, Union[tuple, Exception]] = {}
        self.calls: List[str] = []
        self.sessions: List[FakeSession] = []

    def serve(self, url: str, body: bytes, status: int = 200) -> None:
        self.routes[url] = (body, status)

    def fail(self, url: str, exc: Exception) -> None:
        self.routes[url] = exc

    def __call__(self) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)
        return session


@pytest.fixture
def http() -> FakeHTTP:
    return FakeHTTP()
