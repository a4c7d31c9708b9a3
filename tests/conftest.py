from __future__ import annotations

import json
from typing import Any, List

import pytest

from confectionery_search.catalog.schemas import CatalogRecord


class FakeHTTPResponse:
    """Stand-in for the object returned by ``urllib.request.urlopen``."""

    def __init__(self, body: bytes, status: int = 200):
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


def _record(name: str, url: str = None, image: str = "https://img.example.com/x.jpg") -> CatalogRecord:
    if url is None:
        url = f"https://sysbird.jp/toriko/{name.lower().replace(' ', '-')}/"
    return CatalogRecord(name=name, url=url, image=image)


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def mixed_payload() -> dict:
    """Three displayable items and two incomplete ones."""
    return {
        "count": "5",
        "item": [
            {"name": "Pocky", "url": "https://sysbird.jp/toriko/pocky/", "image": "https://img.example.com/pocky.jpg"},
            {"name": "Koala March", "url": "https://sysbird.jp/toriko/koala/"},
            {"name": "Kinoko no Yama", "url": "https://sysbird.jp/toriko/kinoko/", "image": "https://img.example.com/kinoko.jpg"},
            {"name": "", "url": "https://sysbird.jp/toriko/blank/", "image": "https://img.example.com/blank.jpg"},
            {"name": "Black Thunder", "url": "https://sysbird.jp/toriko/thunder/", "image": "https://img.example.com/thunder.jpg"},
        ],
    }


@pytest.fixture
def serve_json(monkeypatch):
    """Patch ``urlopen`` to answer with ``payload``; returns the captured requests."""

    def _serve(payload: Any, status: int = 200) -> List[Any]:
        requests: List[Any] = []
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")

        def fake_urlopen(request, timeout=None):
            requests.append(request)
            return FakeHTTPResponse(body, status=status)

        monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
        return requests

    return _serve
