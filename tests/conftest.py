from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from changet.api import FourChanAPI
from changet.config import FourChanConfig

API_BASE = "https://a.4cdn.org"
IMAGE_BASE = "https://i.4cdn.org"


class FakeChan:
    """In-memory stand-in for the 4chan API and image host."""

    def __init__(self) -> None:
        self.threads: dict[str, object] = {}
        self.files: dict[str, bytes] = {}
        self.requests: list[str] = []
        self.fail: Callable[[httpx.Request], None] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if self.fail is not None:
            self.fail(request)
        if url in self.threads:
            body = self.threads[url]
            content = body if isinstance(body, bytes) else json.dumps(body).encode()
            return httpx.Response(200, content=content, headers={"Content-Type": "application/json"})
        if url in self.files:
            return httpx.Response(200, content=self.files[url])
        return httpx.Response(404)

    def add_thread(self, board: str, thread_id: str, posts: object) -> None:
        self.threads[f"{API_BASE}/{board}/thread/{thread_id}.json"] = {"posts": posts}

    def add_file(self, board: str, tim: int, ext: str, data: bytes) -> None:
        self.files[f"{IMAGE_BASE}/{board}/{tim}{ext}"] = data

    def media_requests(self) -> list[str]:
        return [u for u in self.requests if u.startswith(IMAGE_BASE)]

    def api_requests(self) -> list[str]:
        return [u for u in self.requests if u.startswith(API_BASE)]


@pytest.fixture
def chan() -> FakeChan:
    return FakeChan()


@pytest.fixture
def api(chan: FakeChan) -> FourChanAPI:
    client = httpx.Client(transport=httpx.MockTransport(chan.handler))
    with FourChanAPI(FourChanConfig(), client=client) as api:
        yield api
