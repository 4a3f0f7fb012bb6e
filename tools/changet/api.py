"""4chan API client – single-shot HTTP fetcher for thread metadata and media."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import httpx

from .config import FourChanConfig
from .errors import DecodeError, NetworkError, ThreadNotFoundError
from .models import Thread
from .urls import ThreadRef

logger = logging.getLogger("changet.api")


class FourChanAPI:
    """Thin wrapper around the 4chan JSON API and image host.

    Every request is attempted exactly once; failures are translated into
    the changet error hierarchy and propagated to the caller.
    """

    def __init__(self, cfg: FourChanConfig | None = None, client: httpx.Client | None = None) -> None:
        self.cfg = cfg or FourChanConfig()
        self._client = client or httpx.Client(
            timeout=self.cfg.timeout,
            headers={"User-Agent": self.cfg.user_agent},
            follow_redirects=True,
        )

    # ── endpoints ────────────────────────────────────────────────

    def thread_url(self, ref: ThreadRef) -> str:
        return f"{self.cfg.api_base}/{ref.board}/thread/{ref.thread_id}.json"

    def media_url(self, board: str, tim: int, ext: str) -> str:
        return f"{self.cfg.image_base}/{board}/{tim}{ext}"

    # ── public API ───────────────────────────────────────────────

    def get_thread(self, ref: ThreadRef) -> Thread:
        """Fetch a full thread (OP + all replies) in thread order."""
        url = self.thread_url(ref)
        logger.debug("GET %s", url)
        try:
            resp = self._client.get(url)
        except httpx.RequestError as exc:
            raise NetworkError(f"Request for {url} failed: {exc}") from exc
        if resp.status_code == 404:
            raise ThreadNotFoundError(f"Thread {ref} not found (404)")
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NetworkError(f"HTTP {resp.status_code} for {url}") from exc
        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(f"Thread metadata from {url} is not valid JSON: {exc}") from exc
        thread = Thread.from_json(data)
        logger.info("Fetched thread %s (%d posts)", ref, len(thread.posts))
        return thread

    @contextmanager
    def stream(self, url: str) -> Iterator[httpx.Response]:
        """Open a streaming GET for a media file.

        httpx errors raised while opening the request or while the caller
        reads the body are both translated into NetworkError.
        """
        logger.debug("GET %s", url)
        try:
            with self._client.stream("GET", url) as resp:
                resp.raise_for_status()
                yield resp
        except httpx.HTTPStatusError as exc:
            raise NetworkError(f"HTTP {exc.response.status_code} for {url}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Request for {url} failed: {exc}") from exc

    # ── lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> FourChanAPI:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
