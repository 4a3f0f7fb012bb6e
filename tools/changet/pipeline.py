"""Core download logic – orchestrates URL → API → naming → Downloader."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .api import FourChanAPI
from .config import DownloadConfig
from .downloader import Downloader
from .errors import FilesystemError, InvalidOutputPath
from .models import DownloadTarget
from .naming import plan_targets
from .urls import ThreadRef

logger = logging.getLogger("changet.core")


def resolve_output_root(path: Path | None) -> Path:
    """Return the directory thread folders are created under.

    Falls back to the current working directory when no path is given.
    """
    if path is None:
        return Path.cwd()
    if not path.is_dir():
        raise InvalidOutputPath(f"Output filepath {str(path)!r} does not exist or is not a directory.")
    return path


class ThreadDownloader:
    """Orchestrates a full thread download into <root>/<board>/<thread>/."""

    def __init__(self, cfg: DownloadConfig | None = None, api: FourChanAPI | None = None) -> None:
        self.cfg = cfg or DownloadConfig()
        self.root = resolve_output_root(self.cfg.output_root)
        self.api = api or FourChanAPI(self.cfg.fourchan)
        self.downloader = Downloader(self.api)
        self.stats = {"posts": 0, "attachments": 0, "downloaded": 0, "skipped": 0}

    def prepare(self, ref: ThreadRef) -> Path:
        """Create the thread directory, including missing parents."""
        directory = self.root / ref.path
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Cannot create directory {directory}: {exc}") from exc
        return directory

    def run(self, ref: ThreadRef) -> Path:
        """Download every attachment of a thread.

        The first failure aborts the run; files finished before it stay on
        disk and no further downloads are started.

        Returns the thread directory.
        """
        directory = self.prepare(ref)
        thread = self.api.get_thread(ref)
        targets = plan_targets(self.api, ref, thread, directory)
        self.stats["posts"] += len(thread.posts)
        self.stats["attachments"] += len(targets)

        if self.cfg.workers == 1:
            for target in targets:
                self._fetch(target)
        else:
            self._fetch_parallel(targets)

        logger.info(
            "Thread %s complete: %d downloaded, %d skipped",
            ref, self.stats["downloaded"], self.stats["skipped"],
        )
        return directory

    # ── per-file work ────────────────────────────────────────────

    def _fetch(self, target: DownloadTarget) -> None:
        if self.downloader.download(target):
            self.stats["downloaded"] += 1
        else:
            self.stats["skipped"] += 1

    def _fetch_parallel(self, targets: list[DownloadTarget]) -> None:
        # Targets are planned up front, so names never depend on completion order.
        with ThreadPoolExecutor(max_workers=self.cfg.workers) as pool:
            futures = {pool.submit(self.downloader.download, t): t for t in targets}
            try:
                for fut in as_completed(futures):
                    key = "downloaded" if fut.result() else "skipped"
                    self.stats[key] += 1
            except BaseException:
                for fut in futures:
                    fut.cancel()
                raise

    # ── lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        self.api.close()

    def __enter__(self) -> ThreadDownloader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
