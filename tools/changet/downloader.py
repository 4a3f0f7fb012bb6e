"""Idempotent single-file downloader."""

from __future__ import annotations

import logging

from .api import FourChanAPI
from .errors import FilesystemError
from .models import DownloadTarget

logger = logging.getLogger("changet.downloader")

CHUNK_SIZE = 64 * 1024


class Downloader:
    """Writes remote media to disk, skipping files that already exist."""

    def __init__(self, api: FourChanAPI) -> None:
        self.api = api

    def download(self, target: DownloadTarget) -> bool:
        """Fetch ``target.remote_url`` into ``target.local_path``.

        A regular file already present at the path counts as done, whatever
        its content, and no request is made.  The file is created with an
        exclusive open, so two workers racing for the same path never both
        download it.  Whatever interrupts the transfer, the partial file is
        removed.

        Returns:
            True if the file was downloaded, False if it was skipped.

        Raises:
            NetworkError: If the request fails.
            FilesystemError: If the file cannot be created or written.
        """
        path = target.local_path
        if path.is_file():
            logger.debug("Skipping %s, already on disk", path.name)
            return False
        if path.exists():
            raise FilesystemError(f"{path} exists and is not a regular file")

        try:
            out = open(path, "xb")
        except FileExistsError:
            logger.debug("Skipping %s, created concurrently", path.name)
            return False
        except OSError as exc:
            raise FilesystemError(f"Cannot create {path}: {exc}") from exc

        try:
            with out, self.api.stream(target.remote_url) as resp:
                for chunk in resp.iter_bytes(CHUNK_SIZE):
                    out.write(chunk)
        except BaseException as exc:
            # a truncated file would be skipped as complete on the next run
            path.unlink(missing_ok=True)
            if isinstance(exc, OSError):
                raise FilesystemError(f"Cannot write {path}: {exc}") from exc
            raise

        logger.info("Downloaded %s", path.name)
        return True
