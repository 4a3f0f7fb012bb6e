"""Local filename assignment for thread attachments."""

from __future__ import annotations

import logging
from pathlib import Path

from .api import FourChanAPI
from .errors import DecodeError
from .models import DownloadTarget, Thread
from .urls import ThreadRef

logger = logging.getLogger("changet.naming")


class FilenameDisambiguator:
    """Hands out collision-free local names within one thread directory.

    The first occurrence of an original filename keeps its name; later
    occurrences get ``1``, ``2``, ... inserted before the extension, in the
    order ``assign`` is called.  One instance covers one pass over a thread.
    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}
        self._taken: set[str] = set()

    def assign(self, filename: str, ext: str) -> str:
        count = self._counters.get(filename)
        if count is None:
            count = 0
        else:
            count += 1
        name = self._render(filename, count, ext)
        # an original name like "foo1" may already own a generated suffix
        while name in self._taken:
            count += 1
            name = self._render(filename, count, ext)
        self._counters[filename] = count
        self._taken.add(name)
        return name

    @staticmethod
    def _render(filename: str, count: int, ext: str) -> str:
        return f"{filename}{count or ''}{ext}"


def plan_targets(api: FourChanAPI, ref: ThreadRef, thread: Thread, directory: Path) -> list[DownloadTarget]:
    """Compute a DownloadTarget for every attachment, in thread order."""
    names = FilenameDisambiguator()
    targets = []
    for post in thread.attachments():
        local_name = names.assign(post.filename, post.ext)
        targets.append(DownloadTarget(
            local_path=_inside(directory, local_name),
            remote_url=api.media_url(ref.board, post.tim, post.ext),
        ))
    logger.debug("Planned %d download targets for %s", len(targets), ref)
    return targets


def _inside(directory: Path, local_name: str) -> Path:
    """Join a server-supplied name onto the thread directory.

    Raises:
        DecodeError: If the name would land anywhere but directly inside it.
    """
    path = directory / local_name
    if Path(local_name).is_absolute() or path.resolve().parent != directory.resolve():
        raise DecodeError(f"Attachment name {local_name!r} escapes the thread directory")
    return path
