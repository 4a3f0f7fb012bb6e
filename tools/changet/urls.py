"""Thread link parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidInput

THREAD_URL_RE = re.compile(
    r"^https://boards\.4chan(nel)?\.org/(?P<board>[0-9A-Za-z]+)/thread/(?P<thread_id>[0-9]+)"
)


@dataclass(frozen=True)
class ThreadRef:
    board: str
    thread_id: str

    @property
    def path(self) -> str:
        return f"{self.board}/{self.thread_id}"

    def __str__(self) -> str:
        return f"/{self.board}/{self.thread_id}"


def parse_thread_url(text: str) -> ThreadRef:
    """Extract the board code and thread id from a pasted thread link.

    Only the start of the string has to match; anything after the numeric
    thread id (slug, query string, fragment) is ignored.  The id is kept as
    a string exactly as it appears in the link.

    Raises:
        InvalidInput: If the text is not a thread link.
    """
    if not isinstance(text, str):
        raise InvalidInput("Not a valid thread URL.")
    m = THREAD_URL_RE.match(text)
    if m is None:
        raise InvalidInput("Not a valid thread URL.")
    return ThreadRef(board=m.group("board"), thread_id=m.group("thread_id"))
