"""Thread, post and download-target records built from 4chan API JSON."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from .errors import DecodeError


def _optional(post: dict, key: str, kind: type) -> Any:
    value = post.get(key)
    if value is None:
        return None
    # bool is an int subclass; a JSON true/false is never a valid tim
    if not isinstance(value, kind) or isinstance(value, bool):
        raise DecodeError(f"Post field {key!r} has unexpected type {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Post:
    """One post of a thread.  Only the attachment fields are kept."""
    filename: str | None = None
    tim: int | None = None
    ext: str | None = None

    @property
    def has_attachment(self) -> bool:
        return self.filename is not None and self.tim is not None and self.ext is not None

    @classmethod
    def from_json(cls, post: Any) -> Post:
        if not isinstance(post, dict):
            raise DecodeError(f"Expected a post object, got {type(post).__name__}")
        tim = _optional(post, "tim", int)
        if tim is not None and tim < 0:
            raise DecodeError(f"Post field 'tim' must be unsigned, got {tim}")
        return cls(
            filename=_optional(post, "filename", str),
            tim=tim,
            ext=_optional(post, "ext", str),
        )


@dataclass(frozen=True)
class Thread:
    posts: tuple[Post, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> Thread:
        """Build a Thread from the decoded ``thread/<no>.json`` payload."""
        if not isinstance(data, dict) or not isinstance(data.get("posts"), list):
            raise DecodeError("Thread metadata has no 'posts' array")
        return cls(posts=tuple(Post.from_json(p) for p in data["posts"]))

    def attachments(self) -> Iterator[Post]:
        """Yield attachment-bearing posts in thread order."""
        return (p for p in self.posts if p.has_attachment)


@dataclass(frozen=True)
class DownloadTarget:
    local_path: Path
    remote_url: str
