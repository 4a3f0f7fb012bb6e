"""Configuration and environment settings for changet."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from None


@dataclass(frozen=True)
class FourChanConfig:
    """4chan API endpoints and transport settings."""
    api_base: str = "https://a.4cdn.org"
    image_base: str = "https://i.4cdn.org"
    timeout: float = 30.0
    user_agent: str = "changet/0.1 (+https://github.com/changet/changet)"

    @classmethod
    def from_env(cls) -> FourChanConfig:
        return cls(
            api_base=os.getenv("CHANGET_API_BASE", "https://a.4cdn.org").rstrip("/"),
            image_base=os.getenv("CHANGET_IMAGE_BASE", "https://i.4cdn.org").rstrip("/"),
            timeout=_env_float("CHANGET_TIMEOUT", 30.0),
        )


@dataclass
class DownloadConfig:
    output_root: Path | None = None
    workers: int = 1
    fourchan: FourChanConfig = field(default_factory=FourChanConfig.from_env)

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
