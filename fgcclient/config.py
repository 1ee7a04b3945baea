"""Configuration helpers and .env loading for FGCClient."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

from . import __version__
from .options import DEFAULT_TIMEOUT

DEFAULT_ENV_FILES: tuple[Path, ...] = (
    Path(".env"),
    Path("config/.env"),
)


@lru_cache(maxsize=1)
def load_environment(*, extra_files: Iterable[Path] | None = None) -> dict[str, str]:
    """Load environment variables from .env files once per process."""

    candidates = list(DEFAULT_ENV_FILES)
    if extra_files:
        candidates = [*candidates, *extra_files]

    for path in candidates:
        try:
            if path.exists():
                load_dotenv(path, override=False)
        except OSError:
            continue

    return dict(os.environ)


@dataclass(frozen=True)
class ClientSettings:
    """Defaults a client picks up from the environment."""

    base_url: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    user_agent: str = f"fgcclient/{__version__}"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("FGC_TIMEOUT must be a positive number of seconds")


def load_settings(environ: dict[str, str] | None = None) -> ClientSettings:
    """Build :class:`ClientSettings` from ``FGC_*`` variables."""

    env = os.environ if environ is None else environ
    raw_timeout = env.get("FGC_TIMEOUT", "").strip()
    try:
        timeout = int(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as exc:
        raise ValueError(f"FGC_TIMEOUT must be an integer; received {raw_timeout!r}") from exc

    return ClientSettings(
        base_url=env.get("FGC_BASE_URL", "").strip() or None,
        timeout=timeout,
        user_agent=env.get("FGC_USER_AGENT", "").strip() or f"fgcclient/{__version__}",
    )


__all__ = [
    "ClientSettings",
    "DEFAULT_ENV_FILES",
    "load_environment",
    "load_settings",
]
