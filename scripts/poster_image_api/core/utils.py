"""Utility helpers for Poster Designer."""

from __future__ import annotations

import os
import tempfile
import time
from pathlib import Path
from typing import Iterable, Optional

from .contracts import CredentialLookup


OUTPUT_DIR_NAME = "poster-designer"


def epoch_millis() -> int:
    return int(time.time() * 1000)


def poster_filename() -> str:
    return f"poster-{epoch_millis()}.png"


def output_root(root: Optional[Path] = None) -> Path:
    if root is not None:
        return Path(root)
    env_root = os.getenv("POSTER_DESIGNER_OUTPUTS")
    if env_root:
        return Path(env_root)
    return Path(tempfile.gettempdir())


def ensure_out_dir(root: Optional[Path] = None) -> Path:
    """Create a fresh per-invocation directory named by the current epoch ms.

    Invocations that land on the same millisecond get a numeric suffix.
    """
    parent = (output_root(root) / OUTPUT_DIR_NAME).expanduser().resolve()
    parent.mkdir(parents=True, exist_ok=True)
    stamp = str(epoch_millis())
    candidate = parent / stamp
    attempt = 0
    while True:
        try:
            candidate.mkdir()
            return candidate
        except FileExistsError:
            attempt += 1
            candidate = parent / f"{stamp}-{attempt}"


def env_credentials(name: str) -> Optional[str]:
    return os.environ.get(name)


def lookup_credential(lookup: CredentialLookup, names: Iterable[str]) -> Optional[str]:
    for name in names:
        value = lookup(name)
        if value:
            return value
    return None
