"""Provider alias normalization."""

from __future__ import annotations

import os
import re
from typing import Dict, Optional


PROVIDER_ALIASES: Dict[str, str] = {
    "gemini": "gemini",
    "google": "gemini",
    "gemini-2-5-flash-image": "gemini",
    "nano-banana": "nano-banana-pro",
    "nano-banana-pro": "nano-banana-pro",
    "gemini-3-pro-image-preview": "nano-banana-pro",
    "grok": "grok",
    "xai": "grok",
    "grok-2-image": "grok",
    "openai": "openai",
    "dall-e": "openai",
    "dall-e-3": "openai",
    "dalle": "openai",
}


def normalize_provider(provider: Optional[str], default: str) -> str:
    if not provider:
        return default
    if provider.strip().lower() == "auto":
        env_choice = os.getenv("POSTER_DESIGNER_PROVIDER")
        return normalize_provider(env_choice, default) if env_choice else default
    slug = re.sub(r"[^a-z0-9]+", "-", provider.strip().lower()).strip("-")
    return PROVIDER_ALIASES.get(slug, slug)
